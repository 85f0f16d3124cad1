"""
CORE_GMAP - Generalized maps for cellular subdivisions
======================================================

Pure combinatorial topology. NO rendering. NO file I/O.

Structure:
    spec/       - Constants, Degree, failure types
    topology/   - Dart store, orbits, sew / validity / cells / χ (GMap)
    embedding/  - Per-cell attributes, 3D positions (EmbeddedGMap)
    operators/  - Dual construction, incidence matrices d₀/d₁
    builders/   - Polygons, polyhedra, face lists, convex hulls
    analysis/   - Validity report, topology summary

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"core_gmap requires Python >= 3.9, got {sys.version}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"core_gmap requires numpy >= 1.20, got {np.__version__}")

# scipy version check (ConvexHull builder)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"core_gmap requires scipy >= 1.11, got {scipy.__version__}")

from . import spec
from . import topology
from . import embedding
from . import operators
from . import builders
from . import analysis

from .spec import Degree
from .topology import DartStore, GMap
from .embedding import Embedding, EmbeddedGMap
from .operators import build_dual

__version__ = "0.1.0"
