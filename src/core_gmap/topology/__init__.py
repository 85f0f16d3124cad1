"""Dart store, orbit traversal and structural operators (sew, validity, cells, χ)."""

from .darts import DartStore
from .orbits import orbit, ordered_orbit, unique_by_orbit
from .gmap import GMap
