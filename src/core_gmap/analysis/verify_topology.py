"""
Topology Verification Functions
===============================

Locate map-contract violations and summarize the topology of a map.

validate_gmap() answers the same question as GMap.is_valid() but names
the offending darts, the way validate_mesh() reports mesh contract errors.

CHECKS:
    C1. α0, α1 have no fixed point
    C2. α0, α1, α2 are involutions
    C3. α0∘α2 is an involution
"""

import numpy as np
from typing import Dict, Any, List, Tuple

from ..spec.constants import N_DEGREES
from ..spec.structures import Degree

# Errors reported per check before truncating
MAX_REPORTED = 5


def _report(errors: List[str], bad: np.ndarray, message: str) -> None:
    bad = np.flatnonzero(bad)
    if len(bad) == 0:
        return
    shown = ", ".join(str(int(d)) for d in bad[:MAX_REPORTED])
    more = f" (+{len(bad) - MAX_REPORTED} more)" if len(bad) > MAX_REPORTED else ""
    errors.append(f"{message}: darts {shown}{more}")


def validate_gmap(gmap, strict: bool = False) -> Tuple[bool, List[str]]:
    """
    Validate a map against the 2-G-map definition.

    Args:
        gmap: GMap to check
        strict: If True, raise on any violation

    Returns:
        (is_valid, list of error messages)

    Raises:
        ValueError: strict=True and violations were found
    """
    t = gmap.relations
    idx = np.arange(len(t))
    errors = []

    # C1: fixed points
    for k in (Degree.VERTEX, Degree.EDGE):
        _report(errors, t[:, k] == idx, f"free at α{int(k)}")

    # C2: involutions
    for k in range(N_DEGREES):
        _report(errors, t[t[:, k], k] != idx, f"α{k} is not an involution")

    # C3: α0∘α2 involution
    a0a2 = t[t[:, Degree.VERTEX], Degree.FACE]
    _report(errors, a0a2[a0a2] != idx, "α0∘α2 is not an involution")

    if errors and strict:
        raise ValueError(f"G-map contract violation: {errors}")

    return (len(errors) == 0, errors)


def summarize_topology(gmap) -> Dict[str, Any]:
    """
    Cell counts and surface classification.

    Returns:
        dict with:
            n_darts, V, E, F, chi
            n_components: orbits under ⟨α0, α1, α2⟩
            is_valid, is_closed, is_orientable
            genus: for a closed connected surface, (2 - χ) / 2 if orientable
                   (handles), 2 - χ otherwise (cross-caps); None otherwise
    """
    V, E, F = (gmap.nb_elements(k) for k in range(N_DEGREES))
    chi = V - E + F
    n_components = gmap.nb_connected_components()
    is_closed = gmap.is_closed()
    is_orientable = gmap.is_orientable()

    genus = None
    if is_closed and n_components == 1:
        genus = (2 - chi) // 2 if is_orientable else 2 - chi

    return {
        'n_darts': len(gmap),
        'V': V, 'E': E, 'F': F, 'chi': chi,
        'n_components': n_components,
        'is_valid': gmap.is_valid(),
        'is_closed': is_closed,
        'is_orientable': is_orientable,
        'genus': genus,
    }
