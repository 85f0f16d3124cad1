"""
Incidence Matrices of a Generalized Map
=======================================

Pure combinatorics - NO geometry.

DEFINITIONS:
    d₀: E × V  "gradient" - oriented edge-vertex incidence
    d₁: F × E  "curl" - oriented face-edge incidence

ORIENTATION FROM DARTS:
    Edge e with representative dart r holds the darts

        r, α2(r)            at the SOURCE vertex   (sign +1)
        α0(r), α2(α0(r))    at the TARGET vertex   (sign -1)

    A dart x "traverses" its edge from vertex(x) to vertex(α0(x)); its sign
    says whether that agrees with the edge orientation.

    Face f is walked with ordered_orbit([0, 1], f):
        f, α0(f), α1α0(f), ...
    Even positions of the walk start one edge traversal each, so

        d₁[f, e] = Σ sign(x)  over even-position darts x on edge e

    A face using one edge twice (e.g. a torus glued from one square) gets
    the two contributions summed.

EXACTNESS:
    d₁ d₀ = 0   (a face boundary is a closed walk)

BETTI NUMBERS (real coefficients):
    b₀ = V - rank d₀
    b₁ = E - rank d₀ - rank d₁
    b₂ = F - rank d₁
    χ = b₀ - b₁ + b₂ = V - E + F

REFERENCE: Discrete Exterior Calculus (Desbrun et al., 2005)
"""

import numpy as np
from typing import Dict, Any, Tuple

from ..spec.constants import EPS_CLOSE, FACE_ORBIT
from ..spec.structures import Degree, cell_degrees


def cell_index(gmap, degree) -> np.ndarray:
    """
    Map every dart to the index of its degree-cell.

    Cells are numbered in gmap.elements(degree) order.

    Returns:
        (n_darts,) int array
    """
    index = np.full(len(gmap), -1, dtype=np.int64)
    degrees = cell_degrees(degree)
    for i, rep in enumerate(gmap.elements(degree)):
        index[gmap.orbit(degrees, rep)] = i
    return index


def dart_orientation(gmap) -> np.ndarray:
    """
    Sign of each dart relative to its edge orientation (+1 source, -1 target).

    Returns:
        (n_darts,) int array
    """
    t = gmap.relations
    sign = np.zeros(len(gmap), dtype=np.int64)
    for r in gmap.elements(Degree.EDGE):
        target = t[r, Degree.VERTEX]
        sign[[r, t[r, Degree.FACE]]] = +1
        sign[[target, t[target, Degree.FACE]]] = -1
    return sign


def build_d0(gmap) -> np.ndarray:
    """
    Build gradient operator d₀: C⁰ → C¹.

    DEFINITION:
        d₀[e, v] = -1 if v is the source of edge e
        d₀[e, v] = +1 if v is the target of edge e

    A loop edge (source == target) gives a zero row.

    Returns:
        d0: (E, V) dense incidence matrix
    """
    vid = cell_index(gmap, Degree.VERTEX)
    t = gmap.relations
    edges = gmap.elements(Degree.EDGE)
    d0 = np.zeros((len(edges), int(vid.max()) + 1 if len(vid) else 0))

    for e_idx, r in enumerate(edges):
        d0[e_idx, vid[r]] -= 1                       # source
        d0[e_idx, vid[t[r, Degree.VERTEX]]] += 1     # target

    return d0


def build_d1(gmap) -> np.ndarray:
    """
    Build curl operator d₁: C¹ → C².

    Returns:
        d1: (F, E) incidence matrix

    FAIL-FAST:
        Raises OrbitPreconditionError if a face has a dart free at α0 or α1
        (its boundary walk cannot close).
    """
    eid = cell_index(gmap, Degree.EDGE)
    sign = dart_orientation(gmap)
    faces = gmap.elements(Degree.FACE)
    d1 = np.zeros((len(faces), int(eid.max()) + 1 if len(eid) else 0))

    for f_idx, f in enumerate(faces):
        walk = gmap.ordered_orbit(FACE_ORBIT, f)
        for x in walk[::2]:
            d1[f_idx, eid[x]] += sign[x]

    return d1


def build_incidence_matrices(gmap) -> Tuple[np.ndarray, np.ndarray]:
    """
    Build both incidence matrices d₀ and d₁.

    EXACTNESS THEOREM:
        d₁ d₀ = 0

    Returns:
        d0: (E, V) gradient matrix
        d1: (F, E) curl matrix

    Raises:
        ValueError: if ||d₁d₀|| is not zero
    """
    d0 = build_d0(gmap)
    d1 = build_d1(gmap)

    d1d0 = d1 @ d0
    if not np.allclose(d1d0, 0):
        raise ValueError(f"Exactness failed: ||d₁d₀|| = {np.linalg.norm(d1d0)}")

    return d0, d1


def _rank(m: np.ndarray) -> int:
    if m.size == 0:
        return 0
    return int(np.linalg.matrix_rank(m, tol=EPS_CLOSE * max(m.shape)))


def betti_numbers(d0: np.ndarray, d1: np.ndarray) -> Tuple[int, int, int]:
    """
    Betti numbers (b₀, b₁, b₂) over the reals.

    Args:
        d0: (E, V), d1: (F, E)
    """
    E, V = d0.shape
    F = d1.shape[0]
    r0 = _rank(d0)
    r1 = _rank(d1)
    return V - r0, E - r0 - r1, F - r1


def build_operators_from_gmap(gmap) -> Dict[str, Any]:
    """
    Build incidence operators and homology summary of a valid map.

    Returns:
        dict with:
            d0, d1: incidence matrices
            n_V, n_E, n_F: cell counts
            chi: V - E + F
            betti: (b0, b1, b2)
            vertex_index, edge_index, face_index: dart → cell index arrays

    VERIFICATION:
        χ from counts equals b₀ - b₁ + b₂ (raises ValueError otherwise).
    """
    d0, d1 = build_incidence_matrices(gmap)
    n_E, n_V = d0.shape
    n_F = d1.shape[0]
    b0, b1, b2 = betti_numbers(d0, d1)
    chi = n_V - n_E + n_F

    if b0 - b1 + b2 != chi:
        raise ValueError(f"Euler-Poincaré failed: b0-b1+b2 = {b0 - b1 + b2}, V-E+F = {chi}")

    return {
        'd0': d0,
        'd1': d1,
        'n_V': n_V,
        'n_E': n_E,
        'n_F': n_F,
        'chi': chi,
        'betti': (b0, b1, b2),
        'vertex_index': cell_index(gmap, Degree.VERTEX),
        'edge_index': cell_index(gmap, Degree.EDGE),
        'face_index': cell_index(gmap, Degree.FACE),
    }
