"""
Polygon and Face-List Construction
==================================

Build maps from scratch (polygons) or from the usual mesh convention
(vertex array + faces as vertex cycles).

POLYGON LAYOUT:
    An n-gon holds 2n darts d[0..2n-1]:

        α0 pairs (d[2i], d[2i+1])          one edge per pair
        α1 pairs (d[2i+1], d[2i+2 mod 2n]) one corner per pair

    so ordered_orbit([0, 1], d[0]) walks d[0], d[1], ..., d[2n-1].
    For face cycle [v0, ..., v(n-1)]:  d[2i] sits at v(i), d[2i+1] at v(i+1).

GLUING:
    Two faces sharing edge {u, v} are sewn at α2 by pairing their darts
    that sit at min(u, v). Pairing by vertex (not by winding) keeps the
    gluing correct whatever the relative orientation of the two faces.

FAIL-FAST:
    Faces must have >= 3 distinct in-range vertices. An edge used by more
    than 2 faces (non-manifold) raises ValueError. Edges used once stay
    free at α2 (boundary).
"""

import numpy as np
from collections import defaultdict
from typing import List, Sequence, Tuple

from ..embedding.geometry import EmbeddedGMap
from ..spec.structures import Degree


def build_polygon(gmap, n: int) -> int:
    """
    Add an open n-gon face (2n darts) to gmap.

    Edges are closed with link(0, ...), corners with sew(1, ...).

    Args:
        gmap: GMap to extend
        n: number of edges, n >= 1

    Returns:
        first dart d[0] of the polygon
    """
    if n < 1:
        raise ValueError(f"Polygon needs n >= 1 edges, got {n}")

    darts = gmap.create_darts(2 * n)
    for i in range(n):
        gmap.link(Degree.VERTEX, darts[2 * i], darts[2 * i + 1])
    for i in range(n):
        gmap.sew(Degree.EDGE, darts[2 * i + 1], darts[(2 * i + 2) % (2 * n)])

    return darts[0]


def _check_faces(n_vertices: int, faces: Sequence[Sequence[int]]) -> None:
    errors = []
    for f_idx, face in enumerate(faces):
        if len(face) < 3:
            errors.append(f"Face {f_idx}: has < 3 vertices")
        elif len(face) != len(set(face)):
            errors.append(f"Face {f_idx}: has repeated vertices")
        elif any(v < 0 or v >= n_vertices for v in face):
            errors.append(f"Face {f_idx}: vertex index out of bounds [0, {n_vertices - 1}]")
    if errors:
        raise ValueError(f"Face list violation: {errors}")


def build_from_faces(vertices, faces: Sequence[Sequence[int]]) -> EmbeddedGMap:
    """
    Build an embedded map from a vertex array and face cycles.

    Args:
        vertices: (V, 3) array of positions
        faces: list of faces, each a cycle of vertex indices

    Returns:
        EmbeddedGMap, one polygon per face, glued at α2 across shared
        edges, every vertex orbit positioned

    Raises:
        ValueError: bad face, or an edge shared by more than 2 faces
    """
    vertices = np.asarray(vertices, dtype=float)
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise ValueError(f"vertices must have shape (V, 3), got {vertices.shape}")
    faces = [[int(v) for v in face] for face in faces]
    _check_faces(len(vertices), faces)

    gmap = EmbeddedGMap()
    edge_darts = defaultdict(list)   # (min, max) -> darts sitting at min vertex
    placed = []                      # (dart, vertex index)

    for face in faces:
        n = len(face)
        first = build_polygon(gmap, n)
        for i in range(n):
            u, v = face[i], face[(i + 1) % n]
            d_u, d_v = first + 2 * i, first + 2 * i + 1
            edge_darts[(min(u, v), max(u, v))].append(d_u if u < v else d_v)
            placed.append((d_u, u))

    for edge, darts in edge_darts.items():
        if len(darts) > 2:
            raise ValueError(
                f"Edge {edge} is shared by {len(darts)} faces; a 2-map allows at most 2"
            )
        if len(darts) == 2:
            gmap.sew(Degree.FACE, darts[0], darts[1])

    # Positions last: each vertex orbit is complete only after gluing
    for d, v in placed:
        if gmap.get_position(d) is None:
            gmap.set_position(d, vertices[v])

    return gmap


def build_from_mesh(mesh: dict) -> EmbeddedGMap:
    """
    Build an embedded map from a mesh dict with 'V' and 'F' entries.

    Other keys ('E', 'name', ...) are ignored; edges are implied by faces.
    """
    for field in ('V', 'F'):
        if field not in mesh:
            raise ValueError(f"Mesh dict missing required field: {field}")
    return build_from_faces(mesh['V'], mesh['F'])


def face_cycles(gmap) -> List[List[int]]:
    """
    Faces of gmap as cycles of vertex indices (elements(0) numbering).

    Inverse of build_from_faces up to vertex renumbering and face rotation.
    """
    from ..operators.incidence import cell_index

    vid = cell_index(gmap, Degree.VERTEX)
    cycles = []
    for f in gmap.elements(Degree.FACE):
        walk = gmap.ordered_orbit((Degree.VERTEX, Degree.EDGE), f)
        cycles.append([int(vid[d]) for d in walk[::2]])
    return cycles


def build_square(size: float = 1.0) -> Tuple[EmbeddedGMap, int]:
    """
    Single open square face in the z = 0 plane.

    TOPOLOGY:
        V = 4, E = 4, F = 1, χ = 1 (disk), 8 darts all free at α2

    Returns:
        gmap, first dart
    """
    s = float(size)
    vertices = [(0, 0, 0), (s, 0, 0), (s, s, 0), (0, s, 0)]
    gmap = build_from_faces(vertices, [[0, 1, 2, 3]])
    return gmap, 0
