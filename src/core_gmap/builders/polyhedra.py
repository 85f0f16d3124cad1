"""
Generic Polyhedra Construction
==============================

Closed embedded maps for the Platonic test solids.

POLYHEDRA INCLUDED:
    - Tetrahedron (V=4, E=6, F=4, darts=24)
    - Cube (V=8, E=12, F=6, darts=48)
    - Octahedron (V=6, E=12, F=8, darts=48)

All are topological spheres: χ = V - E + F = 2, closed, orientable.
Each dual swaps V and F: tetrahedron ↔ tetrahedron, cube ↔ octahedron.

Faces are ordered counter-clockwise seen from outside (outward normal),
so all faces glue with consistent orientation.
"""

import numpy as np
from typing import List, Tuple

from .polygons import build_from_faces
from ..embedding.geometry import EmbeddedGMap


def _order_face_vertices(vertices: np.ndarray,
                         face_idx: List[int],
                         normal: np.ndarray) -> List[int]:
    """
    Order face vertices counter-clockwise when viewed from normal direction.

    Internal helper function.
    """
    coords = vertices[face_idx]
    centroid = coords.mean(axis=0)
    normal = normal / np.linalg.norm(normal)

    # Build local coordinate frame
    if abs(normal[0]) < 0.9:
        u = np.cross(normal, [1, 0, 0])
    else:
        u = np.cross(normal, [0, 1, 0])
    u = u / np.linalg.norm(u)
    v = np.cross(normal, u)

    angles = [np.arctan2(np.dot(coords[k] - centroid, v),
                         np.dot(coords[k] - centroid, u))
              for k in range(len(face_idx))]
    order = np.argsort(angles)
    return [face_idx[o] for o in order]


def tetrahedron_geometry() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Regular tetrahedron at alternating corners of the cube [-1, 1]³.

    Returns:
        vertices: (4, 3) array
        faces: 4 triangles, outward CCW
    """
    vertices = np.array(sorted([(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)]),
                        dtype=float)
    faces = []
    for face in ([0, 1, 2], [0, 1, 3], [0, 2, 3], [1, 2, 3]):
        # Centroid of a face of a centered solid points outward
        normal = vertices[face].mean(axis=0)
        faces.append(_order_face_vertices(vertices, face, normal))
    return vertices, faces


def cube_geometry() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Cube with corners at (±1, ±1, ±1).

    Returns:
        vertices: (8, 3) array
        faces: 6 squares, outward CCW
    """
    vertices = np.array(sorted((x, y, z) for x in (-1, 1) for y in (-1, 1) for z in (-1, 1)),
                        dtype=float)
    faces = []
    for axis in range(3):
        for sign in (-1, 1):
            face_idx = [i for i, v in enumerate(vertices) if v[axis] == sign]
            normal = np.zeros(3)
            normal[axis] = sign
            faces.append(_order_face_vertices(vertices, face_idx, normal))
    return vertices, faces


def octahedron_geometry() -> Tuple[np.ndarray, List[List[int]]]:
    """
    Octahedron with vertices on the coordinate axes at ±1.

    Returns:
        vertices: (6, 3) array
        faces: 8 triangles (one per octant), outward CCW
    """
    vertices = np.array(sorted([(1, 0, 0), (-1, 0, 0), (0, 1, 0),
                                (0, -1, 0), (0, 0, 1), (0, 0, -1)]), dtype=float)
    faces = []
    for sx in (-1, 1):
        for sy in (-1, 1):
            for sz in (-1, 1):
                octant = np.array([sx, sy, sz], dtype=float)
                face_idx = [i for i, v in enumerate(vertices) if np.dot(v, octant) > 0]
                faces.append(_order_face_vertices(vertices, face_idx, octant))
    return vertices, faces


def build_tetrahedron() -> EmbeddedGMap:
    """Closed tetrahedron: V=4, E=6, F=4, χ=2."""
    return build_from_faces(*tetrahedron_geometry())


def build_cube() -> EmbeddedGMap:
    """Closed cube: V=8, E=12, F=6, χ=2."""
    return build_from_faces(*cube_geometry())


def build_octahedron() -> EmbeddedGMap:
    """Closed octahedron: V=6, E=12, F=8, χ=2."""
    return build_from_faces(*octahedron_geometry())


# Self-test
if __name__ == "__main__":
    print("=" * 60)
    print("POLYHEDRA CONSTRUCTION")
    print("=" * 60)

    for name, builder in [("Tetrahedron", build_tetrahedron),
                          ("Cube", build_cube),
                          ("Octahedron", build_octahedron)]:
        g = builder()
        V, E, F = (g.nb_elements(k) for k in range(3))
        print(f"\n{name}:")
        print(f"  darts={len(g)}, V={V}, E={E}, F={F}, χ={g.euler_characteristic()}")
        print(f"  valid={g.is_valid()}, closed={g.is_closed()}, orientable={g.is_orientable()}")
