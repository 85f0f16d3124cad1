"""
Convex Hull Surfaces
====================

Closed triangulated sphere from a point cloud via scipy.spatial.ConvexHull.

CONSTRUCTION:
    hull.simplices   triangles (indices into the input points)
    hull.equations   facet planes [n | offset], n pointing OUTWARD

    Each triangle is rewound so its right-hand normal agrees with the
    outward facet normal, then passed to build_from_faces. Points strictly
    inside the hull never become darts.

TOPOLOGY:
    Always a closed orientable sphere: χ = 2, F = 2V - 4 (all triangles).
    Coplanar facets come back already triangulated by Qhull.
"""

import numpy as np
from scipy.spatial import ConvexHull

from .polygons import build_from_faces
from ..embedding.geometry import EmbeddedGMap


def hull_faces(points) -> list:
    """
    Outward-wound triangles of the convex hull of points.

    Args:
        points: (N, 3) array, N >= 4, not all coplanar

    Returns:
        list of [i, j, k] index triples
    """
    points = np.asarray(points, dtype=float)
    if points.ndim != 2 or points.shape[1] != 3:
        raise ValueError(f"points must have shape (N, 3), got {points.shape}")
    if len(points) < 4:
        raise ValueError(f"Convex hull in 3D needs N >= 4 points, got {len(points)}")

    hull = ConvexHull(points)
    faces = []
    for simplex, equation in zip(hull.simplices, hull.equations):
        i, j, k = (int(x) for x in simplex)
        normal = np.cross(points[j] - points[i], points[k] - points[i])
        if np.dot(normal, equation[:3]) < 0:
            j, k = k, j
        faces.append([i, j, k])
    return faces


def build_from_convex_hull(points) -> EmbeddedGMap:
    """
    Closed embedded map of the convex hull of points.

    Raises:
        ValueError: fewer than 4 points or wrong shape
        scipy.spatial.QhullError: degenerate (coplanar) input
    """
    points = np.asarray(points, dtype=float)
    return build_from_faces(points, hull_faces(points))
