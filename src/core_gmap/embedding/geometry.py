"""
Geometric Embedding
===================

A 2-G-map carrying one 3D position per vertex.

GEOMETRY:
    positions        Embedding[np.ndarray], canonical dart per ⟨α1, α2⟩ orbit
    element_center   barycenter of the DISTINCT vertices of a cell

        center(cell) = (1/n) Σ_v position(v),  v over incident_cells(d, k, 0)

    A vertex visited twice along a face boundary (degenerate face) still
    counts once.

FAIL-FAST:
    Positions must be 3-vectors. element_center raises MissingEmbeddingError
    if any vertex of the cell has no position.
"""

import numpy as np
from typing import Optional

from .attributes import Embedding
from ..spec.constants import INITIAL_CAPACITY, VERTEX_ORBIT
from ..spec.structures import MissingEmbeddingError
from ..topology.gmap import GMap


class EmbeddedGMap(GMap):
    """
    GMap with vertex positions.

    Example:
        >>> from core_gmap.builders import build_tetrahedron
        >>> g = build_tetrahedron()
        >>> g.element_center(2, 0).shape
        (3,)
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY):
        super().__init__(capacity)
        self.positions: Embedding[np.ndarray] = Embedding(self, VERTEX_ORBIT)

    def set_position(self, dart, position) -> None:
        """Attach a 3D position to the vertex of dart."""
        p = np.array(position, dtype=float)
        if p.shape != (3,):
            raise ValueError(f"Position must be a 3-vector, got shape {p.shape}")
        self.positions.set_attribute(dart, p)

    def get_position(self, dart) -> Optional[np.ndarray]:
        """Position of the vertex of dart, or None if unset."""
        return self.positions.get_attribute(dart)

    def element_center(self, degree, dart) -> np.ndarray:
        """
        Barycenter of the degree-cell containing dart.

        Args:
            degree: 0 (vertex), 1 (edge) or 2 (face)
            dart: any dart of the cell

        Returns:
            (3,) array

        Raises:
            MissingEmbeddingError: a vertex of the cell has no position
        """
        coords = []
        for v in self.incident_cells(dart, degree, 0):
            p = self.get_position(v)
            if p is None:
                raise MissingEmbeddingError(
                    f"Vertex of dart {v} has no position (cell of degree {int(degree)} at dart {dart})"
                )
            coords.append(p)
        return np.mean(coords, axis=0)

    def vertex_positions(self) -> np.ndarray:
        """
        (V, 3) array of positions, one row per elements(0) representative.

        Unset vertices give NaN rows.
        """
        rows = []
        for v in self.elements(0):
            p = self.get_position(v)
            rows.append(p if p is not None else np.full(3, np.nan))
        return np.array(rows, dtype=float).reshape(-1, 3)

    def dual(self) -> "EmbeddedGMap":
        """Topological dual with vertices at primal face centers."""
        from ..operators.dual import build_dual
        return build_dual(self)

    def copy(self) -> "EmbeddedGMap":
        new = type(self).from_relations(self.relations)
        new.positions = self.positions.copy(store=new)
        return new
