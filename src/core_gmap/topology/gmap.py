"""
Generalized 2-Map
=================

Structural operators on top of the dart store and the orbit engine.

DEFINITIONS:
    A 2-G-map is a set of darts D with three involutions α0, α1, α2 such
    that:
        1. α0 and α1 have NO fixed points  (every dart is on an edge and
           on a face corner)
        2. α2 MAY have fixed points         (boundary darts)
        3. α0∘α2 is an involution           (gluing two faces along an edge
           is consistent at both ends of the edge)

    Cells are orbits (see orbits.py):
        vertex ↔ ⟨α1, α2⟩,  edge ↔ ⟨α0, α2⟩,  face ↔ ⟨α0, α1⟩

EULER CHARACTERISTIC:
    χ = V - E + F
    Closed sphere-like surfaces (tetrahedron, cube, ...) give χ = 2.

SEWING:
    sew(1, a, b)  links one face corner
    sew(0, a, b)  pairs ⟨α2⟩ orbits position-by-position at α0
    sew(2, a, b)  pairs ⟨α0⟩ orbits position-by-position at α2

    Positional pairing is purely index-based; the caller presents both
    cells in compatible orientation. A size mismatch returns False before
    any link is made.

VALIDITY:
    is_valid() checks the FULL definition above (all three involutions and
    the α0∘α2 involution), not only the fixed-point condition on α0/α1.
"""

import warnings
import numpy as np
from collections import deque
from typing import List, Tuple

from .darts import DartStore
from .orbits import orbit, ordered_orbit, unique_by_orbit
from ..spec.constants import CONNECTED_ORBIT, N_DEGREES
from ..spec.structures import Degree, PartialSewWarning, as_degree, cell_degrees


class GMap(DartStore):
    """
    Generalized map of dimension 2.

    Example:
        >>> g = GMap()
        >>> a, b = g.create_dart(), g.create_dart()
        >>> g.link(0, a, b)
        True
        >>> g.orbit([0], a)
        [0, 1]
    """

    # -------------------------------------------------------------------------
    # Orbits
    # -------------------------------------------------------------------------

    def orbit(self, degrees, dart) -> List[int]:
        """Unordered closure of dart under degrees (see orbits.orbit)."""
        return orbit(self, degrees, dart)

    def ordered_orbit(self, sequence, dart) -> List[int]:
        """Cyclic walk of dart under sequence (see orbits.ordered_orbit)."""
        return ordered_orbit(self, sequence, dart)

    def cell(self, degree, dart) -> List[int]:
        """All darts of the degree-cell containing dart."""
        return orbit(self, cell_degrees(degree), dart)

    # -------------------------------------------------------------------------
    # Sewing
    # -------------------------------------------------------------------------

    def sew(self, degree, d1, d2) -> bool:
        """
        Glue the cells of d1 and d2 along degree.

        Args:
            degree: 0, 1 or 2
            d1, d2: darts presenting the two cells in matching orientation

        Returns:
            degree 1: result of link(1, d1, d2)
            degree 0/2: False if the paired orbits differ in size (nothing
                mutated), True otherwise

        WARNS:
            PartialSewWarning for each pairwise link refused because an
            endpoint was already linked. The call still returns True.
        """
        k = as_degree(degree)
        if k == Degree.EDGE:
            return self.link(k, d1, d2)

        # α0 pairs ⟨α2⟩ orbits, α2 pairs ⟨α0⟩ orbits
        across = Degree.FACE if k == Degree.VERTEX else Degree.VERTEX
        with self._lock:
            orbit1 = orbit(self, (across,), d1)
            orbit2 = orbit(self, (across,), d2)
            if len(orbit1) != len(orbit2):
                return False
            for a, b in zip(orbit1, orbit2):
                if not self.link(k, a, b):
                    warnings.warn(
                        f"sew({int(k)}, {d1}, {d2}): darts {a} and {b} not linked "
                        f"(α{int(k)}({a})={self.relation(k, a)}, α{int(k)}({b})={self.relation(k, b)})",
                        PartialSewWarning,
                        stacklevel=2,
                    )
        return True

    # -------------------------------------------------------------------------
    # Validity
    # -------------------------------------------------------------------------

    def is_valid(self) -> bool:
        """
        True iff the map satisfies the definition of a 2-G-map.

        Never raises. Use analysis.validate_gmap() to locate violations.
        """
        t = self.relations
        idx = np.arange(len(t))

        if np.any(t[:, Degree.VERTEX] == idx) or np.any(t[:, Degree.EDGE] == idx):
            return False
        for k in range(N_DEGREES):
            if np.any(t[t[:, k], k] != idx):
                return False
        a0a2 = t[t[:, Degree.VERTEX], Degree.FACE]
        return bool(np.all(a0a2[a0a2] == idx))

    def is_closed(self) -> bool:
        """True iff no dart is free at α2 (no boundary)."""
        t = self.relations
        return bool(np.all(t[:, Degree.FACE] != np.arange(len(t))))

    def boundary_darts(self) -> List[int]:
        """Darts free at α2."""
        t = self.relations
        return [int(d) for d in np.flatnonzero(t[:, Degree.FACE] == np.arange(len(t)))]

    def is_orientable(self) -> bool:
        """
        True iff darts can be 2-colored so every α link joins opposite colors.

        Free darts (fixed points) impose no constraint.
        """
        t = self.relations
        color = np.full(len(t), -1, dtype=np.int8)
        for start in range(len(t)):
            if color[start] >= 0:
                continue
            color[start] = 0
            queue = deque([start])
            while queue:
                d = queue.popleft()
                for k in range(N_DEGREES):
                    n = int(t[d, k])
                    if n == d:
                        continue
                    if color[n] < 0:
                        color[n] = 1 - color[d]
                        queue.append(n)
                    elif color[n] == color[d]:
                        return False
        return True

    # -------------------------------------------------------------------------
    # Cells
    # -------------------------------------------------------------------------

    def elements(self, degree) -> List[int]:
        """
        One representative dart per distinct degree-cell.

        Representatives are the lowest id of each cell, in increasing order.
        """
        return list(unique_by_orbit(self, self.darts, cell_degrees(degree)))

    def nb_elements(self, degree) -> int:
        """Number of distinct degree-cells."""
        return len(self.elements(degree))

    def incident_cells(self, dart, degree, incident_degree) -> List[int]:
        """
        One dart per incident_degree-cell touching the degree-cell of dart.

        Every returned dart lies in both cells.

        Example:
            incident_cells(d, 2, 0) → one dart per vertex of d's face
        """
        marked = set()
        result = []
        incident = cell_degrees(incident_degree)
        for d in self.cell(degree, dart):
            if d in marked:
                continue
            result.append(d)
            marked.update(orbit(self, incident, d))
        return result

    def adjacent_cells(self, dart, degree) -> List[int]:
        """
        One dart per degree-cell adjacent to the degree-cell of dart.

        Adjacency crosses α_degree: the other end of an edge for vertices,
        the next edge around a corner for edges, the face across an edge for
        faces. The cell itself is never reported.
        """
        k = as_degree(degree)
        members = self.cell(k, dart)
        inside = set(members)
        neighbors = [self.relation(k, d) for d in members]
        neighbors = [n for n in neighbors if n not in inside]
        return list(unique_by_orbit(self, neighbors, cell_degrees(k)))

    def cell_degree(self, dart, degree) -> int:
        """
        Number of (degree+1)-cells incident to the degree-cell of dart.

        Vertex (0): incident edges. Edge (1): incident faces (1 on boundary).

        Raises:
            ValueError: degree 2, a 2-map has no 3-cells
        """
        k = as_degree(degree)
        if k == Degree.FACE:
            raise ValueError("cell_degree is undefined for faces in a 2-map (no 3-cells)")
        return len(self.incident_cells(dart, k, k + 1))

    def nb_connected_components(self) -> int:
        """Number of orbits under ⟨α0, α1, α2⟩."""
        return sum(1 for _ in unique_by_orbit(self, self.darts, CONNECTED_ORBIT))

    def euler_characteristic(self) -> int:
        """χ = V - E + F."""
        return sum((-1) ** k * self.nb_elements(k) for k in range(N_DEGREES))

    # -------------------------------------------------------------------------
    # Display
    # -------------------------------------------------------------------------

    def relation_table(self) -> List[Tuple[int, int, int, int]]:
        """Rows (dart, α0, α1, α2) in id order."""
        return [(d,) + tuple(int(x) for x in row) for d, row in enumerate(self.relations)]

    def __str__(self) -> str:
        lines = [f"{type(self).__name__}: {len(self)} darts"]
        lines += [f"  {d:4d}: {a0:4d} {a1:4d} {a2:4d}" for d, a0, a1, a2 in self.relation_table()]
        return "\n".join(lines)
