"""
Embedding Attributes
====================

Attach values to CELLS of a map without storing anything per dart.

CANONICAL DART:
    A cell (by default a vertex, orbit ⟨α1, α2⟩) holds many darts. Its value
    lives on exactly one of them: the first dart, in orbit traversal order,
    that already carries a value. If none does, the dart asked about becomes
    the holder.

    Every read and write goes through canonical_dart(), so all darts of one
    vertex resolve to the same stored value.

NOTE:
    Sewing two vertices that BOTH carry a value leaves two entries in the
    merged orbit; reads then resolve to whichever comes first in traversal
    order from the queried dart. Set positions after sewing, or on one side
    only.
"""

from typing import Dict, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from ..spec.constants import VERTEX_ORBIT
from ..spec.structures import as_degrees
from ..topology.orbits import orbit

V = TypeVar("V")


class Embedding(Generic[V]):
    """
    Sparse dart → value mapping, canonicalized per orbit.

    Args:
        store: DartStore / GMap the darts belong to
        degrees: orbit defining the cell, default ⟨α1, α2⟩ (vertex)
    """

    def __init__(self, store, degrees: Iterable = VERTEX_ORBIT):
        self._store = store
        self._degrees = as_degrees(degrees)
        self._values: Dict[int, V] = {}

    @property
    def degrees(self):
        return self._degrees

    def canonical_dart(self, dart) -> int:
        """First dart of dart's orbit holding a value, else dart itself."""
        for d in orbit(self._store, self._degrees, dart):
            if d in self._values:
                return d
        return self._store.check_dart(dart)

    def set_attribute(self, dart, value: V) -> None:
        self._values[self.canonical_dart(dart)] = value

    def get_attribute(self, dart) -> Optional[V]:
        return self._values.get(self.canonical_dart(dart))

    def __contains__(self, dart) -> bool:
        return self.canonical_dart(dart) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[Tuple[int, V]]:
        """(holder dart, value) pairs, one per stored entry."""
        return iter(self._values.items())

    def copy(self, store=None) -> "Embedding[V]":
        """Shallow copy, optionally rebound to another store with the same ids."""
        new = Embedding(self._store if store is None else store, self._degrees)
        new._values = dict(self._values)
        return new
