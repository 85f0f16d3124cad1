"""
Dart and Relation Store
=======================

Pure combinatorics - NO geometry.

STORAGE:
    One dense (capacity, 3) int64 table, row = dart id, column = degree.

        table[d, k] = α_k(d)

    Ids are allocated from a monotonic counter and never reused, so the
    table is index-addressed (no hashing per lookup). Rows past the
    counter are unused capacity; the table doubles when full.

INVARIANTS:
    1. A new dart is FREE at every degree: table[d, k] == d.
    2. Links are MUTUAL: link(k, a, b) sets α_k(a) = b AND α_k(b) = a.
    3. link() only joins two darts that are both free at k, so α_k stays a
       pairing (involution), never many-to-one.

CONCURRENCY:
    create_dart() and link() read-then-write the counter/table. One RLock
    per store serializes them; lookups do not lock.
"""

import operator
import threading
import numpy as np
from typing import Iterable

from ..spec.constants import INITIAL_CAPACITY, N_DEGREES
from ..spec.structures import UnknownDartError, as_degree, as_degrees


class DartStore:
    """
    Allocates darts and owns their α relation triples.

    Example:
        >>> store = DartStore()
        >>> a, b = store.create_dart(), store.create_dart()
        >>> store.link(0, a, b)
        True
        >>> store.relation(0, a) == b
        True
    """

    def __init__(self, capacity: int = INITIAL_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._table = np.empty((capacity, N_DEGREES), dtype=np.int64)
        self._n_darts = 0
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def create_dart(self) -> int:
        """Allocate the next id, free at every degree."""
        with self._lock:
            dart = self._n_darts
            if dart == len(self._table):
                self._grow(2 * len(self._table))
            self._table[dart, :] = dart
            self._n_darts = dart + 1
        return dart

    def create_darts(self, n: int) -> list:
        """Allocate n consecutive darts."""
        return [self.create_dart() for _ in range(n)]

    def _grow(self, capacity: int) -> None:
        table = np.empty((capacity, N_DEGREES), dtype=np.int64)
        table[:self._n_darts] = self._table[:self._n_darts]
        self._table = table

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def check_dart(self, dart) -> int:
        """Return dart as a plain int, or raise UnknownDartError."""
        if isinstance(dart, bool):
            raise UnknownDartError(f"Dart id must be an integer, got {dart!r}")
        try:
            dart = operator.index(dart)
        except TypeError:
            raise UnknownDartError(f"Dart id must be an integer, got {dart!r}") from None
        if dart < 0 or dart >= self._n_darts:
            raise UnknownDartError(
                f"Dart {dart} was never allocated (valid ids: 0..{self._n_darts - 1})"
            )
        return dart

    def relation(self, degree, dart) -> int:
        """
        α_degree(dart).

        Raises:
            InvalidDegreeError: degree not in {0, 1, 2}
            UnknownDartError: dart never allocated in this store
        """
        k = as_degree(degree)
        d = self.check_dart(dart)
        return int(self._table[d, k])

    def relation_path(self, degrees: Iterable, dart) -> int:
        """
        Apply degrees left to right: relation_path([0, 1], d) = α1(α0(d)).

        An empty sequence returns the dart itself.
        """
        ks = as_degrees(degrees)
        d = self.check_dart(dart)
        for k in ks:
            d = int(self._table[d, k])
        return d

    def is_free(self, degree, dart) -> bool:
        """True iff dart is a fixed point of α_degree."""
        return self.relation(degree, dart) == operator.index(dart)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def link(self, degree, d1, d2) -> bool:
        """
        Pair d1 and d2 at degree.

        Only links two DISTINCT darts that are both free at degree.
        Otherwise nothing is mutated and False is returned.

        Returns:
            True if the link was made
        """
        k = as_degree(degree)
        d1 = self.check_dart(d1)
        d2 = self.check_dart(d2)
        if d1 == d2:
            return False
        with self._lock:
            if self._table[d1, k] != d1 or self._table[d2, k] != d2:
                return False
            self._table[d1, k] = d2
            self._table[d2, k] = d1
        return True

    # -------------------------------------------------------------------------
    # Bulk access
    # -------------------------------------------------------------------------

    @property
    def darts(self) -> range:
        """All allocated ids, in allocation order."""
        return range(self._n_darts)

    def __len__(self) -> int:
        return self._n_darts

    def __contains__(self, dart) -> bool:
        try:
            self.check_dart(dart)
        except UnknownDartError:
            return False
        return True

    @property
    def relations(self) -> np.ndarray:
        """Read-only (n_darts, 3) view of the relation table."""
        view = self._table[:self._n_darts]
        view.flags.writeable = False
        return view

    @classmethod
    def from_relations(cls, table):
        """
        Build a store holding exactly the given relation table.

        Args:
            table: (n, 3) integer array, table[d, k] = α_k(d)

        Returns:
            new instance of cls with n darts

        FAIL-FAST:
            Raises ValueError on wrong shape or out-of-range ids.
        """
        table = np.asarray(table)
        if table.ndim != 2 or table.shape[1] != N_DEGREES:
            raise ValueError(f"Relation table must have shape (n, {N_DEGREES}), got {table.shape}")
        if table.size and not np.issubdtype(table.dtype, np.integer):
            raise ValueError(f"Relation table must hold integers, got dtype {table.dtype}")
        n = table.shape[0]
        if n and (table.min() < 0 or table.max() >= n):
            raise ValueError(f"Relation table references ids outside 0..{n - 1}")

        store = cls(capacity=max(n, INITIAL_CAPACITY))
        with store._lock:
            store._table[:n] = table
            store._n_darts = n
        return store

    def copy(self):
        """Independent store with the same relation table."""
        return type(self).from_relations(self.relations)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_darts={self._n_darts})"
