"""
Orbit Traversal
===============

Read-only walks over a DartStore. Orbits are never stored; they are
recomputed on demand.

TWO FORMS:

    orbit(store, degrees, seed)
        Unordered closure. Breadth-first (FIFO deque), first-visit order,
        every dart exactly once.

    ordered_orbit(store, sequence, seed)
        Cyclic walk. Applies sequence[0], sequence[1], ... round-robin and
        records the dart BEFORE each step, until the next dart is the seed
        again. No deduplication.

        For a face (sequence [0, 1]) this is the boundary walk:
            d, α0(d), α1α0(d), α0α1α0(d), ...
        An n-gon gives exactly 2n darts.

CELL CONVENTION:
    The cell enumerated is orthogonal to the degrees used:
        {1, 2} vertex,  {0, 2} edge,  {0, 1} face.

FAIL-FAST (ordered_orbit):
    A seed that is free under a degree of the sequence would stall on
    itself, so it is rejected up front. A step cap guards against a
    corrupted table that never returns to the seed.
"""

from collections import deque
from typing import Iterable, Iterator, List

from ..spec.constants import ORDERED_ORBIT_STEP_FACTOR
from ..spec.structures import OrbitPreconditionError, as_degrees


def orbit(store, degrees: Iterable, seed) -> List[int]:
    """
    Breadth-first closure of seed under the relations in degrees.

    Args:
        store: DartStore (or GMap)
        degrees: iterable of degrees, e.g. (1, 2) for a vertex
        seed: starting dart

    Returns:
        list of dart ids, first-visit order, seed first

    Example:
        >>> orbit(gmap, (0, 1), d)    # every dart bounding d's face
    """
    ks = as_degrees(degrees)
    table = store.relations
    seed = store.check_dart(seed)

    visited = set()
    result = []
    queue = deque([seed])
    while queue:
        d = queue.popleft()
        if d in visited:
            continue
        visited.add(d)
        result.append(d)
        for k in ks:
            queue.append(int(table[d, k]))

    return result


def ordered_orbit(store, sequence: Iterable, seed) -> List[int]:
    """
    Cyclic walk from seed applying sequence round-robin.

    Args:
        store: DartStore (or GMap)
        sequence: non-empty ordered degrees, e.g. [0, 1] for a face boundary
        seed: starting dart, must be linked at every degree in sequence

    Returns:
        list of darts visited before each step; first entry is seed.
        Repeats are kept.

    Raises:
        OrbitPreconditionError: empty sequence, seed free under a degree of
            the sequence, or the walk exceeds its step cap
    """
    ks = as_degrees(sequence)
    seed = store.check_dart(seed)
    if not ks:
        raise OrbitPreconditionError("ordered_orbit needs a non-empty degree sequence")

    table = store.relations
    free = sorted({int(k) for k in ks if table[seed, k] == seed})
    if free:
        raise OrbitPreconditionError(
            f"Seed dart {seed} is free at degree(s) {free}; "
            f"the walk {list(map(int, ks))} cannot return to it"
        )

    max_steps = ORDERED_ORBIT_STEP_FACTOR * len(store) * len(ks)
    n = len(ks)
    result = []
    current = seed
    i = 0
    while True:
        result.append(current)
        current = int(table[current, ks[i % n]])
        i += 1
        if current == seed:
            break
        if i >= max_steps:
            raise OrbitPreconditionError(
                f"ordered_orbit from dart {seed} did not close after {max_steps} steps; "
                f"relation table is not a set of pairings"
            )

    return result


def unique_by_orbit(store, darts: Iterable, degrees: Iterable) -> Iterator[int]:
    """
    Filter darts down to one per orbit under degrees.

    Yields the first dart met of each orbit, in the order of darts.
    """
    ks = as_degrees(degrees)
    seen = set()
    for d in darts:
        if d in seen:
            continue
        yield d
        seen.update(orbit(store, ks, d))
