"""
Map Contract - degrees and failure types
========================================

Every operation in core_gmap addresses a relation by DEGREE and a dart by
its integer id. This module owns both contracts:

    Degree      - the only three relation indices a 2-map has
    *Error      - precondition failures (fail fast, subclass ValueError)
    *Warning    - soft anomalies that do not abort an operation

Two classes of failure:
    1. Misuse (bad degree, unknown dart, ordered walk from a free seed)
       → raise. These are programmer errors.
    2. Expected structural outcomes (endpoint already linked, cell sizes
       differ, map not valid) → returned as bool by the operator itself.
"""

import operator
from enum import IntEnum
from typing import Iterable, Tuple

from .constants import N_DEGREES


class Degree(IntEnum):
    """
    Relation index of a generalized 2-map.

        VERTEX (0): α0 pairs the two darts of an edge at opposite vertices
        EDGE   (1): α1 pairs the two darts of a face corner
        FACE   (2): α2 pairs the darts of two faces glued along an edge
    """
    VERTEX = 0
    EDGE = 1
    FACE = 2


class InvalidDegreeError(ValueError):
    """Degree outside {0, 1, 2}."""


class UnknownDartError(ValueError):
    """Dart id never allocated in this map."""


class OrbitPreconditionError(ValueError):
    """Ordered traversal cannot return to its seed."""


class MissingEmbeddingError(ValueError):
    """A cell vertex has no attached position."""


class PartialSewWarning(UserWarning):
    """A pairwise link inside sew() was refused (endpoint already linked)."""


def as_degree(value) -> Degree:
    """
    Coerce value to a Degree, failing fast on anything else.

    Args:
        value: Degree or plain int in {0, 1, 2}

    Returns:
        Degree member

    Raises:
        InvalidDegreeError: bools, non-integers, out-of-range integers
    """
    # bool is an int subclass; Degree(True) would silently give EDGE
    if isinstance(value, bool):
        raise InvalidDegreeError(f"Degree must be 0, 1 or 2, got {value!r}")
    try:
        return Degree(operator.index(value))
    except (ValueError, TypeError):
        raise InvalidDegreeError(
            f"Degree must be 0, 1 or 2, got {value!r}"
        ) from None


def as_degrees(values: Iterable) -> Tuple[Degree, ...]:
    """Coerce an iterable of degrees, keeping order and repeats."""
    return tuple(as_degree(v) for v in values)


def cell_degrees(degree) -> Tuple[Degree, ...]:
    """
    Degrees whose orbit enumerates a cell of the given dimension.

    The cell is orthogonal to the relations used:
        cell_degrees(0) → (1, 2)   vertex
        cell_degrees(1) → (0, 2)   edge
        cell_degrees(2) → (0, 1)   face
    """
    degree = as_degree(degree)
    return tuple(Degree(k) for k in range(N_DEGREES) if k != degree)
