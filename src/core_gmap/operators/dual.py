"""
Dual Construction
=================

DEFINITION:
    For a 2-G-map (α0, α1, α2) the dual map has the same darts and

        α0* = α2,   α1* = α1,   α2* = α0

    i.e. the relation table with columns 0 and 2 swapped. Vertex orbits
    ⟨α1*, α2*⟩ = ⟨α1, α0⟩ are primal faces, so vertices and faces exchange
    roles; edges ⟨α0*, α2*⟩ = ⟨α2, α0⟩ are unchanged.

    Swapping twice is the identity:  dual(dual(M)) has M's relation table.

GEOMETRY:
    Dual vertices sit at primal face barycenters. For each primal face and
    each dart of its ⟨α0, α1⟩ orbit, the face center is written as that
    dart's position in the new map (all those darts form ONE dual vertex,
    so they resolve to a single stored value).

NOTE:
    A primal boundary dart (free at α2) is free at α0* in the dual, so the
    dual of an open surface is not a valid map.
"""

import numpy as np

from ..embedding.geometry import EmbeddedGMap
from ..spec.constants import FACE_ORBIT
from ..spec.structures import Degree

DUAL_PERMUTATION = (Degree.FACE, Degree.EDGE, Degree.VERTEX)


def dual_relations(table) -> np.ndarray:
    """(n, 3) relation table with α0 and α2 exchanged."""
    table = np.asarray(table)
    return table[:, list(DUAL_PERMUTATION)]


def build_dual(gmap) -> EmbeddedGMap:
    """
    Build the dual of gmap.

    Args:
        gmap: GMap or EmbeddedGMap

    Returns:
        EmbeddedGMap with the same dart ids and counter. Positions are set
        only when gmap is an EmbeddedGMap.

    Raises:
        MissingEmbeddingError: gmap is embedded but a face vertex has no
            position
    """
    dual = EmbeddedGMap.from_relations(dual_relations(gmap.relations))

    if isinstance(gmap, EmbeddedGMap):
        for face in gmap.elements(Degree.FACE):
            center = gmap.element_center(Degree.FACE, face)
            for d in gmap.orbit(FACE_ORBIT, face):
                dual.set_position(d, center)

    return dual
