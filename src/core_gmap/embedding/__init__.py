"""Attribute attachment to cells and the 3D-positioned map."""

from .attributes import Embedding
from .geometry import EmbeddedGMap
