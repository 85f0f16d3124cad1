"""
Analysis functions - depend on topology layer.

Separated from builders to maintain clean layering:
    builders → embedding → topology → spec
    analysis → topology → spec

Includes:
- verify_topology: localized validity report, topology summary
"""

from .verify_topology import validate_gmap, summarize_topology
