"""Map operators - dual construction, incidence matrices, Betti numbers."""

from .dual import (
    build_dual,
    dual_relations,
)

from .incidence import (
    build_d0,
    build_d1,
    build_incidence_matrices,
    betti_numbers,
    build_operators_from_gmap,
    cell_index,
)
