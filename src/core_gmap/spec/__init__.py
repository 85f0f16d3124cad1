"""Constants, degree contract and failure types."""

from .constants import (
    EPS_CLOSE,
    N_DEGREES,
    INITIAL_CAPACITY,
    ORDERED_ORBIT_STEP_FACTOR,
    DEFAULT_SEED,
    VERTEX_ORBIT,
    EDGE_ORBIT,
    FACE_ORBIT,
    CONNECTED_ORBIT,
)

from .structures import (
    Degree,
    InvalidDegreeError,
    UnknownDartError,
    OrbitPreconditionError,
    MissingEmbeddingError,
    PartialSewWarning,
    as_degree,
    as_degrees,
    cell_degrees,
)
