"""
Map builders - construction only, no analysis dependency.

EXPORTS:
- Primitives: build_polygon (adds an n-gon to an existing map)
- Face lists: build_from_faces, build_from_mesh, face_cycles
- Polyhedra: build_tetrahedron, build_cube, build_octahedron, build_square
- Point clouds: build_from_convex_hull
"""

from .polygons import build_polygon, build_from_faces, build_from_mesh, face_cycles, build_square
from .polyhedra import (
    build_tetrahedron,
    build_cube,
    build_octahedron,
    tetrahedron_geometry,
    cube_geometry,
    octahedron_geometry,
)
from .hull import build_from_convex_hull, hull_faces
