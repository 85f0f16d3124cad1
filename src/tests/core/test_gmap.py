"""
Comprehensive Tests for GMap
============================

Tests the structural operators and topological invariants:
- Sewing (all-or-nothing size check, partial-link warnings)
- Validity (full 2-G-map definition)
- Cell enumeration, incidence, adjacency
- Euler characteristic, orientability, genus

Run: python -m pytest tests/core/test_gmap.py -v
"""

import numpy as np
import pytest
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from core_gmap.topology import GMap
from core_gmap.builders import (
    build_polygon,
    build_from_faces,
    build_square,
    build_tetrahedron,
    build_cube,
    build_octahedron,
)
from core_gmap.analysis import validate_gmap, summarize_topology
from core_gmap.spec import PartialSewWarning


def torus_faces(n=3):
    """n×n quad grid with periodic identification (needs n >= 3)."""
    vertices = [(i, j, 0.0) for i in range(n) for j in range(n)]
    faces = []
    for i in range(n):
        for j in range(n):
            faces.append([i * n + j,
                          ((i + 1) % n) * n + j,
                          ((i + 1) % n) * n + (j + 1) % n,
                          i * n + (j + 1) % n])
    return vertices, faces


def mobius_faces():
    """Five-triangle Möbius band: triangles (i, i+1, i+2) mod 5."""
    vertices = [(np.cos(2 * np.pi * i / 5), np.sin(2 * np.pi * i / 5), 0.0) for i in range(5)]
    faces = [[i, (i + 1) % 5, (i + 2) % 5] for i in range(5)]
    return vertices, faces


# =============================================================================
# TEST A: Sewing
# =============================================================================

def test_sew_degree1_is_single_link():
    """sew(1, ...) returns the link result."""
    g = GMap()
    a, b, c = g.create_darts(3)
    assert g.sew(1, a, b)
    assert g.relation(1, a) == b
    assert not g.sew(1, a, c), "a already bound at α1"


def test_sew_degree2_glues_edges():
    """sew(2, a, b) pairs ⟨α0⟩(a) with ⟨α0⟩(b) position by position."""
    g = GMap()
    t = build_polygon(g, 3)
    u = build_polygon(g, 3)

    assert g.sew(2, t, u)
    assert g.relation(2, t) == u
    assert g.relation(2, g.relation(0, t)) == g.relation(0, u)
    # Only the glued edge changed
    assert len(g.boundary_darts()) == 12 - 4


def test_sew_degree0_pairs_face_orbits():
    """sew(0, a, b) pairs ⟨α2⟩(a) with ⟨α2⟩(b) at α0."""
    g = GMap()
    a, b, c, d = g.create_darts(4)
    g.link(2, a, c)
    g.link(2, b, d)

    assert g.sew(0, a, b)
    assert g.relation(0, a) == b
    assert g.relation(0, c) == d


@pytest.mark.parametrize("degree", [0, 2])
def test_sew_size_mismatch_no_mutation(degree):
    """Orbit sizes differ → False, nothing linked (all-or-nothing)."""
    g = GMap()
    across = 2 if degree == 0 else 0
    a, a2, b = g.create_darts(3)
    g.link(across, a, a2)           # ⟨α_across⟩(a) has 2 darts, b has 1

    before = g.relations.copy()
    assert not g.sew(degree, a, b)
    assert np.array_equal(g.relations, before)


def test_sew_triangle_square_mismatch():
    """Triangle edge against an unpaired dart of a square: sizes 2 vs 1."""
    g = GMap()
    tri = build_polygon(g, 3)
    sq = build_polygon(g, 4)
    lone = g.create_dart()

    before = g.relations.copy()
    assert not g.sew(2, tri, lone)
    assert not g.sew(2, lone, sq)
    assert np.array_equal(g.relations, before)


def test_sew_partial_links_warn_but_succeed():
    """Refused pairwise links warn and do not abort the call."""
    g = GMap()
    t = build_polygon(g, 3)
    u = build_polygon(g, 3)
    g.sew(2, t, u)

    v = build_polygon(g, 3)
    before = g.relations.copy()
    with pytest.warns(PartialSewWarning):
        assert g.sew(2, t, v)
    assert np.array_equal(g.relations, before), "every pairwise link was refused"


# =============================================================================
# TEST B: Validity
# =============================================================================

def test_valid_empty_map():
    assert GMap().is_valid()


def test_invalid_free_at_0_or_1():
    """Any dart free at α0 or α1 → invalid."""
    g = GMap()
    g.create_dart()
    assert not g.is_valid()

    g = GMap()
    a, b = g.create_darts(2)
    g.link(0, a, b)
    assert not g.is_valid(), "still free at α1"

    g.link(1, a, b)
    assert g.is_valid()


def test_open_polygon_valid():
    """Boundary darts (free at α2) are allowed."""
    g = GMap()
    build_polygon(g, 6)
    assert g.is_valid()
    assert not g.is_closed()


@pytest.mark.parametrize("builder", [build_tetrahedron, build_cube, build_octahedron])
def test_polyhedra_valid_and_closed(builder):
    g = builder()
    assert g.is_valid()
    assert g.is_closed()
    assert g.boundary_darts() == []
    ok, errors = validate_gmap(g)
    assert ok and errors == []


def test_invalid_a0a2_composite():
    """α2 glue at one end of an edge only → α0∘α2 not an involution."""
    g = GMap()
    p = build_polygon(g, 1)      # darts 0, 1
    q = build_polygon(g, 1)      # darts 2, 3
    g.link(2, p, q)              # bypasses sew: α2(α0(p)) stays free

    assert not g.is_valid()
    ok, errors = validate_gmap(g)
    assert not ok
    assert any("α0∘α2" in e for e in errors), errors


def test_validate_gmap_localizes_free_darts():
    g = GMap()
    build_polygon(g, 3)
    lone = g.create_dart()

    ok, errors = validate_gmap(g)
    assert not ok
    assert errors[0] == f"free at α0: darts {lone}"
    with pytest.raises(ValueError, match="G-map contract violation"):
        validate_gmap(g, strict=True)


def test_validate_gmap_truncates_long_reports():
    g = GMap()
    g.create_darts(8)
    ok, errors = validate_gmap(g)
    assert "(+3 more)" in errors[0]


# =============================================================================
# TEST C: Cells
# =============================================================================

@pytest.mark.parametrize("builder,counts", [
    (build_tetrahedron, (4, 6, 4)),
    (build_cube, (8, 12, 6)),
    (build_octahedron, (6, 12, 8)),
])
def test_cell_counts(builder, counts):
    g = builder()
    assert tuple(g.nb_elements(k) for k in range(3)) == counts
    assert len(g) == 4 * counts[1], "each edge holds 4 darts on a closed surface"


def test_elements_one_dart_per_cell():
    """elements(k) darts lie in pairwise distinct cells covering all darts."""
    g = build_cube()
    for k in range(3):
        reps = g.elements(k)
        covered = [set(g.cell(k, r)) for r in reps]
        assert sum(len(c) for c in covered) == len(g)
        assert set().union(*covered) == set(g.darts)


def test_incident_cells():
    g = build_cube()
    for f in g.elements(2):
        assert len(g.incident_cells(f, 2, 0)) == 4, "square face has 4 vertices"
        assert len(g.incident_cells(f, 2, 1)) == 4, "square face has 4 edges"
    for v in g.elements(0):
        verts_faces = g.incident_cells(v, 0, 2)
        assert len(verts_faces) == 3
        for d in verts_faces:
            assert d in g.cell(0, v), "returned darts lie in both cells"


def test_adjacent_cells():
    g = build_cube()
    for f in g.elements(2):
        assert len(g.adjacent_cells(f, 2)) == 4
    for v in g.elements(0):
        assert len(g.adjacent_cells(v, 0)) == 3
    for e in g.elements(1):
        # 2 edges at each end within each of the 2 faces, 4 distinct
        assert len(g.adjacent_cells(e, 1)) == 4

    sq, d = build_square()
    assert sq.adjacent_cells(d, 2) == [], "lone face has no neighbor"


def test_cell_degree():
    g = build_tetrahedron()
    for v in g.elements(0):
        assert g.cell_degree(v, 0) == 3
    for e in g.elements(1):
        assert g.cell_degree(e, 1) == 2

    sq, d = build_square()
    assert sq.cell_degree(d, 1) == 1, "boundary edge bounds one face"
    assert sq.cell_degree(d, 0) == 2

    with pytest.raises(ValueError):
        g.cell_degree(0, 2)


# =============================================================================
# TEST D: Euler characteristic and classification
# =============================================================================

@pytest.mark.parametrize("builder", [build_tetrahedron, build_cube, build_octahedron])
def test_euler_sphere(builder):
    """Closed polyhedra: χ = V - E + F = 2."""
    assert builder().euler_characteristic() == 2


def test_euler_tetrahedron_counts():
    g = build_tetrahedron()
    V, E, F = (g.nb_elements(k) for k in range(3))
    assert (V, E, F) == (4, 6, 4)
    assert g.euler_characteristic() == 4 - 6 + 4 == 2


@pytest.mark.parametrize("n", [1, 3, 8])
def test_euler_polygon_disk(n):
    g = GMap()
    build_polygon(g, n)
    assert g.euler_characteristic() == 1


def test_torus():
    g = build_from_faces(*torus_faces())
    summary = summarize_topology(g)

    assert (summary['V'], summary['E'], summary['F']) == (9, 18, 9)
    assert summary['chi'] == 0
    assert summary['is_valid'] and summary['is_closed'] and summary['is_orientable']
    assert summary['genus'] == 1
    print(f"✓ Torus: χ={summary['chi']}, genus={summary['genus']}")


def test_mobius_band_not_orientable():
    g = build_from_faces(*mobius_faces())
    summary = summarize_topology(g)

    assert (summary['V'], summary['E'], summary['F']) == (5, 10, 5)
    assert summary['chi'] == 0
    assert summary['is_valid']
    assert not summary['is_closed']
    assert not summary['is_orientable']
    assert summary['genus'] is None


def test_sphere_summary():
    summary = summarize_topology(build_octahedron())
    assert summary['genus'] == 0
    assert summary['n_components'] == 1
    assert summary['n_darts'] == 48


def test_connected_components():
    g = GMap()
    build_polygon(g, 3)
    build_polygon(g, 4)
    g.create_dart()
    assert g.nb_connected_components() == 3


def test_relation_table_and_str():
    g = GMap()
    build_polygon(g, 2)     # darts 0..3
    rows = g.relation_table()
    assert rows[0] == (0, 1, 3, 0)
    assert rows[2] == (2, 3, 1, 2)
    assert "4 darts" in str(g)
