"""
===============================================================================
PRISM TESTS
===============================================================================

Covers the equilateral prism and the closed-form prism utilities:

1. GEOMETRY VERIFICATION
   - Side lengths and centroid
   - Vertex 0 is the top vertex at rotation 0
   - Edge i runs from vertex i to vertex (i+1) % 3
   - Outward normals point away from the center
   - Shapely polygon containment

2. VALIDATION
   - Invalid side length / refractive index raise ValueError
   - Scene edits return new prisms

3. UTILITY FUNCTION TESTS
   - minimum_deviation() known value
   - deviation_at_incidence() at the minimum
   - critical_angle()

Run with:
    python developer_tests/test_prism.py

Or with pytest:
    pytest developer_tests/test_prism.py -v
===============================================================================
"""

import sys
import math
from pathlib import Path

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from prism_dispersion.core.geometry import Geometry, Point
from prism_dispersion.optical_elements.prisms import EquilateralPrism, prism_utils
from prism_dispersion.optical_elements.prisms import equilateral


TOLERANCE = 1e-6
ANGLE_TOLERANCE = 0.01  # degrees


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# GEOMETRY VERIFICATION TESTS
# =============================================================================

def test_equilateral_geometry():
    """All sides equal the side length at several rotations; centroid is the center."""
    print("\n" + "=" * 60)
    print("TEST: EquilateralPrism Geometry")
    print("=" * 60)

    side = 250.0
    for rotation in [0.0, math.pi / 6, 1.234, -2.5]:
        prism = EquilateralPrism(Point(400, 300), rotation, side, 1.5)
        verts = prism.vertices()
        for i in range(3):
            length = Geometry.distance(verts[i], verts[(i + 1) % 3])
            assert_close(length, side, TOLERANCE, f"rotation {rotation} side {i}")
        cx = sum(v.x for v in verts) / 3
        cy = sum(v.y for v in verts) / 3
        assert_close(cx, 400.0, TOLERANCE, "centroid x")
        assert_close(cy, 300.0, TOLERANCE, "centroid y")
    print("  Side lengths and centroid - PASS")


def test_vertex_zero_is_top():
    """At rotation 0 vertex 0 sits straight above the center (smallest y)."""
    prism = EquilateralPrism(Point(0, 0), 0.0, 100.0, 1.5)
    verts = prism.vertices()
    assert_close(verts[0].x, 0.0, TOLERANCE, "V0 x")
    assert_close(verts[0].y, -100.0 / math.sqrt(3), TOLERANCE, "V0 y")
    assert verts[0].y < verts[1].y and verts[0].y < verts[2].y
    print("  Vertex 0 on top - PASS")


def test_edge_indexing():
    """Edge i connects vertex i to vertex (i+1) % 3."""
    prism = EquilateralPrism(Point(10, 20), 0.3, 80.0, 1.5)
    verts = prism.vertices()
    edges = prism.edges()
    assert [e.index for e in edges] == [0, 1, 2]
    for i, edge in enumerate(edges):
        assert edge.p1 == verts[i]
        assert edge.p2 == verts[(i + 1) % 3]
        assert_close(edge.length, 80.0, TOLERANCE, f"edge {i} length")
    print("  Edge indexing - PASS")


def test_outward_normals():
    """Each outward normal is unit length, perpendicular, and points away from the center."""
    prism = EquilateralPrism(Point(5, -5), 0.7, 60.0, 1.5)
    for edge in prism.edges():
        n = prism.outward_normal(edge.index)
        assert_close(Geometry.magnitude(n), 1.0, TOLERANCE, "normal length")
        assert_close(Geometry.dot(n, Geometry.sub(edge.p2, edge.p1)), 0.0, TOLERANCE, "perpendicular")
        assert Geometry.dot(n, Geometry.sub(edge.midpoint, prism.center)) > 0
    print("  Outward normals - PASS")


def test_polygon_containment():
    """The Shapely polygon contains the center and not far-away points."""
    prism = EquilateralPrism(Point(0, 0), 0.0, 100.0, 1.5)
    assert prism.contains(Point(0, 0))
    assert not prism.contains(Point(500, 0))
    assert_close(prism.to_polygon().area, math.sqrt(3) / 4 * 100.0 ** 2, 1e-6, "area")
    print("  Shapely containment - PASS")


def test_vertex_diagram_intact():
    """The module docstring keeps one diagram row per source line."""
    rows = [line.strip() for line in equilateral.__doc__.splitlines()]
    assert '/  \\' in rows
    assert '/      \\' in rows
    assert 'V2--------V1' in rows
    print("  Vertex diagram - PASS")


# =============================================================================
# VALIDATION TESTS
# =============================================================================

def test_invalid_parameters_raise():
    """Bad side lengths, indices and coordinates raise ValueError."""
    bad_calls = [
        lambda: EquilateralPrism(Point(0, 0), 0.0, 0.0, 1.5),
        lambda: EquilateralPrism(Point(0, 0), 0.0, -10.0, 1.5),
        lambda: EquilateralPrism(Point(0, 0), 0.0, 10.0, 0.9),
        lambda: EquilateralPrism(Point(0, 0), 0.0, 10.0, 3.0),
        lambda: EquilateralPrism(Point(float('nan'), 0), 0.0, 10.0, 1.5),
        lambda: EquilateralPrism(Point(0, 0), float('inf'), 10.0, 1.5),
    ]
    for call in bad_calls:
        try:
            call()
        except ValueError:
            continue
        raise AssertionError("Expected ValueError")
    print("  Invalid parameters rejected - PASS")


def test_scene_edits_return_new_prisms():
    """moved/rotated/with_refractive_index return new prisms and leave this one untouched."""
    prism = EquilateralPrism(Point(0, 0), 0.0, 100.0, 1.5)
    moved = prism.moved(10, -5)
    rotated = prism.rotated(0.5)
    reindexed = prism.with_refractive_index(1.7)

    assert (prism.center.x, prism.center.y, prism.rotation) == (0, 0, 0.0)
    assert (moved.center.x, moved.center.y) == (10, -5)
    assert rotated.rotation == 0.5
    assert reindexed.base_refractive_index == 1.7
    assert prism.base_refractive_index == 1.5
    print("  Immutable scene edits - PASS")


def test_indices_for():
    """Entering is air -> glass, exiting is glass -> air, offset applied to glass."""
    prism = EquilateralPrism(Point(0, 0), 0.0, 100.0, 1.5)
    n1, n2 = prism.indices_for(True, 0.02)
    assert n1 == 1.0
    assert_close(n2, 1.52, 1e-12, "entering n2")
    n1, n2 = prism.indices_for(False, -0.03)
    assert_close(n1, 1.47, 1e-12, "exiting n1")
    assert n2 == 1.0
    print("  indices_for() - PASS")


# =============================================================================
# UTILITY FUNCTION TESTS
# =============================================================================

def test_minimum_deviation():
    """D_min for a 60 degree prism at n=1.5 is about 37.18 degrees."""
    d_min = prism_utils.minimum_deviation(60.0, 1.5)
    assert_close(d_min, 37.18, 0.01, "minimum_deviation")
    assert prism_utils.minimum_deviation(60.0, 1.6) > d_min

    prism = EquilateralPrism(Point(0, 0), 0.0, 100.0, 1.5)
    assert_close(prism.minimum_deviation(), d_min, 1e-9, "prism.minimum_deviation")
    assert prism.minimum_deviation(0.03) > prism.minimum_deviation(-0.03)
    print(f"  D_min(60, 1.5) = {d_min:.3f} - PASS")


def test_minimum_deviation_impossible():
    """n * sin(A/2) > 1 raises ValueError."""
    try:
        prism_utils.minimum_deviation(60.0, 2.5)
    except ValueError:
        print("  Impossible D_min rejected - PASS")
        return
    raise AssertionError("Expected ValueError")


def test_deviation_at_incidence():
    """Deviation at the min-deviation incidence equals D_min; nearby is larger."""
    i_min = prism_utils.incidence_for_minimum_deviation(60.0, 1.5)
    d_min = prism_utils.minimum_deviation(60.0, 1.5)
    assert_close(prism_utils.deviation_at_incidence(60.0, 1.5, i_min), d_min, 0.01, "deviation at i_min")
    assert prism_utils.deviation_at_incidence(60.0, 1.5, i_min + 5) > d_min
    assert prism_utils.deviation_at_incidence(60.0, 1.5, i_min - 5) > d_min
    # Small incidence: TIR at the second face
    assert math.isnan(prism_utils.deviation_at_incidence(60.0, 1.5, 10.0))
    print("  deviation_at_incidence() - PASS")


def test_critical_angle():
    """Critical angle of glass n=1.5 into air is asin(1/1.5)."""
    theta_c = prism_utils.critical_angle(1.5)
    assert_close(theta_c, math.degrees(math.asin(1 / 1.5)), ANGLE_TOLERANCE, "critical_angle")
    try:
        prism_utils.critical_angle(1.0, 1.5)
    except ValueError:
        print(f"  critical_angle(1.5) = {theta_c:.2f} - PASS")
        return
    raise AssertionError("Expected ValueError for n_inside <= n_outside")


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("=" * 78)
    print("PRISM TESTS")
    print("=" * 78)

    tests = [
        ("EquilateralPrism Geometry", test_equilateral_geometry),
        ("Vertex 0 on top", test_vertex_zero_is_top),
        ("Edge indexing", test_edge_indexing),
        ("Outward normals", test_outward_normals),
        ("Polygon containment", test_polygon_containment),
        ("Vertex diagram", test_vertex_diagram_intact),
        ("Invalid parameters", test_invalid_parameters_raise),
        ("Scene edits", test_scene_edits_return_new_prisms),
        ("indices_for()", test_indices_for),
        ("minimum_deviation()", test_minimum_deviation),
        ("minimum_deviation() impossible", test_minimum_deviation_impossible),
        ("deviation_at_incidence()", test_deviation_at_incidence),
        ("critical_angle()", test_critical_angle),
    ]

    passed = 0
    errors = []

    for name, test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            errors.append((name, str(e)))
            print(f"\n  FAILED: {name}")
            print(f"    Error: {e}")

    print("\n" + "=" * 78)
    print(f"SUMMARY: {passed}/{len(tests)} tests passed")
    print("=" * 78)

    if errors:
        print("\nFailed tests:")
        for name, error in errors:
            print(f"  - {name}: {error}")
        return False

    print("\nAll tests passed!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
