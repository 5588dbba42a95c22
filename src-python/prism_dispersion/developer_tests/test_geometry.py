"""
===============================================================================
GEOMETRY TESTS
===============================================================================

Covers the vector algebra and the ray/segment intersection test:

1. VECTOR ALGEBRA
   - add / sub / scale / dot / cross / magnitude / distance / rotate
   - normalize() unit length and zero-vector guard

2. RAY/SEGMENT INTERSECTION
   - Hit point, t and u for a simple crossing
   - Parallel rays report no hit
   - Hits at or behind the origin are rejected
   - Segment endpoints (u = 0 and u = 1) count as hits, repeatably
   - Returned normal opposes the incoming ray

Run with:
    python developer_tests/test_geometry.py

Or with pytest:
    pytest developer_tests/test_geometry.py -v
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


TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert that two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(
            f"{msg}: expected {expected}, got {actual} (diff: {abs(actual - expected)})"
        )


# =============================================================================
# VECTOR ALGEBRA
# =============================================================================

def test_basic_vector_operations():
    """add, sub, scale, dot, cross, distance on small integer vectors."""
    a = Point(3.0, 4.0)
    b = Point(1.0, -2.0)

    s = Geometry.add(a, b)
    assert (s.x, s.y) == (4.0, 2.0)

    d = Geometry.sub(a, b)
    assert (d.x, d.y) == (2.0, 6.0)

    k = Geometry.scale(a, -2)
    assert (k.x, k.y) == (-6.0, -8.0)

    assert Geometry.dot(a, b) == 3.0 - 8.0
    assert Geometry.cross(Point(1, 0), Point(0, 1)) == 1
    assert Geometry.magnitude(a) == 5.0
    assert Geometry.distance(Point(0, 0), a) == 5.0
    assert Geometry.distance(a, b) == Geometry.distance(b, a)
    print("  Basic vector operations - PASS")


def test_normalize_unit_length():
    """normalize() of any nonzero vector has magnitude 1."""
    for v in [Point(3, 4), Point(-1e-8, 2e-8), Point(1e6, -3e6), Point(0, -7)]:
        n = Geometry.normalize(v)
        assert_close(Geometry.magnitude(n), 1.0, 1e-12, f"|normalize({v})|")
        # Same direction
        assert Geometry.dot(n, v) > 0
    print("  normalize() unit length - PASS")


def test_normalize_zero_vector():
    """normalize() of the zero vector is the zero vector, not an error."""
    n = Geometry.normalize(Point(0.0, 0.0))
    assert (n.x, n.y) == (0.0, 0.0)
    print("  normalize(0) == 0 - PASS")


def test_rotate():
    """rotate() by 90 degrees maps +X onto +Y."""
    r = Geometry.rotate(Point(1, 0), math.pi / 2)
    assert_close(r.x, 0.0, 1e-12, "rotated x")
    assert_close(r.y, 1.0, 1e-12, "rotated y")
    print("  rotate() - PASS")


def test_oriented_normal_opposes_reference():
    """The oriented normal never points into the reference half-plane."""
    p1, p2 = Point(0, 0), Point(10, 0)
    for ref in [Point(0, 1), Point(0, -1), Point(3, 2), Point(-3, -2)]:
        n = Geometry.oriented_normal(p1, p2, ref)
        assert_close(Geometry.magnitude(n), 1.0, 1e-12, "normal length")
        assert Geometry.dot(n, ref) <= 0
    print("  oriented_normal() - PASS")


# =============================================================================
# RAY/SEGMENT INTERSECTION
# =============================================================================

def test_intersection_simple_crossing():
    """A ray along +X crossing a vertical segment."""
    hit = Geometry.ray_segment_intersection(
        Point(-5, 2), Point(1, 0), Point(0, 0), Point(0, 10)
    )
    assert hit is not None
    assert_close(hit.point.x, 0.0, msg="hit x")
    assert_close(hit.point.y, 2.0, msg="hit y")
    assert_close(hit.t, 5.0, msg="t")
    assert_close(hit.u, 0.2, msg="u")
    # Normal faces back toward the ray origin
    assert_close(hit.normal.x, -1.0, msg="normal x")
    assert_close(hit.normal.y, 0.0, msg="normal y")
    print("  Simple crossing - PASS")


def test_intersection_normal_flips_with_ray_direction():
    """Approaching the same segment from the other side flips the normal."""
    hit = Geometry.ray_segment_intersection(
        Point(5, 2), Point(-1, 0), Point(0, 0), Point(0, 10)
    )
    assert hit is not None
    assert_close(hit.normal.x, 1.0, msg="normal x")
    assert Geometry.dot(hit.normal, Point(-1, 0)) < 0
    print("  Normal orientation - PASS")


def test_intersection_parallel_is_none():
    """Parallel and collinear rays never hit."""
    seg = (Point(0, 0), Point(10, 0))
    assert Geometry.ray_segment_intersection(Point(-5, 1), Point(1, 0), *seg) is None
    assert Geometry.ray_segment_intersection(Point(-5, 0), Point(1, 0), *seg) is None
    print("  Parallel rays - PASS")


def test_intersection_behind_or_at_origin_is_none():
    """Hits behind the ray or within MIN_HIT_DISTANCE of its origin are rejected."""
    seg = (Point(0, -5), Point(0, 5))
    # Segment is behind the ray
    assert Geometry.ray_segment_intersection(Point(5, 0), Point(1, 0), *seg) is None
    # Origin on the segment
    assert Geometry.ray_segment_intersection(Point(0, 0), Point(1, 0), *seg) is None
    # Origin just off the segment, inside the epsilon
    assert Geometry.ray_segment_intersection(Point(-0.0005, 0), Point(1, 0), *seg) is None
    # Just beyond the epsilon
    assert Geometry.ray_segment_intersection(Point(-0.01, 0), Point(1, 0), *seg) is not None
    print("  Self-intersection rejection - PASS")


def test_intersection_outside_segment_is_none():
    """The line crossing outside [p1, p2] is not a hit."""
    assert Geometry.ray_segment_intersection(
        Point(-5, 11), Point(1, 0), Point(0, 0), Point(0, 10)
    ) is None
    print("  Miss beyond segment end - PASS")


def test_intersection_endpoints_are_stable():
    """u = 0 and u = 1 are inside the closed range, every time."""
    seg = (Point(0, 0), Point(0, 10))
    results_start = [
        Geometry.ray_segment_intersection(Point(-5, 0), Point(1, 0), *seg)
        for _ in range(20)
    ]
    results_end = [
        Geometry.ray_segment_intersection(Point(-5, 10), Point(1, 0), *seg)
        for _ in range(20)
    ]
    assert all(r is not None for r in results_start)
    assert all(r is not None for r in results_end)
    assert len({r.u for r in results_start}) == 1
    assert_close(results_start[0].u, 0.0, msg="u at start")
    assert_close(results_end[0].u, 1.0, msg="u at end")
    print("  Endpoint hits are consistent - PASS")


# =============================================================================
# MAIN
# =============================================================================

def run_all_tests():
    """Run all tests and report results."""
    print("=" * 78)
    print("GEOMETRY TESTS")
    print("=" * 78)

    tests = [
        ("Basic vector operations", test_basic_vector_operations),
        ("normalize() unit length", test_normalize_unit_length),
        ("normalize() zero vector", test_normalize_zero_vector),
        ("rotate()", test_rotate),
        ("oriented_normal()", test_oriented_normal_opposes_reference),
        ("Intersection: simple crossing", test_intersection_simple_crossing),
        ("Intersection: normal flips", test_intersection_normal_flips_with_ray_direction),
        ("Intersection: parallel", test_intersection_parallel_is_none),
        ("Intersection: behind origin", test_intersection_behind_or_at_origin_is_none),
        ("Intersection: outside segment", test_intersection_outside_segment_is_none),
        ("Intersection: endpoints", test_intersection_endpoints_are_stable),
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
