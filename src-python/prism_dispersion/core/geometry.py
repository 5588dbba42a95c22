"""
Copyright 2026 prism-dispersion authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from typing import Dict, Iterator, Optional
from shapely.geometry import Point as ShapelyPoint, LineString

from .constants import PARALLEL_EPSILON, MIN_HIT_DISTANCE


class Point:
    """
    A point in 2D space.

    The same class is used for displacement/direction vectors; whether a
    Point is a position or a vector depends on how it is used.
    Can be converted to/from Shapely Point objects.
    """
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        """Create Point from Shapely Point."""
        return cls(sp.x, sp.y)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


# Directions and displacements share the Point representation
Vector = Point


class Line:
    """
    A line in 2D space, defined by two points.

    Used for prism edges (finite segments between two vertices).
    """
    def __init__(self, p1: Point, p2: Point):
        self.p1 = p1
        self.p2 = p2

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])

    def __repr__(self) -> str:
        return f"Line(p1={self.p1}, p2={self.p2})"


class Intersection:
    """
    Result of a successful ray/segment intersection.

    Attributes:
        point: Hit point on the segment.
        t: Ray parameter of the hit (distance along a unit direction).
        u: Segment parameter of the hit, in [0, 1].
        normal: Unit segment normal oriented against the incoming ray.
    """
    def __init__(self, point: Point, t: float, u: float, normal: Point):
        self.point = point
        self.t = t
        self.u = u
        self.normal = normal

    def __repr__(self) -> str:
        return f"Intersection(point={self.point}, t={self.t}, u={self.u}, normal={self.normal})"


class Geometry:
    """
    Primitive 2D vector algebra plus the ray/segment intersection test.

    Every operation is pure. The only special case is normalize(), which
    returns the zero vector for a zero-length input instead of dividing by
    zero; callers treat that result as an undefined direction.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """Create a point."""
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """Create a segment between two points."""
        return Line(p1, p2)

    @staticmethod
    def add(p: Point, v: Point) -> Point:
        """
        Translate a point by a vector.

        Args:
            p: Point (or vector)
            v: Displacement vector

        Returns:
            p + v
        """
        return Point(p.x + v.x, p.y + v.y)

    @staticmethod
    def sub(p1: Point, p2: Point) -> Point:
        """
        Vector from p2 to p1.

        Args:
            p1: End point
            p2: Start point

        Returns:
            p1 - p2
        """
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale(v: Point, s: float) -> Point:
        """Multiply a vector by a scalar."""
        return Point(v.x * s, v.y * s)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """
        Calculate the cross product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Cross product (z-component in 2D)
        """
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def magnitude(v: Point) -> float:
        """Euclidean length of a vector."""
        return math.sqrt(v.x * v.x + v.y * v.y)

    @staticmethod
    def normalize(v: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        Args:
            v: Point (as vector)

        Returns:
            Unit vector in the direction of v, or the zero vector when v has
            exactly zero length.
        """
        m = Geometry.magnitude(v)
        if m == 0:
            return Point(0.0, 0.0)
        return Point(v.x / m, v.y / m)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """
        Calculate the distance between two points.

        Args:
            p1: First point
            p2: Second point

        Returns:
            Distance
        """
        dx = p2.x - p1.x
        dy = p2.y - p1.y
        return math.sqrt(dx * dx + dy * dy)

    @staticmethod
    def rotate(v: Point, angle: float) -> Point:
        """
        Rotate the given point as if it were a vector by the given angle in radians.

        Args:
            v: Point (as vector)
            angle: Rotation angle in radians

        Returns:
            Rotated vector
        """
        return Point(
            v.x * math.cos(angle) - v.y * math.sin(angle),
            v.x * math.sin(angle) + v.y * math.cos(angle)
        )

    @staticmethod
    def direction_from_angle(angle: float) -> Point:
        """Unit vector pointing at the given angle (radians from +X)."""
        return Point(math.cos(angle), math.sin(angle))

    @staticmethod
    def oriented_normal(p1: Point, p2: Point, reference: Point) -> Point:
        """
        Unit normal of the segment p1->p2, oriented against a reference vector.

        The segment direction is rotated by 90 degrees and normalized. If the
        result points into the same half-plane as ``reference`` it is flipped,
        so the returned normal always satisfies dot(normal, reference) <= 0.

        This single helper backs both normal conventions the tracer needs:
        - reference = incoming ray direction: the normal faces back toward
          where the ray came from.
        - reference = vector from the edge toward the prism center: the
          normal points out of the prism.

        Args:
            p1: Segment start
            p2: Segment end
            reference: Vector the normal must oppose

        Returns:
            Oriented unit normal (zero vector for a degenerate segment).
        """
        seg = Geometry.sub(p2, p1)
        normal = Geometry.normalize(Point(-seg.y, seg.x))
        if Geometry.dot(normal, reference) > 0:
            normal = Geometry.scale(normal, -1)
        return normal

    @staticmethod
    def ray_segment_intersection(
        origin: Point,
        direction: Point,
        p1: Point,
        p2: Point
    ) -> Optional[Intersection]:
        """
        Intersect the ray origin + t*direction with the segment p1->p2.

        The ray is treated as the infinite line through origin and
        origin + direction, the segment as the line through p1 and p2, and
        the 2x2 system is solved with the determinant formulation.

        Args:
            origin: Ray start point
            direction: Unit ray direction
            p1: Segment start
            p2: Segment end

        Returns:
            Intersection, or None when the lines are (nearly) parallel, the
            hit lies at or behind MIN_HIT_DISTANCE along the ray, or the hit
            falls outside the finite segment (u outside [0, 1]).
        """
        x1, y1 = origin.x, origin.y
        x2, y2 = origin.x + direction.x, origin.y + direction.y
        x3, y3 = p1.x, p1.y
        x4, y4 = p2.x, p2.y

        denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
        u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

        if t > MIN_HIT_DISTANCE and 0 <= u <= 1:
            hit = Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))
            normal = Geometry.oriented_normal(p1, p2, direction)
            return Intersection(hit, t, u, normal)

        return None


# Create a singleton instance for convenience
geometry = Geometry()
