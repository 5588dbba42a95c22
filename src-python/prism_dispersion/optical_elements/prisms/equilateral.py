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

===============================================================================
EQUILATERAL PRISM
===============================================================================
A 60-60-60 dispersing prism described by its center, rotation, side length
and base refractive index.

Vertex layout (rotation = 0, screen coordinates: +X right, +Y down):

                 V0  (top)
                /  \\
    Edge 2     /    \\    Edge 0
              /      \\
            V2--------V1
               Edge 1

    Vertex i sits at angle rotation - pi/2 + i * 2pi/3 on the circumcircle
    of radius side / sqrt(3). Edge i connects V(i) to V((i+1) % 3); the
    edge index is the only handle other modules use to name a face.
===============================================================================
"""

from __future__ import annotations

import math
from typing import List, Tuple

from shapely.geometry import Polygon

from ...core.geometry import Geometry, Line, Point
from ...core.constants import (
    AIR_REFRACTIVE_INDEX,
    DEFAULT_REFRACTIVE_INDEX,
    MIN_REFRACTIVE_INDEX,
    MAX_REFRACTIVE_INDEX,
)


class Edge:
    """
    One face of the prism.

    Attributes:
        index: Face index 0..2
        p1: Start vertex (vertex ``index``)
        p2: End vertex (vertex ``(index + 1) % 3``)
    """
    __slots__ = ('index', 'p1', 'p2')

    def __init__(self, index: int, p1: Point, p2: Point):
        self.index = index
        self.p1 = p1
        self.p2 = p2

    @property
    def midpoint(self) -> Point:
        return Point((self.p1.x + self.p2.x) / 2, (self.p1.y + self.p2.y) / 2)

    @property
    def length(self) -> float:
        return Geometry.distance(self.p1, self.p2)

    def to_line(self) -> Line:
        return Line(self.p1, self.p2)

    def __repr__(self) -> str:
        return f"Edge(index={self.index}, p1={self.p1}, p2={self.p2})"


class EquilateralPrism:
    """
    Equilateral triangular prism.

    Instances are treated as read-only by the tracer. Scene edits (moving,
    rotating, changing the index) go through moved(), rotated() and
    with_refractive_index(), which return new prisms.

    Attributes:
        center: Centroid of the triangle
        rotation: Rotation in radians
        side_length: Length of each side
        base_refractive_index: Refractive index before the per-wavelength offset

    Example:
        >>> prism = EquilateralPrism(Point(400, 300), math.pi / 6, 250.0, 1.5)
        >>> len(prism.edges())
        3
    """

    # Prism-specific type identifier
    type = 'EquilateralPrism'

    def __init__(
        self,
        center: Point,
        rotation: float = 0.0,
        side_length: float = 250.0,
        base_refractive_index: float = DEFAULT_REFRACTIVE_INDEX
    ) -> None:
        """
        Create an equilateral prism.

        Args:
            center: Centroid position.
            rotation: Rotation angle in radians.
            side_length: Length of each side of the triangle.
            base_refractive_index: Refractive index of the glass.

        Raises:
            ValueError: If the side length is not positive and finite, the
                center or rotation is not finite, or the refractive index
                is outside the supported range.
        """
        if not (math.isfinite(center.x) and math.isfinite(center.y)):
            raise ValueError(f"Prism center must be finite, got {center}")
        if not math.isfinite(rotation):
            raise ValueError(f"Prism rotation must be finite, got {rotation}")
        if not (math.isfinite(side_length) and side_length > 0):
            raise ValueError(f"side_length must be positive, got {side_length}")
        if not MIN_REFRACTIVE_INDEX <= base_refractive_index <= MAX_REFRACTIVE_INDEX:
            raise ValueError(
                f"base_refractive_index must be in [{MIN_REFRACTIVE_INDEX}, "
                f"{MAX_REFRACTIVE_INDEX}], got {base_refractive_index}"
            )

        self.center = center
        self.rotation = rotation
        self.side_length = side_length
        self.base_refractive_index = base_refractive_index

    # =========================================================================
    # Geometry
    # =========================================================================

    @property
    def circumradius(self) -> float:
        return self.side_length / math.sqrt(3)

    def vertices(self) -> List[Point]:
        """
        Compute the three vertices.

        Returns:
            [V0, V1, V2], V0 being the top vertex when rotation = 0.
        """
        r = self.circumradius
        angles = [
            self.rotation - math.pi / 2,
            self.rotation - math.pi / 2 + 2 * math.pi / 3,
            self.rotation - math.pi / 2 + 4 * math.pi / 3,
        ]
        return [
            Point(self.center.x + r * math.cos(a), self.center.y + r * math.sin(a))
            for a in angles
        ]

    def edges(self) -> List[Edge]:
        """Edges 0..2, edge i running from vertex i to vertex (i+1) % 3."""
        verts = self.vertices()
        return [Edge(i, verts[i], verts[(i + 1) % 3]) for i in range(3)]

    def outward_normal(self, edge_index: int) -> Point:
        """
        Unit normal of an edge pointing away from the prism center.

        Args:
            edge_index: Face index 0..2

        Returns:
            Outward unit normal.
        """
        edge = self.edges()[edge_index]
        to_center = Geometry.sub(self.center, edge.p1)
        return Geometry.oriented_normal(edge.p1, edge.p2, to_center)

    def to_polygon(self) -> Polygon:
        """Convert to a Shapely Polygon."""
        return Polygon([(v.x, v.y) for v in self.vertices()])

    def contains(self, point: Point) -> bool:
        """True if the point lies strictly inside the triangle."""
        return self.to_polygon().contains(point.to_shapely())

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the triangle."""
        return self.to_polygon().bounds

    # =========================================================================
    # Optics
    # =========================================================================

    def refractive_index(self, index_offset: float = 0.0) -> float:
        """Glass index seen by a spectral sample with the given offset."""
        return self.base_refractive_index + index_offset

    def indices_for(self, entering: bool, index_offset: float = 0.0) -> Tuple[float, float]:
        """
        (n1, n2) for a ray crossing one face.

        Args:
            entering: True for air -> glass, False for glass -> air
            index_offset: Spectral sample offset

        Returns:
            Incident and transmitted refractive indices.
        """
        n_glass = self.refractive_index(index_offset)
        if entering:
            return AIR_REFRACTIVE_INDEX, n_glass
        return n_glass, AIR_REFRACTIVE_INDEX

    @property
    def apex_angle(self) -> float:
        """
        Return the apex angle in degrees.

        For an equilateral prism, this is always 60 degrees.
        """
        return 60.0

    def minimum_deviation(self, index_offset: float = 0.0) -> float:
        """
        Minimum deviation angle in degrees for a spectral sample.

        Args:
            index_offset: Spectral sample offset added to the base index.
        """
        from .prism_utils import minimum_deviation
        return minimum_deviation(self.apex_angle, self.refractive_index(index_offset))

    # =========================================================================
    # Scene edits
    # =========================================================================

    def moved(self, dx: float, dy: float) -> 'EquilateralPrism':
        return EquilateralPrism(
            Point(self.center.x + dx, self.center.y + dy),
            self.rotation, self.side_length, self.base_refractive_index
        )

    def rotated(self, delta: float) -> 'EquilateralPrism':
        return EquilateralPrism(
            self.center, self.rotation + delta,
            self.side_length, self.base_refractive_index
        )

    def with_refractive_index(self, n: float) -> 'EquilateralPrism':
        return EquilateralPrism(self.center, self.rotation, self.side_length, n)

    def to_dict(self) -> dict:
        return {
            'type': self.type,
            'center': self.center.to_dict(),
            'rotation': self.rotation,
            'side_length': self.side_length,
            'base_refractive_index': self.base_refractive_index,
        }

    def __repr__(self) -> str:
        return (f"EquilateralPrism(center={self.center}, rotation={self.rotation}, "
                f"side_length={self.side_length}, n={self.base_refractive_index})")
