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
from typing import Any, Dict, Optional

from .geometry import Geometry, Point
from .constants import INTERACTION_SOURCE, INTERACTION_TIR


class Ray:
    """
    A half-line carrying one spectral sample through the prism.

    Rays are never mutated by the tracer: each reflection or refraction
    produces a new Ray through child().

    Attributes:
        origin (Point): Start point of the ray
        direction (Point): Unit direction vector
        color (str): Display color tag (CSS color string)
        wavelength_offset (float): Offset added to the prism's base
            refractive index for this spectral sample
        intensity (float): Relative intensity in (0, 1]
        label (str or None): Human-readable sample name (e.g. "red")
        interaction_type (str): How this ray was created:
            'source' = emitted by the light source
            'refract' = Snell's law refraction
            'tir' = total internal reflection
        tir_count (int): Cumulative TIR count in this ray's lineage
    """

    def __init__(
        self,
        origin: Point,
        direction: Point,
        color: str = '#ffffff',
        wavelength_offset: float = 0.0,
        intensity: float = 1.0,
        label: Optional[str] = None
    ) -> None:
        self.origin: Point = origin
        self.direction: Point = direction
        self.color: str = color
        self.wavelength_offset: float = wavelength_offset
        self.intensity: float = intensity
        self.label: Optional[str] = label
        self.interaction_type: str = INTERACTION_SOURCE
        self.tir_count: int = 0

    def child(self, origin: Point, direction: Point, interaction_type: str) -> 'Ray':
        """
        Create the ray spawned at an interface.

        Color, wavelength offset, intensity and label are carried over;
        the lineage fields record the interaction that produced the child.

        Args:
            origin: Start point of the child ray
            direction: Unit direction of the child ray
            interaction_type: 'refract' or 'tir'

        Returns:
            Ray: New ray
        """
        new_ray = Ray(
            origin=origin,
            direction=direction,
            color=self.color,
            wavelength_offset=self.wavelength_offset,
            intensity=self.intensity,
            label=self.label
        )
        new_ray.interaction_type = interaction_type
        new_ray.tir_count = self.tir_count + (1 if interaction_type == INTERACTION_TIR else 0)
        return new_ray

    @property
    def is_degenerate(self) -> bool:
        """True when the direction is the zero vector (or not finite)."""
        dx, dy = self.direction.x, self.direction.y
        if not (math.isfinite(dx) and math.isfinite(dy)):
            return True
        return dx == 0 and dy == 0

    def __repr__(self) -> str:
        return (f"Ray(origin={self.origin}, direction={self.direction}, "
                f"color={self.color!r}, wavelength_offset={self.wavelength_offset})")


class Segment:
    """
    A finite drawable piece of a light path, the tracer's output unit.

    Attributes:
        p1 (Point): Start point
        p2 (Point): End point
        color (str): Display color tag
        stroke_width (float): Rendering line width
        blur_radius (float): Rendering glow radius
        depth (int): Recursion depth of the ray that produced this segment
        interaction_type (str): Lineage of the producing ray
            ('source', 'refract', 'tir')
        escaped (bool): True for the final segment of a path that leaves
            the prism without another hit
        wavelength_offset (float): Spectral sample offset of the ray
        intensity (float): Relative intensity of the ray
        label (str or None): Spectral sample name
        tir_count (int): Cumulative TIR count in the producing ray's lineage
    """

    def __init__(
        self,
        p1: Point,
        p2: Point,
        color: str,
        stroke_width: float,
        blur_radius: float,
        depth: int = 0,
        interaction_type: str = INTERACTION_SOURCE,
        escaped: bool = False,
        wavelength_offset: float = 0.0,
        intensity: float = 1.0,
        label: Optional[str] = None,
        tir_count: int = 0
    ) -> None:
        self.p1 = p1
        self.p2 = p2
        self.color = color
        self.stroke_width = stroke_width
        self.blur_radius = blur_radius
        self.depth = depth
        self.interaction_type = interaction_type
        self.escaped = escaped
        self.wavelength_offset = wavelength_offset
        self.intensity = intensity
        self.label = label
        self.tir_count = tir_count

    @classmethod
    def from_ray(
        cls,
        ray: Ray,
        end: Point,
        depth: int,
        stroke_width: float,
        blur_radius: float,
        escaped: bool
    ) -> 'Segment':
        """Build the segment drawn for ``ray`` from its origin to ``end``."""
        return cls(
            p1=ray.origin,
            p2=end,
            color=ray.color,
            stroke_width=stroke_width,
            blur_radius=blur_radius,
            depth=depth,
            interaction_type=ray.interaction_type,
            escaped=escaped,
            wavelength_offset=ray.wavelength_offset,
            intensity=ray.intensity,
            label=ray.label,
            tir_count=ray.tir_count
        )

    @property
    def length(self) -> float:
        return Geometry.distance(self.p1, self.p2)

    @property
    def direction_angle(self) -> float:
        """Angle of p1->p2 in radians from +X."""
        return math.atan2(self.p2.y - self.p1.y, self.p2.x - self.p1.x)

    @property
    def is_tir_result(self) -> bool:
        return self.interaction_type == INTERACTION_TIR

    def key(self) -> tuple:
        """Tuple of everything that determines how the segment is drawn."""
        return (self.p1.x, self.p1.y, self.p2.x, self.p2.y,
                self.color, self.stroke_width, self.blur_radius)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'p1': self.p1.to_dict(),
            'p2': self.p2.to_dict(),
            'color': self.color,
            'stroke_width': self.stroke_width,
            'blur_radius': self.blur_radius,
            'depth': self.depth,
            'interaction_type': self.interaction_type,
            'escaped': self.escaped,
            'wavelength_offset': self.wavelength_offset,
            'intensity': self.intensity,
            'label': self.label,
            'tir_count': self.tir_count,
        }

    def __repr__(self) -> str:
        return (f"Segment(p1={self.p1}, p2={self.p2}, color={self.color!r}, "
                f"depth={self.depth}, escaped={self.escaped})")
