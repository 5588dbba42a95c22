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
from typing import List, Sequence

from .geometry import Geometry, Point
from .ray import Ray
from .spectrum import SpectralSample, VISIBLE_SPECTRUM


class LightSource:
    """
    A white beam emitted from one point in one direction.

    The beam is modelled as one coincident Ray per spectral sample; the
    rays only separate once they refract.

    Attributes:
        position (Point): Emission point
        angle (float): Beam direction in radians from +X
    """

    type = 'LightSource'

    def __init__(self, position: Point, angle: float = 0.0) -> None:
        """
        Args:
            position: Emission point
            angle: Direction in radians

        Raises:
            ValueError: If the position or angle is not finite.
        """
        if not (math.isfinite(position.x) and math.isfinite(position.y)):
            raise ValueError(f"Light position must be finite, got {position}")
        if not math.isfinite(angle):
            raise ValueError(f"Light angle must be finite, got {angle}")
        self.position = position
        self.angle = angle

    @property
    def direction(self) -> Point:
        """Unit direction of the beam."""
        return Geometry.direction_from_angle(self.angle)

    def emit(self, spectrum: Sequence[SpectralSample] = VISIBLE_SPECTRUM) -> List[Ray]:
        """
        Create the primary rays, one per spectral sample, in spectrum order.

        Args:
            spectrum: Spectral samples to emit

        Returns:
            List of Ray objects sharing origin and direction.
        """
        direction = self.direction
        return [
            Ray(
                origin=self.position,
                direction=direction,
                color=sample.color,
                wavelength_offset=sample.index_offset,
                intensity=sample.intensity,
                label=sample.label
            )
            for sample in spectrum
        ]

    def moved(self, dx: float, dy: float) -> 'LightSource':
        return LightSource(Point(self.position.x + dx, self.position.y + dy), self.angle)

    def aimed_at(self, target: Point) -> 'LightSource':
        """
        Return a copy of this source pointing at ``target``.

        If the target coincides with the source position the angle is kept.
        """
        dx = target.x - self.position.x
        dy = target.y - self.position.y
        if dx == 0 and dy == 0:
            return LightSource(self.position, self.angle)
        return LightSource(self.position, math.atan2(dy, dx))

    def to_dict(self) -> dict:
        return {
            'type': self.type,
            'position': self.position.to_dict(),
            'angle': self.angle,
        }

    def __repr__(self) -> str:
        return f"LightSource(position={self.position}, angle={self.angle})"
