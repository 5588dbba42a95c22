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
from typing import List, Optional, Sequence

from .geometry import Point
from .light_source import LightSource
from .spectrum import SpectralSample, VISIBLE_SPECTRUM, validate_spectrum, check_glass_index
from .style import SegmentStyleTable, DEFAULT_STYLE
from .tracer import trace_scene
from .constants import MAX_TRACE_DEPTH, ESCAPE_LENGTH, DEFAULT_REFRACTIVE_INDEX
from ..optical_elements.prisms.equilateral import EquilateralPrism


class Scene:
    """
    Container for the prism, the light source and tracing settings.

    The scene is the state an interactive front end edits (dragging the
    prism or light, changing the index). Every call to trace() recomputes
    the full segment list from the current state; nothing is cached.

    Attributes:
        prism (EquilateralPrism): The refracting body
        light (LightSource): The white beam
        spectrum (list): Spectral samples traced for every pass
        max_depth (int): Deepest recursion level that still emits segments
        escape_length (float): Length of escape segments
        style (SegmentStyleTable): Stroke width / blur lookup
        verbose (int): Tracer verbosity (0, 1 or 2)
        width (float): Canvas width used by the reference layout and renderer
        height (float): Canvas height used by the reference layout and renderer
        name (str or None): Optional name for the scene (used in exports)
    """

    def __init__(
        self,
        prism: EquilateralPrism,
        light: LightSource,
        spectrum: Sequence[SpectralSample] = VISIBLE_SPECTRUM,
        max_depth: int = MAX_TRACE_DEPTH,
        escape_length: float = ESCAPE_LENGTH,
        style: Optional[SegmentStyleTable] = None,
        verbose: int = 0,
        width: float = 1200.0,
        height: float = 800.0
    ) -> None:
        self.prism = prism
        self.light = light
        self.spectrum = spectrum
        self.max_depth = max_depth
        self.escape_length = escape_length
        self.style = style if style is not None else DEFAULT_STYLE
        self.verbose = verbose
        self.width = width
        self.height = height
        self.name = None

    @classmethod
    def default(
        cls,
        width: float = 1200.0,
        height: float = 800.0,
        refractive_index: float = DEFAULT_REFRACTIVE_INDEX
    ) -> 'Scene':
        """
        Reference layout: a 250-unit prism in the middle of the canvas,
        rotated by pi/6, lit by a beam from 15% of the width tilted
        slightly upward on screen (-0.1 rad).
        """
        prism = EquilateralPrism(
            center=Point(width / 2, height / 2),
            rotation=math.pi / 6,
            side_length=250.0,
            base_refractive_index=refractive_index
        )
        light = LightSource(Point(width * 0.15, height / 2), angle=-0.1)
        return cls(prism, light, width=width, height=height)

    # =========================================================================
    # Validated settings
    # =========================================================================

    @property
    def prism(self) -> EquilateralPrism:
        return self._prism

    @prism.setter
    def prism(self, value: EquilateralPrism) -> None:
        spectrum = getattr(self, '_spectrum', None)
        if spectrum is not None:
            check_glass_index(value.base_refractive_index, spectrum)
        self._prism = value

    @property
    def spectrum(self) -> List[SpectralSample]:
        return self._spectrum

    @spectrum.setter
    def spectrum(self, value: Sequence[SpectralSample]) -> None:
        samples = validate_spectrum(value)
        check_glass_index(self.prism.base_refractive_index, samples)
        self._spectrum = samples

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"max_depth must be >= 0, got {value}")
        self._max_depth = value

    @property
    def escape_length(self) -> float:
        return self._escape_length

    @escape_length.setter
    def escape_length(self, value: float) -> None:
        if not value > 0:
            raise ValueError(f"escape_length must be positive, got {value}")
        self._escape_length = value

    @property
    def verbose(self) -> int:
        return self._verbose

    @verbose.setter
    def verbose(self, value: int) -> None:
        if value not in (0, 1, 2):
            raise ValueError(f"verbose must be 0, 1 or 2, got {value}")
        self._verbose = value

    # =========================================================================
    # Scene edits
    # =========================================================================

    def set_refractive_index(self, n: float) -> None:
        """
        Replace the prism's base refractive index.

        Raises:
            ValueError: If the index is outside the prism's range, or the
                lowest spectral offset would bring the glass below air.
        """
        self.prism = self.prism.with_refractive_index(n)

    def move_prism(self, dx: float, dy: float) -> None:
        self.prism = self.prism.moved(dx, dy)

    def rotate_prism(self, delta: float) -> None:
        self.prism = self.prism.rotated(delta)

    def move_light(self, dx: float, dy: float, aim_at_prism: bool = True) -> None:
        """
        Move the light source.

        Args:
            dx: Horizontal displacement
            dy: Vertical displacement
            aim_at_prism: Re-aim the beam at the prism center after moving
        """
        light = self.light.moved(dx, dy)
        if aim_at_prism:
            light = light.aimed_at(self.prism.center)
        self.light = light

    # =========================================================================
    # Tracing
    # =========================================================================

    def trace(self, parallel: bool = False) -> list:
        """
        Recompute all segments for the current state.

        Args:
            parallel: Trace spectral samples on a thread pool

        Returns:
            List of Segment objects in emission order.
        """
        return trace_scene(self, parallel=parallel)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'prism': self.prism.to_dict(),
            'light': self.light.to_dict(),
            'spectrum': [s.label for s in self.spectrum],
            'max_depth': self.max_depth,
            'escape_length': self.escape_length,
        }
