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

Prism Dispersion
================

2D geometric-optics tracer for white light passing through an
equilateral glass prism.

Main modules:
- core: Vector algebra, rays, spectrum table, tracer, scene, SVG renderer
- optical_elements: The equilateral prism and closed-form prism optics
- analysis: Export and statistics over traced segments
- examples: Example scenes

Quick start:
    from prism_dispersion import Scene
    segments = Scene.default().trace()
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.tracer import Tracer
from .core.ray import Ray, Segment
from .core.light_source import LightSource
from .optical_elements.prisms.equilateral import EquilateralPrism

__all__ = [
    'Scene',
    'Tracer',
    'Ray',
    'Segment',
    'LightSource',
    'EquilateralPrism',
    '__version__',
]
