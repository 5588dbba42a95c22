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

from .geometry import geometry, Point, Vector, Line, Intersection, Geometry
from . import constants
from .ray import Ray, Segment
from .spectrum import SpectralSample, VISIBLE_SPECTRUM
from .style import SegmentStyle, SegmentStyleTable, DEFAULT_STYLE
from .light_source import LightSource
from .tracer import Tracer, snell_direction, trace_scene
from .scene import Scene
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Vector', 'Line', 'Intersection', 'Geometry',
    'constants',
    'Ray', 'Segment',
    'SpectralSample', 'VISIBLE_SPECTRUM',
    'SegmentStyle', 'SegmentStyleTable', 'DEFAULT_STYLE',
    'LightSource',
    'Tracer', 'snell_direction', 'trace_scene',
    'Scene',
    'SVGRenderer',
]
