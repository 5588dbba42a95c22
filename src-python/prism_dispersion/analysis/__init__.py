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

Analysis utilities for traced segments: export, statistics and
dispersion queries.
"""

from .saving import (
    save_segments_csv,
    save_segments_json,
    filter_tir_segments,
    filter_by_label,
    get_segment_statistics,
)
from .dispersion_analysis import (
    final_segments,
    exit_angles,
    deviations,
    angular_spread,
    is_normal_dispersion,
    find_segments_inside_prism,
    find_segments_crossing_edge,
)

__all__ = [
    'save_segments_csv',
    'save_segments_json',
    'filter_tir_segments',
    'filter_by_label',
    'get_segment_statistics',
    'final_segments',
    'exit_angles',
    'deviations',
    'angular_spread',
    'is_normal_dispersion',
    'find_segments_inside_prism',
    'find_segments_crossing_edge',
]
