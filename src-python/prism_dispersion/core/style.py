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

"""
Stroke width and glow radius for emitted segments.

These are visual tuning values, not physics. The primary beam is drawn
thick and sharp; bounced rays are thinner inside the prism, and the
escaping fan after the prism is wide and diffuse.
"""

from typing import Dict, NamedTuple, Optional


class SegmentStyle(NamedTuple):
    stroke_width: float
    blur_radius: float


class SegmentStyleTable:
    """
    Lookup of SegmentStyle by recursion depth and by whether the segment
    ends on a prism face (hit) or leaves the scene (escape).

    Attributes:
        hit_primary: Style of a depth-0 segment ending on a face
        hit_bounced: Style of a deeper segment ending on a face
        escape_primary: Style of a depth-0 segment that escapes
        escape_by_depth: Per-depth overrides for escaping segments
        escape_default: Style of any other escaping segment
    """

    def __init__(
        self,
        hit_primary: SegmentStyle = SegmentStyle(3.0, 15.0),
        hit_bounced: SegmentStyle = SegmentStyle(1.5, 8.0),
        escape_primary: SegmentStyle = SegmentStyle(3.0, 10.0),
        escape_by_depth: Optional[Dict[int, SegmentStyle]] = None,
        escape_default: SegmentStyle = SegmentStyle(6.0, 20.0)
    ):
        self.hit_primary = hit_primary
        self.hit_bounced = hit_bounced
        self.escape_primary = escape_primary
        if escape_by_depth is None:
            escape_by_depth = {2: SegmentStyle(2.0, 20.0)}
        self.escape_by_depth = dict(escape_by_depth)
        self.escape_default = escape_default

    def style_for(self, depth: int, escaped: bool) -> SegmentStyle:
        if not escaped:
            return self.hit_primary if depth == 0 else self.hit_bounced
        if depth == 0:
            return self.escape_primary
        return self.escape_by_depth.get(depth, self.escape_default)


DEFAULT_STYLE = SegmentStyleTable()
