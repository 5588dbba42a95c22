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
Dispersion Queries
===============================================================================
Post-trace questions about a segment list:

- Where does each color leave the prism, and at what angle?
- How wide is the fan of escaping colors?
- Does violet deviate more than red (normal dispersion)?
- Which segments run inside the glass?
===============================================================================
"""

import math
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

import numpy as np
from shapely.geometry import LineString, Point as ShapelyPoint

from ..core.ray import Segment

if TYPE_CHECKING:
    from ..optical_elements.prisms.equilateral import EquilateralPrism


def final_segments(segments: Sequence[Segment]) -> Dict[Optional[str], Segment]:
    """
    Last escape segment emitted for each spectral sample label.

    Labels whose path was cut off by the depth limit (no escape segment)
    are omitted.
    """
    result: Dict[Optional[str], Segment] = {}
    for seg in segments:
        if seg.escaped:
            result[seg.label] = seg
    return result


def exit_angles(segments: Sequence[Segment], degrees: bool = True) -> Dict[Optional[str], float]:
    """
    Direction angle of each color's final escape segment.

    Args:
        segments: Segments from a full spectrum trace
        degrees: Return degrees (default) instead of radians

    Returns:
        Mapping label -> angle from +X.
    """
    finals = final_segments(segments)
    labels = list(finals.keys())
    angles = np.array([finals[label].direction_angle for label in labels])
    if degrees:
        angles = np.degrees(angles)
    return {label: float(angle) for label, angle in zip(labels, angles)}


def deviations(
    segments: Sequence[Segment],
    incident_angle: float,
    degrees: bool = True
) -> Dict[Optional[str], float]:
    """
    Absolute angle between the incident beam and each color's escape direction.

    Args:
        segments: Segments from a full spectrum trace
        incident_angle: Beam direction of the light source, in radians
        degrees: Return degrees (default) instead of radians

    Returns:
        Mapping label -> deviation in [0, pi] (or [0, 180]).
    """
    finals = final_segments(segments)
    labels = list(finals.keys())
    out = np.array([finals[label].direction_angle for label in labels]) - incident_angle
    # Wrap into [-pi, pi] before taking the magnitude
    out = np.abs(np.arctan2(np.sin(out), np.cos(out)))
    if degrees:
        out = np.degrees(out)
    return {label: float(d) for label, d in zip(labels, out)}


def angular_spread(segments: Sequence[Segment], degrees: bool = True) -> float:
    """
    Angle between the most and least deviated escaping colors.

    Returns 0.0 when fewer than two colors escape.
    """
    finals = final_segments(segments)
    if len(finals) < 2:
        return 0.0
    angles = np.unwrap(np.array([seg.direction_angle for seg in finals.values()]))
    spread = float(np.ptp(angles))
    return math.degrees(spread) if degrees else spread


def is_normal_dispersion(
    segments: Sequence[Segment],
    incident_angle: float,
    order: Sequence[str]
) -> bool:
    """
    True if deviation increases strictly along ``order`` (e.g. red -> violet).

    Labels missing from the traced escapes are skipped.
    """
    devs = deviations(segments, incident_angle, degrees=False)
    values = [devs[label] for label in order if label in devs]
    if len(values) < 2:
        return False
    return bool(np.all(np.diff(values) > 0))


def find_segments_inside_prism(
    segments: Sequence[Segment],
    prism: 'EquilateralPrism'
) -> List[Segment]:
    """
    Segments whose midpoint lies inside the prism.

    Uses the prism's Shapely polygon; a segment running through the glass
    between two faces has its midpoint strictly inside.
    """
    poly = prism.to_polygon()
    result = []
    for seg in segments:
        mid = ShapelyPoint((seg.p1.x + seg.p2.x) / 2, (seg.p1.y + seg.p2.y) / 2)
        if poly.contains(mid):
            result.append(seg)
    return result


def find_segments_crossing_edge(
    segments: Sequence[Segment],
    prism: 'EquilateralPrism',
    edge_index: int
) -> List[Segment]:
    """
    Segments that touch or cross one prism face.

    Raises:
        IndexError: If edge_index is not 0, 1 or 2.
    """
    if edge_index not in (0, 1, 2):
        raise IndexError(f"edge_index must be 0, 1 or 2, got {edge_index}")
    edge_line = prism.edges()[edge_index].to_line().to_shapely()
    result = []
    for seg in segments:
        seg_line = LineString([(seg.p1.x, seg.p1.y), (seg.p2.x, seg.p2.y)])
        # Endpoints sit on the face up to float error
        if seg_line.distance(edge_line) < 1e-6:
            result.append(seg)
    return result
