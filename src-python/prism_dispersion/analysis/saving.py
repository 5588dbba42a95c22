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
Segment Data Export Utilities
===============================================================================
Exports traced segments for inspection outside Python:

- CSV: One row per segment with geometry, style and lineage columns
- JSON: The scene description plus the segment list
===============================================================================
"""

import csv
import json
from pathlib import Path
from typing import List, Optional, Union

from ..core.ray import Segment


def save_segments_csv(
    segments: List[Segment],
    output_path: Union[str, Path],
    filename: str = "segments.csv",
    precision_coords: int = 4,
) -> Path:
    """
    Export segment data to a CSV file.

    Args:
        segments: List of Segment objects to export.
        output_path: Directory path where the CSV file will be saved.
        filename: Name of the output CSV file (default: "segments.csv").
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> output_file = save_segments_csv(scene.trace(), "./output")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        writer.writerow([
            'segment_index',
            'label',
            'color',
            'p1_x',
            'p1_y',
            'p2_x',
            'p2_y',
            'length',
            'depth',
            'interaction_type',
            'escaped',
            'tir_count',
            'wavelength_offset',
            'intensity',
            'stroke_width',
            'blur_radius',
        ])

        coord_fmt = f"{{:.{precision_coords}f}}"

        for i, seg in enumerate(segments):
            writer.writerow([
                i,
                seg.label if seg.label is not None else '',
                seg.color,
                coord_fmt.format(seg.p1.x),
                coord_fmt.format(seg.p1.y),
                coord_fmt.format(seg.p2.x),
                coord_fmt.format(seg.p2.y),
                coord_fmt.format(seg.length),
                seg.depth,
                seg.interaction_type,
                seg.escaped,
                seg.tir_count,
                seg.wavelength_offset,
                seg.intensity,
                seg.stroke_width,
                seg.blur_radius,
            ])

    return csv_file


def save_segments_json(
    segments: List[Segment],
    output_path: Union[str, Path],
    filename: str = "segments.json",
    scene=None,
) -> Path:
    """
    Export segments (and optionally the scene description) to JSON.

    Args:
        segments: List of Segment objects to export.
        output_path: Directory path where the JSON file will be saved.
        filename: Name of the output JSON file (default: "segments.json").
        scene: Optional Scene whose to_dict() is stored under "scene".

    Returns:
        Path: Full path to the created JSON file.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    json_file = output_dir / filename
    payload = {
        'scene': scene.to_dict() if scene is not None else None,
        'segments': [seg.to_dict() for seg in segments],
    }
    with open(json_file, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2)

    return json_file


def filter_tir_segments(segments: List[Segment], tir_only: bool = True) -> List[Segment]:
    """
    Filter segments based on TIR (Total Internal Reflection) lineage.

    Args:
        segments: List of Segment objects to filter.
        tir_only: If True, return segments whose ray lineage includes a TIR.
            If False, return the others.
    """
    if tir_only:
        return [seg for seg in segments if seg.tir_count > 0]
    return [seg for seg in segments if seg.tir_count == 0]


def filter_by_label(segments: List[Segment], label: Optional[str]) -> List[Segment]:
    """Segments produced by one spectral sample."""
    return [seg for seg in segments if seg.label == label]


def get_segment_statistics(segments: List[Segment]) -> dict:
    """
    Compute statistics about a collection of segments.

    Returns:
        dict: Dictionary containing:
            - total_segments: Total number of segments
            - escaped_segments: Number of escape segments
            - tir_segments: Number of segments produced directly by TIR
            - max_depth: Deepest recursion level that emitted a segment
            - max_tir_count: Maximum TIR count in any lineage
            - per_label: Segment count per spectral sample label
            - total_length: Sum of all segment lengths
    """
    if not segments:
        return {
            'total_segments': 0,
            'escaped_segments': 0,
            'tir_segments': 0,
            'max_depth': 0,
            'max_tir_count': 0,
            'per_label': {},
            'total_length': 0.0,
        }

    per_label = {}
    for seg in segments:
        per_label[seg.label] = per_label.get(seg.label, 0) + 1

    return {
        'total_segments': len(segments),
        'escaped_segments': sum(1 for seg in segments if seg.escaped),
        'tir_segments': sum(1 for seg in segments if seg.is_tir_result),
        'max_depth': max(seg.depth for seg in segments),
        'max_tir_count': max(seg.tir_count for seg in segments),
        'per_label': per_label,
        'total_length': sum(seg.length for seg in segments),
    }
