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

import os
import sys

# Add parent directories to path to import prism_dispersion modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from prism_dispersion.core.scene import Scene
from prism_dispersion.core.svg_renderer import SVGRenderer
from prism_dispersion.analysis import (
    save_segments_csv,
    get_segment_statistics,
    exit_angles,
    angular_spread,
    is_normal_dispersion,
)


def dispersion_demo(refractive_index=1.5, verbose=0):
    """White light through an equilateral prism.

    The reference layout: a 250-unit prism rotated by 30 degrees sits in
    the middle of a 1200x800 canvas. A white beam starts at 15% of the
    width, tilted by -0.1 rad, and is traced once per spectral sample.
    The seven colors coincide until the first face, separate inside the
    glass, and leave as a fan with violet deviated most.
    """
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)
    print("Tracing white light through an equilateral prism...\n")

    scene = Scene.default(refractive_index=refractive_index)
    scene.name = 'dispersion_demo'
    scene.verbose = verbose

    segments = scene.trace()

    stats = get_segment_statistics(segments)
    print(f"  Segments: {stats['total_segments']}")
    print(f"  Escaped:  {stats['escaped_segments']}")
    print(f"  TIR:      {stats['tir_segments']}")
    print(f"  Deepest:  {stats['max_depth']}")

    print("\n  Exit angles (degrees):")
    for label, angle in exit_angles(segments).items():
        print(f"    {label:>7}: {angle:8.3f}")
    print(f"\n  Angular spread: {angular_spread(segments):.3f} deg")

    order = [s.label for s in scene.spectrum]
    print(f"  Normal dispersion: {is_normal_dispersion(segments, scene.light.angle, order)}")

    renderer = SVGRenderer(width=int(scene.width), height=int(scene.height))
    renderer.draw_scene(scene, segments)
    svg_path = os.path.join(output_dir, 'dispersion_demo.svg')
    renderer.save(svg_path)
    csv_path = save_segments_csv(segments, output_dir, 'dispersion_demo.csv')

    print(f"\n  SVG written to {svg_path}")
    print(f"  CSV written to {csv_path}")
    return scene, segments


if __name__ == "__main__":
    n = float(sys.argv[1]) if len(sys.argv) > 1 else 1.5
    dispersion_demo(refractive_index=n)
