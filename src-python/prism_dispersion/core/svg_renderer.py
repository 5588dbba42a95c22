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

import svgwrite


def _blur_filter_id(blur_radius):
    return f'glow-{blur_radius:g}'.replace('.', '_')


class SVGRenderer:
    """
    SVG renderer for traced prism scenes.

    Consumes only the tracer's Segment records plus the prism and light
    source for the handles; it never feeds anything back into tracing.

    The drawing is organized into three layers (bottom to top):
    - objects: Prism outline and fill
    - rays: Traced segments, blended additively so coincident colored
      rays recombine to white before the prism
    - handles: Light source and prism center markers

    Coordinate System:
        Scene coordinates are screen coordinates (+Y down), which SVG uses
        natively, so no flip transform is applied.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        metadata_level (str): 'none', 'standard' or 'full'
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_objects (svgwrite.Group): Group for the prism
        layer_rays (svgwrite.Group): Group for segments
        layer_handles (svgwrite.Group): Group for interaction handles
    """

    def __init__(self, width=1200, height=800, background='#000000', metadata_level='full'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 1200)
            height (int): Canvas height in pixels (default: 800)
            background (str): Background fill (default: black)
            metadata_level (str): Controls how much metadata to embed.
                - 'none': No metadata (smallest files)
                - 'standard': id + class
                - 'full': All of 'standard' plus data-* attributes
        """
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self._filters = {}
        self._segment_count = 0

        # debug=False disables svgwrite's strict attribute validation, which
        # rejects data-* attributes and CSS blend modes.
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(0, 0, width, height)

        self.dwg.add(self.dwg.rect(insert=(0, 0), size=(width, height), fill=background))

        self.layer_objects = self.dwg.add(self.dwg.g(id='layer-objects'))
        self.layer_rays = self.dwg.add(self.dwg.g(id='layer-rays', style='isolation: isolate'))
        self.layer_handles = self.dwg.add(self.dwg.g(id='layer-handles'))

    def _normalize_coord(self, value):
        """Map -0.0 and values within 1e-10 of zero to 0.0."""
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _glow_filter(self, blur_radius):
        """
        Return the id of a glow filter for ``blur_radius``, creating it once.

        The glow is the blurred stroke merged under the sharp stroke. A
        canvas shadow blur of B corresponds roughly to a gaussian standard
        deviation of B / 2.
        """
        filter_id = _blur_filter_id(blur_radius)
        if filter_id not in self._filters:
            filt = self.dwg.filter(id=filter_id, x='-50%', y='-50%',
                                   width='200%', height='200%')
            filt.feGaussianBlur(in_='SourceGraphic', stdDeviation=blur_radius / 2,
                                result='blur')
            filt.feMerge(layernames=['blur', 'SourceGraphic'])
            self.dwg.defs.add(filt)
            self._filters[filter_id] = filt
        return filter_id

    def draw_segment(self, segment, opacity=None):
        """
        Draw one traced segment.

        Args:
            segment (Segment): Segment to draw
            opacity (float or None): Stroke opacity; defaults to the
                segment's intensity
        """
        p1, p2 = segment.p1, segment.p2

        # Skip segments with invalid coordinates
        if not all(math.isfinite(v) for v in (p1.x, p1.y, p2.x, p2.y)):
            return

        if opacity is None:
            opacity = segment.intensity

        line = self.dwg.line(
            start=(self._normalize_coord(p1.x), self._normalize_coord(p1.y)),
            end=(self._normalize_coord(p2.x), self._normalize_coord(p2.y)),
            stroke=segment.color,
            stroke_width=segment.stroke_width,
            stroke_opacity=opacity,
            stroke_linecap='round',
            style='mix-blend-mode: screen',
        )
        if segment.blur_radius > 0:
            line['filter'] = f'url(#{self._glow_filter(segment.blur_radius)})'

        if self.metadata_level != 'none':
            line['id'] = f'segment-{self._segment_count}'
            line['class'] = 'segment escaped' if segment.escaped else 'segment'

        if self.metadata_level == 'full':
            if segment.label is not None:
                line['data-label'] = segment.label
            line['data-depth'] = str(segment.depth)
            line['data-interaction'] = segment.interaction_type
            line['data-wavelength-offset'] = f'{segment.wavelength_offset:.4f}'

        self._segment_count += 1
        self.layer_rays.add(line)

    def draw_segments(self, segments):
        """Draw segments in emission order."""
        for segment in segments:
            self.draw_segment(segment)

    def draw_prism(self, prism, stroke='#ffffff', stroke_opacity=0.5,
                   fill='#ffffff', fill_opacity=0.02, stroke_width=2):
        """
        Draw the prism outline with a faint glass tint.

        Args:
            prism (EquilateralPrism): Prism to draw
        """
        points = [(self._normalize_coord(v.x), self._normalize_coord(v.y))
                  for v in prism.vertices()]
        polygon = self.dwg.polygon(
            points=points,
            stroke=stroke,
            stroke_opacity=stroke_opacity,
            stroke_width=stroke_width,
            fill=fill,
            fill_opacity=fill_opacity,
        )
        polygon['filter'] = f'url(#{self._glow_filter(15)})'
        if self.metadata_level != 'none':
            polygon['id'] = 'prism'
            polygon['class'] = 'prism'
        if self.metadata_level == 'full':
            polygon['data-refractive-index'] = f'{prism.base_refractive_index:.4f}'
        self.layer_objects.add(polygon)

    def draw_handles(self, light, prism):
        """Draw the light source dot and the prism center marker."""
        source = self.dwg.circle(center=(light.position.x, light.position.y), r=8,
                                 fill='#ffffff')
        source['filter'] = f'url(#{self._glow_filter(20)})'
        center = self.dwg.circle(center=(prism.center.x, prism.center.y), r=5,
                                 fill='#ffffff', fill_opacity=0.3)
        if self.metadata_level != 'none':
            source['id'] = 'light-source'
            center['id'] = 'prism-center'
        self.layer_handles.add(source)
        self.layer_handles.add(center)

    def draw_scene(self, scene, segments=None):
        """
        Draw a complete scene.

        Args:
            scene (Scene): Scene to draw
            segments (list or None): Pre-computed segments. If None, the
                scene is traced.
        """
        if segments is None:
            segments = scene.trace()
        self.draw_prism(scene.prism)
        self.draw_segments(segments)
        self.draw_handles(scene.light, scene.prism)

    def save(self, filename=None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (e.g., 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()
