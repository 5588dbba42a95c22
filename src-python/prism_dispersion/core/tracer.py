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
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from .geometry import Geometry, Intersection, Point
from .ray import Ray, Segment
from .spectrum import SpectralSample, VISIBLE_SPECTRUM, check_glass_index
from .style import SegmentStyleTable, DEFAULT_STYLE
from .constants import (
    MAX_TRACE_DEPTH,
    ESCAPE_LENGTH,
    SPAWN_OFFSET,
    INTERACTION_REFRACT,
    INTERACTION_TIR,
)

if TYPE_CHECKING:
    from .light_source import LightSource
    from ..optical_elements.prisms.equilateral import EquilateralPrism


def snell_direction(
    direction: Point,
    normal: Point,
    n1: float,
    n2: float
) -> Tuple[Point, bool]:
    """
    New direction of a ray crossing an interface.

    Uses the vector form of Snell's law. When no real refraction angle
    exists (total internal reflection) the ray is mirrored about the normal
    instead.

    Args:
        direction: Unit incident direction
        normal: Unit surface normal facing the incident medium
            (dot(direction, normal) <= 0)
        n1: Refractive index of the incident medium
        n2: Refractive index of the transmitting medium

    Returns:
        (new_direction, is_tir): the normalized outgoing direction and
        whether it was produced by total internal reflection.
    """
    eta = n1 / n2
    cos1 = -Geometry.dot(direction, normal)
    cs2 = 1 - eta * eta * (1 - cos1 * cos1)

    if cs2 < 0:
        # Total internal reflection
        reflected = Geometry.sub(
            direction,
            Geometry.scale(normal, 2 * Geometry.dot(direction, normal))
        )
        return Geometry.normalize(reflected), True

    refracted = Geometry.add(
        Geometry.scale(direction, eta),
        Geometry.scale(normal, eta * cos1 - math.sqrt(cs2))
    )
    return Geometry.normalize(refracted), False


class Tracer:
    """
    Recursive geometric-optics tracer for a single triangular prism.

    A call to trace() follows one ray: it finds the nearest prism face the
    ray hits, emits the segment up to that face, then refracts (or totally
    internally reflects) and recurses on the child ray. A ray that hits no
    face is emitted as a long escape segment and the path ends. Paths also
    end silently once the depth exceeds max_depth.

    The tracer keeps no state between calls; the same inputs always yield
    the same segment list.

    Attributes:
        max_depth (int): Deepest recursion level that still emits segments
        escape_length (float): Length of the segment drawn for an escaping ray
        style (SegmentStyleTable): Stroke width / blur lookup
        verbose (int): Verbosity level
            0 = silent
            1 = one line per traced ray
            2 = per-interface refraction details
    """

    def __init__(
        self,
        max_depth: int = MAX_TRACE_DEPTH,
        escape_length: float = ESCAPE_LENGTH,
        style: Optional[SegmentStyleTable] = None,
        verbose: int = 0
    ) -> None:
        """
        Raises:
            ValueError: If max_depth is negative or escape_length is not positive.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        if not escape_length > 0:
            raise ValueError(f"escape_length must be positive, got {escape_length}")
        self.max_depth: int = max_depth
        self.escape_length: float = escape_length
        self.style: SegmentStyleTable = style if style is not None else DEFAULT_STYLE
        self.verbose: int = verbose

    # =========================================================================
    # Public API
    # =========================================================================

    def trace(
        self,
        ray: Ray,
        prism: 'EquilateralPrism',
        depth: int = 0,
        segments: Optional[List[Segment]] = None
    ) -> List[Segment]:
        """
        Trace one ray through the prism.

        Args:
            ray: Ray to follow (unit direction)
            prism: Prism geometry and base refractive index
            depth: Recursion depth of ``ray`` (0 for a primary ray)
            segments: Output list to append to (a new list if None)

        Returns:
            The output list, with this ray's segments appended in emission
            order (each segment followed by its children's).
        """
        if segments is None:
            segments = []
        edges = [(edge.p1, edge.p2) for edge in prism.edges()]
        self._trace(ray, depth, edges, prism, segments)
        return segments

    def trace_spectrum(
        self,
        light: 'LightSource',
        prism: 'EquilateralPrism',
        spectrum: Sequence[SpectralSample] = VISIBLE_SPECTRUM,
        parallel: bool = False,
        max_workers: Optional[int] = None
    ) -> List[Segment]:
        """
        Trace the full beam: one independent pass per spectral sample.

        Args:
            light: Light source position and angle
            prism: Prism to trace through
            spectrum: Spectral samples, traced in this order
            parallel: Trace the samples on a thread pool. The result is
                identical to the sequential pass, segments grouped by
                sample in spectrum order.
            max_workers: Thread pool size when parallel is True

        Returns:
            Combined segment list.

        Raises:
            ValueError: If a sample would see a glass index below air.
        """
        check_glass_index(prism.base_refractive_index, spectrum)
        rays = light.emit(spectrum)
        edges = [(edge.p1, edge.p2) for edge in prism.edges()]

        def trace_one(ray: Ray) -> List[Segment]:
            out: List[Segment] = []
            self._trace(ray, 0, edges, prism, out)
            return out

        if parallel:
            with ThreadPoolExecutor(max_workers=max_workers) as ex:
                per_sample = list(ex.map(trace_one, rays))
        else:
            per_sample = [trace_one(ray) for ray in rays]

        segments: List[Segment] = []
        for sample_segments in per_sample:
            segments.extend(sample_segments)
        return segments

    # =========================================================================
    # Internals
    # =========================================================================

    def _closest_hit(
        self,
        ray: Ray,
        edges: List[Tuple[Point, Point]]
    ) -> Tuple[Optional[Intersection], int]:
        """Nearest valid face hit along the ray, and the face index (-1 if none)."""
        closest: Optional[Intersection] = None
        closest_index = -1
        for i, (p1, p2) in enumerate(edges):
            hit = Geometry.ray_segment_intersection(ray.origin, ray.direction, p1, p2)
            if hit is not None and (closest is None or hit.t < closest.t):
                closest = hit
                closest_index = i
        return closest, closest_index

    def _trace(
        self,
        ray: Ray,
        depth: int,
        edges: List[Tuple[Point, Point]],
        prism: 'EquilateralPrism',
        segments: List[Segment]
    ) -> None:
        if depth > self.max_depth:
            return
        if ray.is_degenerate:
            if self.verbose >= 1:
                print(f"  [depth {depth}] skipping degenerate ray {ray}")
            return

        hit, edge_index = self._closest_hit(ray, edges)

        if self.verbose >= 1:
            print(f"  [depth {depth}] {ray.label or ray.color} "
                  f"origin=({ray.origin.x:.4f}, {ray.origin.y:.4f}) "
                  f"dir=({ray.direction.x:.4f}, {ray.direction.y:.4f}) "
                  f"hit edge={edge_index}")

        if hit is None:
            # No face ahead: the ray leaves the scene
            end = Geometry.add(ray.origin, Geometry.scale(ray.direction, self.escape_length))
            style = self.style.style_for(depth, escaped=True)
            segments.append(Segment.from_ray(
                ray, end, depth, style.stroke_width, style.blur_radius, escaped=True
            ))
            return

        style = self.style.style_for(depth, escaped=False)
        segments.append(Segment.from_ray(
            ray, hit.point, depth, style.stroke_width, style.blur_radius, escaped=False
        ))

        edge_p1, edge_p2 = edges[edge_index]
        to_center = Geometry.sub(prism.center, edge_p1)
        outward = Geometry.oriented_normal(edge_p1, edge_p2, to_center)

        entering = Geometry.dot(ray.direction, outward) < 0
        n1, n2 = prism.indices_for(entering, ray.wavelength_offset)
        normal = outward if entering else Geometry.scale(outward, -1)

        new_direction, is_tir = snell_direction(ray.direction, normal, n1, n2)

        if self.verbose >= 2:
            cos1 = -Geometry.dot(ray.direction, normal)
            eta = n1 / n2
            cs2 = 1 - eta * eta * (1 - cos1 * cos1)
            print(f"    {'entering' if entering else 'exiting'} edge {edge_index}: "
                  f"n1={n1:.4f}, n2={n2:.4f}, cos1={cos1:.4f}, cs2={cs2:.4f} -> "
                  f"{'TIR' if is_tir else 'refract'}")

        origin = Geometry.add(hit.point, Geometry.scale(new_direction, SPAWN_OFFSET))
        child = ray.child(origin, new_direction, INTERACTION_TIR if is_tir else INTERACTION_REFRACT)
        self._trace(child, depth + 1, edges, prism, segments)


def trace_scene(scene, parallel: bool = False) -> List[Segment]:
    """
    Recompute the complete segment list for a scene.

    Args:
        scene: Scene holding the prism, light source, spectrum and
            tracer settings
        parallel: Trace spectral samples on a thread pool

    Returns:
        Segments for every spectral sample, in spectrum order.
    """
    tracer = Tracer(
        max_depth=scene.max_depth,
        escape_length=scene.escape_length,
        style=scene.style,
        verbose=scene.verbose
    )
    return tracer.trace_spectrum(scene.light, scene.prism, scene.spectrum, parallel=parallel)
