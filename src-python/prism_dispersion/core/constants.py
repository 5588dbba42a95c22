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
Constants used throughout the prism tracer.

Kept in a standalone module so the geometry helpers, the tracer and the
renderer can share them without circular imports.
"""

# Determinant magnitude below which a ray and a segment are treated as parallel
PARALLEL_EPSILON = 1e-6

# Minimum ray parameter t for a valid hit. Rejects the ray's own origin when
# a child ray is spawned on a surface.
MIN_HIT_DISTANCE = 1e-3

# Distance a child ray is pushed along its new direction before re-tracing
SPAWN_OFFSET = 0.01

# Depth beyond which a light path stops emitting segments.
# Depths 0..MAX_TRACE_DEPTH (inclusive) are traced.
MAX_TRACE_DEPTH = 4

# Length of the segment drawn for a ray that leaves the prism for good
ESCAPE_LENGTH = 2000.0

# Refractive indices
AIR_REFRACTIVE_INDEX = 1.0
DEFAULT_REFRACTIVE_INDEX = 1.5
MIN_REFRACTIVE_INDEX = 1.0
MAX_REFRACTIVE_INDEX = 2.5

# Interaction types recorded on emitted segments
INTERACTION_SOURCE = 'source'
INTERACTION_REFRACT = 'refract'
INTERACTION_TIR = 'tir'
