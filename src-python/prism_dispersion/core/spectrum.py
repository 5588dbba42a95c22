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
Fixed spectrum approximation used to produce dispersion.

Each sample shifts the prism's base refractive index by a small offset.
Offsets increase from red to violet, so violet bends most and red least
(normal dispersion). The numbers are a visual calibration, not measured
glass data; only their ordering matters.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .constants import AIR_REFRACTIVE_INDEX


@dataclass(frozen=True)
class SpectralSample:
    """
    One wavelength sample of the light source.

    Attributes:
        label: Color name (e.g. "red")
        color: Display color as a CSS hex string
        index_offset: Added to the prism's base refractive index
        intensity: Relative intensity in (0, 1]
    """
    label: str
    color: str
    index_offset: float
    intensity: float


# Ordered red -> violet
VISIBLE_SPECTRUM: Tuple[SpectralSample, ...] = (
    SpectralSample('red', '#ff0000', -0.03, 1.0),
    SpectralSample('orange', '#ffa500', -0.02, 0.9),
    SpectralSample('yellow', '#ffff00', -0.01, 0.9),
    SpectralSample('green', '#00ff00', 0.00, 0.9),
    SpectralSample('cyan', '#00ffff', 0.01, 0.9),
    SpectralSample('blue', '#0000ff', 0.02, 0.9),
    SpectralSample('violet', '#8b00ff', 0.03, 0.8),
)


def validate_spectrum(samples: Sequence[SpectralSample]) -> List[SpectralSample]:
    """
    Check a spectrum table before it is used for tracing.

    Args:
        samples: Spectral samples, ordered red -> violet.

    Returns:
        The samples as a list.

    Raises:
        ValueError: If the table is empty, an intensity is outside (0, 1],
            or offsets do not strictly increase along the table.
    """
    samples = list(samples)
    if not samples:
        raise ValueError("Spectrum must contain at least one sample")

    for sample in samples:
        if not 0 < sample.intensity <= 1:
            raise ValueError(
                f"Sample '{sample.label}' intensity must be in (0, 1], got {sample.intensity}"
            )

    for prev, cur in zip(samples, samples[1:]):
        if cur.index_offset <= prev.index_offset:
            raise ValueError(
                f"Index offsets must increase from red to violet: "
                f"'{prev.label}' ({prev.index_offset}) >= '{cur.label}' ({cur.index_offset})"
            )

    return samples


def sample_by_label(label: str, samples: Sequence[SpectralSample] = VISIBLE_SPECTRUM) -> SpectralSample:
    """
    Look up a sample by its color name.

    Raises:
        KeyError: If no sample has that label.
    """
    for sample in samples:
        if sample.label == label:
            return sample
    raise KeyError(f"No spectral sample labelled '{label}'")


def check_glass_index(base_refractive_index: float, samples: Sequence[SpectralSample]) -> None:
    """
    Check that every sample sees glass at least as dense as air.

    The tracer uses base_refractive_index + index_offset as the glass index,
    so the lowest offset decides whether a base index is usable.

    Raises:
        ValueError: If base_refractive_index + min(index_offset) < 1.
    """
    if not samples:
        return
    lowest = min(samples, key=lambda s: s.index_offset)
    n_glass = base_refractive_index + lowest.index_offset
    # Float noise at exactly 1.0 is not a violation
    if n_glass < AIR_REFRACTIVE_INDEX - 1e-12:
        raise ValueError(
            f"Glass index for '{lowest.label}' would be {n_glass:.4f} < {AIR_REFRACTIVE_INDEX}: "
            f"base refractive index {base_refractive_index} is too low for this spectrum "
            f"(needs >= {AIR_REFRACTIVE_INDEX - lowest.index_offset:.4f})"
        )
