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
PRISM UTILITIES
===============================================================================
Closed-form prism optics:
- Minimum deviation angle
- Incidence angle for minimum deviation
- Deviation at arbitrary incidence
- Critical angle for total internal reflection

These give the expected answer for a thin symmetric pass through the
prism, which the developer tests compare against the traced paths.
===============================================================================
"""

from __future__ import annotations

import math


def minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Minimum deviation angle (degrees) for a prism.

    Formula: D_min = 2 * arcsin(n * sin(A/2)) - A

    Args:
        apex_angle_deg: Prism apex angle in degrees.
        n: Refractive index of the prism material.

    Returns:
        Minimum deviation angle in degrees.

    Raises:
        ValueError: If the calculation is impossible (n * sin(A/2) > 1).

    Example:
        >>> minimum_deviation(60.0, 1.5)
        37.18...
    """
    A = math.radians(apex_angle_deg)
    arg = n * math.sin(A / 2)

    if arg > 1.0:
        raise ValueError(
            f"Minimum deviation impossible: n * sin(A/2) = {arg:.4f} > 1. "
            f"Try a smaller apex angle or lower refractive index."
        )

    return math.degrees(2 * math.asin(arg) - A)


def incidence_for_minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Incidence angle (degrees) that produces minimum deviation.

    Formula: theta_i = (A + D_min) / 2
    """
    return (apex_angle_deg + minimum_deviation(apex_angle_deg, n)) / 2


def deviation_at_incidence(apex_angle_deg: float, n: float, theta_i_deg: float) -> float:
    """
    Total deviation for arbitrary incidence angle.

    Applies Snell's law at both faces in turn.

    Args:
        apex_angle_deg: Prism apex angle in degrees.
        n: Refractive index of the prism material.
        theta_i_deg: Angle of incidence in degrees (from surface normal).

    Returns:
        Total deviation angle in degrees, or float('nan') if the ray is
        totally internally reflected at the second face.
    """
    A = math.radians(apex_angle_deg)
    theta_i = math.radians(theta_i_deg)

    r1 = math.asin(math.sin(theta_i) / n)
    r2 = A - r1

    sin_theta_t = n * math.sin(r2)
    if abs(sin_theta_t) > 1.0:
        return float('nan')

    theta_t = math.asin(sin_theta_t)
    return math.degrees(theta_i + theta_t - A)


def critical_angle(n_inside: float, n_outside: float = 1.0) -> float:
    """
    Critical angle in degrees for light leaving a denser medium.

    Args:
        n_inside: Refractive index the ray travels in.
        n_outside: Refractive index beyond the face.

    Returns:
        Critical angle in degrees.

    Raises:
        ValueError: If n_inside <= n_outside (TIR impossible).

    Example:
        >>> critical_angle(1.5)
        41.81...
    """
    if n_inside <= n_outside:
        raise ValueError(
            f"TIR impossible: n_inside ({n_inside}) must be > n_outside ({n_outside})"
        )
    return math.degrees(math.asin(n_outside / n_inside))
