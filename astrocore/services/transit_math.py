"""Angular helpers for deciding whether an aspect is applying.

Kept free of any ephemeris state so they can be unit-tested on bare numbers.
"""

from __future__ import annotations

from .constants import normalize

EXACT_TOLERANCE = 1e-6


def separation(lon_a: float, lon_b: float) -> float:
    """Shortest arc between two longitudes, in [0, 180]."""

    d = abs(normalize(lon_a) - normalize(lon_b))
    return min(d, 360.0 - d)


def signed_delta(moving_lon: float, reference_lon: float, aspect_angle: float) -> float:
    """Return the signed difference from the exact aspect in degrees.

    The aspect is measured on whichever side of ``reference_lon`` the moving
    body currently sits (``+angle`` ahead of it, ``-angle`` behind it). The
    result is in [-180, 180); positive means the moving body is beyond the
    exact point in the direction of increasing longitude.
    """

    raw = normalize(moving_lon - reference_lon)
    target = aspect_angle if raw <= 180.0 else -aspect_angle
    return (raw - target + 540.0) % 360.0 - 180.0


def is_applying(
    moving_lon: float,
    moving_speed: float,
    reference_lon: float,
    reference_speed: float,
    aspect_angle: float,
) -> bool:
    """Whether the separation is closing toward the exact aspect.

    An exact aspect counts as applying; bodies with effectively equal speed
    are not converging and count as separating.
    """

    delta = signed_delta(moving_lon, reference_lon, aspect_angle)
    if abs(delta) < EXACT_TOLERANCE:
        return True

    rate = moving_speed - reference_speed
    if abs(rate) < EXACT_TOLERANCE:
        return False

    return (delta > 0 and rate < 0) or (delta < 0 and rate > 0)


__all__ = ["is_applying", "separation", "signed_delta"]
