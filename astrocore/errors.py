"""Typed failures raised by the chart engine.

Every computation failure surfaces as one of these; nothing in the engine
substitutes a default position for a failed calculation.
"""

from __future__ import annotations


class AstroCoreError(Exception):
    """Base class for all chart engine errors."""


class InvalidTimezoneError(AstroCoreError, ValueError):
    """Raised when a timezone identifier cannot be resolved."""

    def __init__(self, tz: object):
        self.tz = tz
        super().__init__(f"Unknown timezone: {tz!r}")


class IncompleteLocationError(AstroCoreError, ValueError):
    """Raised when latitude, longitude or the timezone is missing."""


class CoordinateRangeError(AstroCoreError, ValueError):
    """Raised when a coordinate is outside its valid range."""

    def __init__(self, field: str, value: object, lo: float, hi: float):
        self.field = field
        self.value = value
        super().__init__(f"{field}={value!r} outside [{lo:g}, {hi:g}]")


class UnsupportedAyanamsaError(AstroCoreError, ValueError):
    """Raised for an ayanamsa system name that has no definition."""

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Unsupported ayanamsha: {name!r}")


class BodyComputationError(AstroCoreError):
    """Raised when the position of a single body cannot be computed."""

    def __init__(self, body: object, reason: str = ""):
        self.body = body
        label = getattr(body, "value", body)
        msg = f"Position of {label} could not be computed"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class ChartIntegrityError(AstroCoreError):
    """Raised when an assembled chart violates a structural invariant."""


class InvalidSettingError(AstroCoreError, ValueError):
    """Raised when an environment setting has an unusable value."""

    def __init__(self, name: str, value: object):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for {name}: {value!r}")


__all__ = [
    "AstroCoreError",
    "BodyComputationError",
    "ChartIntegrityError",
    "CoordinateRangeError",
    "IncompleteLocationError",
    "InvalidSettingError",
    "InvalidTimezoneError",
    "UnsupportedAyanamsaError",
]
