"""Sidereal chart engine: positions, nakshatras, equal houses and aspects."""

__version__ = "0.3.0"
