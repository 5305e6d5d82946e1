"""Pixel Haze: a drifting, smoke-like animated pixel grid."""

__version__ = "0.1.0"
