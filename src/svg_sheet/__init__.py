"""Combine a directory of SVG icons into a single sprite sheet."""

__version__ = "0.1.0"
