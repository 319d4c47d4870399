"""Data models for the SVG sprite sheet builder."""
