"""Mesh reading, k-d trees, plane fitting, rotations and scan file utilities."""

__version__ = "0.1.0"

__all__ = [
    "stl",
    "kdtree",
    "planefit",
    "crack",
    "rotations",
    "rawimage",
    "trajio",
    "curves",
]