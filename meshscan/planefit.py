"""Least-squares plane fitting of 3D points."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

Normal = tuple[float, float, float]


class FitPlane3D:
    """Fits a plane through points and exposes its unit normal."""

    def __init__(self, points: Iterable[Sequence[float]]):
        self.points = [tuple(float(c) for c in p) for p in points]
        self.normal: Normal = (0.0, 0.0, 0.0)

    def build(self) -> Normal:
        """Fit the plane and return (and store) its normal."""
        if not self.points:
            raise ValueError("cannot fit a plane to no points")
        if any(len(p) != 3 for p in self.points):
            raise ValueError("every point must have three coordinates")

        coord = np.asarray(self.points, dtype=np.float64).T
        coord = coord - coord.mean(axis=1, keepdims=True)
        u, _, _ = np.linalg.svd(coord, full_matrices=False)
        n = u[:, -1]
        self.normal = (float(n[0]), float(n[1]), float(n[2]))
        return self.normal


def fit_plane_normal(points: Iterable[Sequence[float]]) -> Normal:
    """Unit normal of the plane that best fits the points."""
    return FitPlane3D(points).build()