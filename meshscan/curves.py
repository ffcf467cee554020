"""Cubic B-spline interpolation and small helpers for scan profiles."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

# Marks a profile sample where the sensor saw nothing.
_NO_DATA = -1


def bspline_basis_matrix(t: float) -> np.ndarray:
    """The 4x4 cubic B-spline basis matrix evaluated at parameter ``t``.

    Only the first row is used as blending weights for the four control
    points of a segment.
    """
    t2 = t * t
    t3 = t2 * t
    return np.array(
        [
            [
                -1.0 / 6 * t3 + 0.5 * t2 - 0.5 * t + 1.0 / 6,
                2.0 / 3 * t3 - t2 + 0.5,
                -1.0 / 2 * t3 + 0.5 * t2 + 0.5 * t + 1.0 / 2,
                -1.0 / 6 * t3,
            ],
            [0.5 * t3 - t2 + 2.0 / 3, -t3 + 1.0, 0.5 * t3 - 2.0 * t2 + 2.0 / 3, 0.0],
            [
                -0.5 * t3 + 0.5 * t2 + 0.5 * t + 1.0 / 2,
                2.0 / 3 * t3 - 2.0 * t2 + 0.5,
                -t3 + t2 + t + 1.0 / 6,
                0.0,
            ],
            [1.0 / 6 * t3, 0.0, 0.0, 0.0],
        ],
        dtype=np.float64,
    )


def interpolate_bspline(
    control_points: Sequence[Sequence[float]], num_points: int
) -> list[tuple[float, float, float]]:
    """Sample ``num_points`` points on each segment of a 3D B-spline path.

    A segment starts at every control point but the last four, so fewer
    than four control points give an empty path.
    """
    if num_points < 2:
        raise ValueError("at least two points per segment are needed")
    points = np.asarray(control_points, dtype=np.float64).reshape(-1, 3)
    segments = len(points) - 3
    path: list[tuple[float, float, float]] = []
    for start in range(max(segments, 0)):
        window = points[start : start + 4]
        for j in range(num_points):
            weights = bspline_basis_matrix(j / (num_points - 1))[0]
            x, y, z = weights @ window
            path.append((float(x), float(y), float(z)))
    return path


def find_most_similar_value(
    values: Sequence[float], value: float
) -> tuple[float, int]:
    """The entry closest to ``value`` and its index; ties go to the first."""
    if not values:
        raise ValueError("cannot search an empty sequence")
    index = min(range(len(values)), key=lambda i: abs(values[i] - value))
    return values[index], index


def find_local_extrema(
    data: Sequence[float],
) -> tuple[list[int], list[int], list[int]]:
    """Indices of strict local maxima, strict local minima, and both in order.

    End points and samples equal to -1 (no data) are never extrema.
    """
    maxima: list[int] = []
    minima: list[int] = []
    both: list[int] = []
    for i in range(1, len(data) - 1):
        prev, here, nxt = data[i - 1], data[i], data[i + 1]
        if here == _NO_DATA:
            continue
        if here > nxt and here > prev:
            maxima.append(i)
            both.append(i)
        elif here < nxt and here < prev:
            minima.append(i)
            both.append(i)
    return maxima, minima, both


def is_point_in_volume(
    point: Iterable[float], lower: Iterable[float], upper: Iterable[float]
) -> bool:
    """Whether the point lies strictly inside the axis-aligned box."""
    p = tuple(point)
    lo = tuple(lower)
    hi = tuple(upper)
    if not len(p) == len(lo) == len(hi) == 3:
        raise ValueError("point and box corners must have three coordinates")
    return all(a < b < c for a, b, c in zip(lo, p, hi))