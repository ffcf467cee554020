"""Layout of the control points of a crack defect."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from typing import Optional

_W_MAX = 1800.0
_L_MAX = 1000.0
_CENTRE = 0.5


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _to_float(token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    try:
        return _f32(value)
    except OverflowError:
        return 0.0


def parse_distribution(text: str) -> list[float]:
    """Parse a comma separated list of numbers; bad entries read as 0."""
    cleaned = text.replace(" ", "").replace(",", " ")
    return [_to_float(token) for token in cleaned.split(" ")]


@dataclass
class CrackLayout:
    """Relative positions along (lengths) and across (widths) a crack."""

    lengths: list[float]
    widths: list[float]
    display_lengths: Optional[list[float]] = field(default=None, repr=False)

    @classmethod
    def from_point_count(cls, n_points: int) -> "CrackLayout":
        """Evenly spaced layout with ``n_points`` intermediate points."""
        if n_points < 0:
            raise ValueError("the number of intermediate points cannot be negative")
        v = _f32(1 / (n_points + 1))
        v2 = _f32(int(v * 100 + 0.5) / 100.0)

        lengths = [0.0]
        display = [0.0]
        i = 0
        while i < n_points:
            lengths.append(_f32(v + _f32(v * i)))
            display.append(_f32(v2 + _f32(v2 * i)))
            i += 1
        lengths.append(1.0)
        display.append(1.0)
        widths = [_CENTRE] * len(lengths)
        return cls(lengths=lengths, widths=widths, display_lengths=display)

    def length_text(self) -> str:
        """Comma separated text of the length positions."""
        values = self.display_lengths if self.display_lengths is not None else self.lengths
        return ", ".join(format(v, "g") for v in values)

    def width_text(self) -> str:
        """Comma separated text of the width positions."""
        return ", ".join(format(v, "g") for v in self.widths)

    def polyline(
        self, n_points: int, w_max: float = _W_MAX, l_max: float = _L_MAX
    ) -> list[tuple[float, float]]:
        """Drawing coordinates of the crack's ``n_points + 2`` vertices."""
        needed = n_points + 2
        if not self.widths or len(self.lengths) < needed or len(self.widths) < needed:
            raise ValueError(f"layout has fewer than {needed} points")
        points = [(0.0, l_max * self.widths[0])]
        for length, width in zip(self.lengths[1:needed], self.widths[1:needed]):
            points.append((w_max * length, l_max * width))
        return points