"""Unit quaternions, spherical interpolation and Euler angle extraction."""

from __future__ import annotations

import math
from dataclasses import dataclass

# The degree conversion uses this rounded value of pi, as the scanner does.
_PI = 3.141592
_SLERP_EPSILON = 1e-7


@dataclass(frozen=True)
class Quaternion:
    """A quaternion ``scalar + x*i + y*j + z*k``."""

    scalar: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(
            self.scalar + other.scalar,
            self.x + other.x,
            self.y + other.y,
            self.z + other.z,
        )

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.scalar, -self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> "Quaternion":
        return Quaternion(
            self.scalar * factor, self.x * factor, self.y * factor, self.z * factor
        )

    __rmul__ = __mul__

    def dot(self, other: "Quaternion") -> float:
        """Four-dimensional dot product."""
        return (
            self.scalar * other.scalar
            + self.x * other.x
            + self.y * other.y
            + self.z * other.z
        )

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Quaternion":
        """Unit-length copy; a zero quaternion is returned unchanged."""
        length = self.length()
        if length == 0.0 or length == 1.0:
            return self
        return Quaternion(
            self.scalar / length, self.x / length, self.y / length, self.z / length
        )

    @classmethod
    def slerp(cls, q1: "Quaternion", q2: "Quaternion", t: float) -> "Quaternion":
        """Spherical linear interpolation from ``q1`` (t=0) to ``q2`` (t=1).

        Values of ``t`` outside [0, 1] are clamped to the end points, and the
        shorter of the two arcs is followed.
        """
        if t <= 0.0:
            return q1
        if t >= 1.0:
            return q2

        target = q2
        dot = q1.dot(q2)
        if dot < 0.0:
            target = -q2
            dot = -dot

        factor1 = 1.0 - t
        factor2 = t
        if 1.0 - dot > _SLERP_EPSILON:
            angle = math.acos(min(dot, 1.0))
            sin_angle = math.sin(angle)
            if sin_angle > _SLERP_EPSILON:
                factor1 = math.sin((1.0 - t) * angle) / sin_angle
                factor2 = math.sin(t * angle) / sin_angle
        return q1 * factor1 + target * factor2


def to_euler_angles(q: Quaternion) -> tuple[float, float, float]:
    """Roll, pitch and yaw of a quaternion, in degrees.

    Roll is the rotation about x, pitch about y and yaw about z. The
    quaternion is normalised first.
    """
    q = q.normalized()
    w, x, y, z = q.scalar, q.x, q.y, q.z

    test = x * y + z * w
    sqx = x * x
    sqy = y * y
    sqz = z * z

    pitch = math.atan2(2 * y * w - 2 * x * z, 1 - 2 * sqy - 2 * sqz)
    yaw = math.asin(max(-1.0, min(1.0, 2 * test)))
    roll = math.atan2(2 * x * w - 2 * y * z, 1 - 2 * sqx - 2 * sqz)

    scale = 180 / _PI
    return roll * scale, pitch * scale, yaw * scale