"""A simple kd-tree over triangles, split at the mean triangle midpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

_MAX_DEPTH = 10


@dataclass(frozen=True)
class Vector3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]


@dataclass(frozen=True)
class Triangle:
    """A triangle given by its three corners."""

    v0: Vector3
    v1: Vector3
    v2: Vector3

    def midpoint(self) -> Vector3:
        """The centroid of the three corners."""
        total = self.v0 + self.v1 + self.v2
        return Vector3(total.x / 3, total.y / 3, total.z / 3)


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned box."""

    min_pos: Vector3 = Vector3()
    max_pos: Vector3 = Vector3()

    def longest_axis(self) -> int:
        """Index of the strictly longest axis; ties fall back to 2 (z)."""
        d_x = abs(self.max_pos.x - self.min_pos.x)
        d_y = abs(self.max_pos.y - self.min_pos.y)
        d_z = abs(self.max_pos.z - self.min_pos.z)
        if d_x > d_y and d_x > d_z:
            return 0
        if d_y > d_x and d_y > d_z:
            return 1
        return 2


@dataclass
class KDNode:
    """A tree node holding its triangles, their box and two children."""

    triangles: list[Triangle] = field(default_factory=list)
    bbox: BoundingBox = field(default_factory=BoundingBox)
    left: Optional["KDNode"] = None
    right: Optional["KDNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def bounding_box(triangles: Iterable[Triangle]) -> BoundingBox:
    """Box spanned by the first corner (``v0``) of each triangle."""
    tris = list(triangles)
    if not tris:
        raise ValueError("cannot build a bounding box of no triangles")
    first = tris[0].v0
    if len(tris) == 1:
        return BoundingBox(first, first)
    corners = [t.v0 for t in tris]
    return BoundingBox(
        Vector3(
            min(c.x for c in corners),
            min(c.y for c in corners),
            min(c.z for c in corners),
        ),
        Vector3(
            max(c.x for c in corners),
            max(c.y for c in corners),
            max(c.z for c in corners),
        ),
    )


def build_kd_node(triangles: Iterable[Triangle], depth: int = 0) -> KDNode:
    """Build a kd-tree over the triangles, starting at the given depth.

    Triangles are split on the longest axis of the box at the mean
    midpoint. The mean's coordinate on that axis is compared with the
    x coordinate of each triangle's midpoint; triangles at or below it go
    right, the others left. When one side is empty it refers to the other
    side's triangles but becomes a leaf. Recursion stops below depth 10.
    """
    tris = list(triangles)
    return _build(tris, len(tris), depth)


def _build(tris: list[Triangle], size: int, depth: int) -> KDNode:
    node = KDNode(triangles=tris)
    if size == 0:
        return node

    used = tris[:size]
    node.bbox = bounding_box(used)

    total = Vector3()
    for tri in used:
        total = total + tri.midpoint()
    mean = Vector3(total.x / size, total.y / size, total.z / size)
    pivot = mean[node.bbox.longest_axis()]

    right = [t for t in used if pivot >= t.midpoint().x]
    left = [t for t in used if not pivot >= t.midpoint().x]
    size_left, size_right = len(left), len(right)

    if size_left == 0 and size_right > 0:
        left = right
    if size_right == 0 and size_left > 0:
        right = left

    if depth <= _MAX_DEPTH:
        node.left = _build(left, size_left, depth + 1)
        node.right = _build(right, size_right, depth + 1)
    else:
        node.left = KDNode()
        node.right = KDNode()
    return node