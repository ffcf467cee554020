import pytest

from meshscan.kdtree import (
    BoundingBox,
    KDNode,
    Triangle,
    Vector3,
    bounding_box,
    build_kd_node,
)


def tri(a, b, c):
    return Triangle(Vector3(*a), Vector3(*b), Vector3(*c))


def levels(node):
    if node is None:
        return 0
    return 1 + max(levels(node.left), levels(node.right))


def collect_nodes(node):
    if node is None:
        return []
    return [node] + collect_nodes(node.left) + collect_nodes(node.right)


def test_vector_arithmetic_round_trip():
    a = Vector3(1.5, -2.0, 4.0)
    b = Vector3(0.5, 3.0, -1.0)
    assert (a + b) - b == a
    assert a[0] == 1.5 and a[1] == -2.0 and a[2] == 4.0


def test_midpoint_of_triangle():
    t = tri((0, 0, 0), (3, 0, 0), (0, 3, 6))
    assert t.midpoint() == Vector3(1.0, 1.0, 2.0)


def test_midpoint_of_degenerate_triangle_is_its_corner():
    t = tri((2, 4, 6), (2, 4, 6), (2, 4, 6))
    assert t.midpoint() == Vector3(2, 4, 6)


@pytest.mark.parametrize(
    "lo, hi, axis",
    [
        ((0, 0, 0), (5, 1, 1), 0),
        ((0, 0, 0), (1, 5, 1), 1),
        ((0, 0, 0), (1, 1, 5), 2),
        ((0, 0, 0), (5, 5, 1), 2),
        ((0, 0, 0), (0, 0, 0), 2),
    ],
)
def test_longest_axis(lo, hi, axis):
    assert BoundingBox(Vector3(*lo), Vector3(*hi)).longest_axis() == axis


def test_bounding_box_uses_first_corners_only():
    tris = [
        tri((1, 5, 2), (100, 100, 100), (-50, -50, -50)),
        tri((-1, 0, 7), (200, 0, 0), (0, 0, 0)),
    ]
    box = bounding_box(tris)
    assert box.min_pos == Vector3(-1, 0, 2)
    assert box.max_pos == Vector3(1, 5, 7)


def test_bounding_box_of_single_triangle_is_a_point():
    t = tri((3, 4, 5), (9, 9, 9), (0, 0, 0))
    box = bounding_box([t])
    assert box.min_pos == box.max_pos == t.v0


def test_bounding_box_of_nothing_raises():
    with pytest.raises(ValueError):
        bounding_box([])


def test_empty_tree_is_a_leaf():
    node = build_kd_node([])
    assert node.is_leaf
    assert node.triangles == []
    assert node.bbox == BoundingBox()


def test_split_along_x():
    a = tri((0, 0, 0), (1, 0, 0), (0, 1, 0))
    b = tri((100, 0, 0), (101, 0, 0), (100, 1, 0))
    root = build_kd_node([a, b])
    assert root.bbox.longest_axis() == 0
    assert root.right.triangles == [a]
    assert root.left.triangles == [b]


def test_empty_side_shares_triangles_but_is_leaf():
    a = tri((10, 0, 0), (10, 1, 0), (10, 0, 1))
    b = tri((0, 100, 0), (0, 101, 0), (0, 100, 1))
    root = build_kd_node([a, b])
    assert root.bbox.longest_axis() == 1
    assert root.right.triangles == [a, b]
    assert root.left.triangles == [a, b]
    assert root.left.is_leaf
    assert root.left.bbox == BoundingBox()


def test_single_triangle_tree_depth_is_bounded():
    t = tri((0, 0, 0), (1, 0, 0), (0, 1, 0))
    root = build_kd_node([t])
    assert 2 <= levels(root) <= 13
    assert root.triangles == [t]


def test_deeper_start_gives_shorter_tree():
    t = tri((0, 0, 0), (1, 0, 0), (0, 1, 0))
    assert levels(build_kd_node([t], depth=5)) < levels(build_kd_node([t]))


def test_children_partition_parent_triangles():
    tris = [
        tri((i * 3.0, (i % 4) * 2.0, (i % 3) * 1.0), (i * 3.0 + 1, 0, 0), (0, 1, i))
        for i in range(12)
    ]
    root = build_kd_node(tris)
    for node in collect_nodes(root):
        if node.is_leaf or not node.triangles:
            continue
        left, right = node.left.triangles, node.right.triangles
        if left is right or left == right:
            assert sorted(map(id, left)) == sorted(map(id, node.triangles))
        else:
            combined = left + right
            assert len(combined) == len(node.triangles)
            assert set(map(id, combined)) == set(map(id, node.triangles))


def test_node_defaults():
    node = KDNode()
    assert node.is_leaf
    assert node.triangles == []