# tests/test_region_tree.py

from __future__ import annotations

from nav_core.explore.chunk import ExplorationChunk
from nav_core.explore.region_tree import RegionTree


def _assert_leaf_invariant(tree: RegionTree) -> None:
    for node in tree.iter_nodes():
        assert not (node.chunk is not None and node.children is not None)


def test_get_returns_inserted_chunk() -> None:
    tree = RegionTree()
    coords = [(0, 0), (1, 0), (-1, -1), (37, -12), (-250, 400), (999, 999)]
    chunks = {coord: ExplorationChunk() for coord in coords}

    for (x, y), chunk in chunks.items():
        tree.insert(x, y, chunk)

    for (x, y), chunk in chunks.items():
        assert tree.get(x, y) is chunk
    assert len(tree) == len(coords)
    _assert_leaf_invariant(tree)


def test_missing_coordinate_returns_none() -> None:
    tree = RegionTree()
    assert tree.get(0, 0) is None

    tree.insert(3, 4, ExplorationChunk())
    assert tree.get(4, 3) is None
    assert tree.get(-3, -4) is None


def test_reinsert_overwrites() -> None:
    tree = RegionTree()
    first, second = ExplorationChunk(), ExplorationChunk()
    tree.insert(2, 2, first)
    tree.insert(2, 2, second)

    assert tree.get(2, 2) is second
    assert len(tree) == 1


def test_coarse_tree_shares_leaves() -> None:
    # leaves are 2x2 chunks wide: (0, 0) and (1, 1) land in the same leaf
    tree = RegionTree(origin=(0.0, 0.0), extent=4.0, depth=1)
    a, b = ExplorationChunk(), ExplorationChunk()
    tree.insert(0, 0, a)
    tree.insert(1, 1, b)

    assert tree.get(0, 0) is b
    assert len(tree) == 1

    c = ExplorationChunk()
    tree.insert(3, 3, c)
    assert tree.get(3, 3) is c
    assert tree.get(0, 0) is b
    _assert_leaf_invariant(tree)


def test_depth_zero_tree_is_a_single_cell() -> None:
    tree = RegionTree(origin=(0.0, 0.0), extent=10.0, depth=0)
    a, b = ExplorationChunk(), ExplorationChunk()
    tree.insert(1, 1, a)
    tree.insert(8, 8, b)

    assert tree.get(5, 5) is b
    assert tree.root.children is None


def test_clear_forgets_everything() -> None:
    tree = RegionTree()
    tree.insert(1, 2, ExplorationChunk())
    tree.clear()

    assert tree.get(1, 2) is None
    assert len(tree) == 0
