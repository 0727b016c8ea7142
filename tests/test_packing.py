"""Tests for the free-space tree, piece placement and offcut collection."""

from __future__ import annotations

import pytest

from panelcut.models import Offcut, Rotation
from panelcut.packing import FreeSpace
from panelcut.strategies import FirstFitTreePacker


class TestFreeSpaceSplit:
    """Tests for FreeSpace.split."""

    def test_split_creates_right_and_down_children(self) -> None:
        node = FreeSpace(0, 0, 300, 200)
        node.split(150, 50, 0.3)

        assert node.used
        assert (node.right.x, node.right.y) == (pytest.approx(150.3), 0)
        assert node.right.width == pytest.approx(149.7)
        assert node.right.height == 50
        assert (node.down.x, node.down.y) == (0, pytest.approx(50.3))
        assert node.down.width == 300
        assert node.down.height == pytest.approx(149.7)

    def test_split_clamps_negative_sizes_to_zero(self) -> None:
        node = FreeSpace(0, 0, 100, 50)
        node.split(100, 50, 0.3)

        assert node.right.width == 0
        assert node.down.height == 0

    def test_children_start_unused(self) -> None:
        node = FreeSpace(0, 0, 100, 100)
        node.split(10, 10)

        for child in (node.right, node.down):
            assert not child.used
            assert child.right is None
            assert child.down is None


class TestFreeSpaceLocate:
    """Tests for FreeSpace.locate first-fit traversal."""

    def test_locate_on_empty_root(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        assert root.locate(300, 200) is root

    def test_locate_too_large_returns_none(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        assert root.locate(301, 10) is None
        assert root.locate(10, 201) is None

    def test_locate_does_not_rotate(self) -> None:
        root = FreeSpace(0, 0, 300, 100)
        assert root.locate(100, 300) is None

    def test_right_child_searched_before_down(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 100)

        # fits both right (200×100) and down (300×100)
        assert root.locate(50, 50) is root.right

    def test_falls_through_to_down_child(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 50)

        # too tall for the right child (height 50)
        assert root.locate(50, 80) is root.down

    def test_first_fit_not_best_fit(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 150)

        # down (300×50) is the tighter fit, right (200×150) comes first
        assert root.locate(50, 50) is root.right


class TestTreeAccounting:
    """Tests for free leaves and kerf loss."""

    def test_free_leaves_right_subtree_first(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 50)
        root.right.split(50, 50)

        leaves = list(root.free_leaves())
        assert leaves == [root.right.right, root.right.down, root.down]

    def test_kerf_loss_without_kerf_is_zero(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 50)
        root.right.split(50, 20)

        assert root.kerf_loss() == pytest.approx(0)

    def test_kerf_loss_single_split(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 50, 1)

        # vertical kerf strip 1×50 plus horizontal strip 300×1
        assert root.kerf_loss() == pytest.approx(50 + 300)

    def test_used_nodes_have_both_children(self) -> None:
        root = FreeSpace(0, 0, 300, 200)
        root.split(100, 50, 0.3)
        root.down.split(300, 149.7, 0.3)

        for node in root._walk():
            if node.used:
                assert node.right is not None and node.down is not None
            else:
                assert node.right is None and node.down is None


class TestPlacePiece:
    """Tests for rotation policy resolution in place_piece."""

    @pytest.fixture
    def packer(self) -> FirstFitTreePacker:
        return FirstFitTreePacker(300, 200, 0.3)

    def test_none_rotation_places_unrotated(self, packer, make_piece) -> None:
        root = packer.new_tree()
        placed = packer.place_piece(root, make_piece("a", 150, 50, Rotation.NONE))

        assert placed is not None
        assert not placed.rotated
        assert (placed.x, placed.y) == (0, 0)

    def test_none_rotation_never_rotates(self, packer, make_piece) -> None:
        root = packer.new_tree()
        assert packer.place_piece(root, make_piece("a", 100, 250, Rotation.NONE)) is None

    def test_allowed_prefers_unrotated(self, packer, make_piece) -> None:
        root = packer.new_tree()
        placed = packer.place_piece(root, make_piece("a", 60, 40, Rotation.ALLOWED))

        assert not placed.rotated

    def test_allowed_rotates_when_needed(self, packer, make_piece) -> None:
        root = packer.new_tree()
        placed = packer.place_piece(root, make_piece("a", 100, 250, Rotation.ALLOWED))

        assert placed.rotated
        assert (placed.placed_width, placed.placed_height) == (250, 100)

    def test_forced_always_rotates(self, packer, make_piece) -> None:
        root = packer.new_tree()
        placed = packer.place_piece(root, make_piece("c", 60, 40, Rotation.FORCED))

        assert placed.rotated
        assert (placed.x, placed.y) == (0, 0)
        assert (placed.placed_width, placed.placed_height) == (40, 60)
        assert root.placed == (40, 60)

    def test_failed_placement_leaves_tree_untouched(self, packer, make_piece) -> None:
        root = packer.new_tree()
        assert packer.place_piece(root, make_piece("big", 400, 50, Rotation.ALLOWED)) is None
        assert not root.used

    def test_fits_empty_panel(self, packer, make_piece) -> None:
        assert packer.fits_empty_panel(make_piece("a", 100, 250, Rotation.ALLOWED))
        assert not packer.fits_empty_panel(make_piece("b", 100, 250, Rotation.NONE))
        assert not packer.fits_empty_panel(make_piece("c", 250, 100, Rotation.FORCED))


class TestCollectOffcuts:
    """Tests for offcut collection."""

    def test_offcuts_after_single_piece(self, make_piece) -> None:
        packer = FirstFitTreePacker(300, 200, 0)
        root = packer.new_tree()
        packer.place_piece(root, make_piece("a", 100, 50))

        assert packer.collect_offcuts(root) == [
            Offcut(100, 0, 200, 50),
            Offcut(0, 50, 300, 150),
        ]

    def test_zero_area_leaves_discarded(self, make_piece) -> None:
        packer = FirstFitTreePacker(300, 200, 0)
        root = packer.new_tree()
        packer.place_piece(root, make_piece("a", 300, 200))

        assert packer.collect_offcuts(root) == []

    def test_adjacent_offcuts_not_merged(self, make_piece) -> None:
        packer = FirstFitTreePacker(300, 200, 0)
        root = packer.new_tree()
        packer.place_piece(root, make_piece("a", 100, 50))
        packer.place_piece(root, make_piece("b", 200, 20))

        offcuts = packer.collect_offcuts(root)
        # the 200×30 remnant right of "a" is reported next to the strip below
        assert Offcut(100, 20, 200, 30) in offcuts
        assert Offcut(0, 50, 300, 150) in offcuts
        assert len(offcuts) == 2
