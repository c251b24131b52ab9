"""
Unit Tests for Guillotine Algorithm

Covers placement, gap handling and the free-rectangle bookkeeping.
"""

import pytest

from collage_toolkit.core.models import AlgorithmInput
from collage_toolkit.layout.algorithms import guillotine_algorithm
from collage_toolkit.layout.algorithms.guillotine import _FreeRect, _split_free_rect, _try_merge
from collage_toolkit.layout.helpers import LayoutInvariantError


class TestGuillotineAlgorithm:
    """Tests for guillotine_algorithm()."""

    def test_layout_when_image_matches_page_then_full_coverage(self, make_images):
        out = guillotine_algorithm(AlgorithmInput(make_images((10, 10)), 10, 10, seed=1))

        assert out.placed_count == 1
        rect = out.placements[0].rect
        assert (rect.x, rect.y, rect.width, rect.height) == (0, 0, 10, 10)
        assert out.coverage == pytest.approx(1.0)
        assert out.unused_image_ids == ()

    def test_layout_when_gap_set_then_second_image_offset_by_gap(self, make_images):
        images = make_images((4, 4), (4, 4))
        out = guillotine_algorithm(AlgorithmInput(images, 10, 10, gap_inches=1, seed=1))

        positions = sorted((p.rect.x, p.rect.y) for p in out.placements)
        assert positions == [(0, 0), (5, 0)]

    def test_layout_when_gap_leaves_no_room_then_second_image_unused(self, make_images):
        """5 + 0.5 + 5 exceeds a 10 inch page."""
        images = make_images((5, 10), (5, 10))
        out = guillotine_algorithm(AlgorithmInput(images, 10, 10, gap_inches=0.5, seed=1))

        assert out.placed_count == 1
        assert len(out.unused_image_ids) == 1

    def test_layout_when_gap_zero_then_halves_tile_page(self, make_images):
        images = make_images((5, 10), (5, 10))
        out = guillotine_algorithm(AlgorithmInput(images, 10, 10, seed=1))

        assert out.placed_count == 2
        assert out.coverage == pytest.approx(1.0)

    def test_layout_when_image_larger_than_page_then_unused(self, make_images):
        images = make_images((11, 2), (2, 2))
        out = guillotine_algorithm(AlgorithmInput(images, 10, 10, seed=1))

        assert out.unused_image_ids == ("img0",)
        assert out.placed_ids == {"img1"}

    def test_layout_when_placed_then_native_size(self, mixed_input):
        out = guillotine_algorithm(mixed_input)
        assert all(p.scale_factor == 1.0 for p in out.placements)


class TestFreeRectSplit:
    """Tests for _split_free_rect()."""

    def test_split_when_right_strip_narrower_then_horizontal_cut(self):
        free = []
        _split_free_rect(_FreeRect(0, 0, 10, 10), 6, 2, free)

        assert free == [_FreeRect(6, 0, 4, 2), _FreeRect(0, 2, 10, 8)]

    def test_split_when_bottom_strip_shorter_then_vertical_cut(self):
        free = []
        _split_free_rect(_FreeRect(0, 0, 10, 10), 2, 6, free)

        assert free == [_FreeRect(2, 0, 8, 10), _FreeRect(0, 6, 2, 4)]

    def test_split_when_leftover_is_sliver_then_dropped(self):
        free = []
        _split_free_rect(_FreeRect(0, 0, 10, 10), 9.95, 4, free)

        assert free == [_FreeRect(0, 4, 10, 6)]

    def test_split_when_free_list_holds_degenerate_rect_then_raises(self):
        free = [_FreeRect(0, 0, 0, 3)]
        with pytest.raises(LayoutInvariantError):
            _split_free_rect(_FreeRect(0, 0, 10, 10), 2, 2, free)


class TestFreeRectMerge:
    """Tests for _try_merge()."""

    def test_merge_when_stacked_with_shared_edge_then_combined(self):
        a = _FreeRect(0, 0, 5, 2)
        assert _try_merge(a, _FreeRect(0, 2, 5, 3)) is True
        assert a == _FreeRect(0, 0, 5, 5)

    def test_merge_when_second_rect_above_then_combined_from_top(self):
        a = _FreeRect(0, 4, 5, 2)
        assert _try_merge(a, _FreeRect(0, 1, 5, 3)) is True
        assert a == _FreeRect(0, 1, 5, 5)

    def test_merge_when_side_by_side_then_combined(self):
        a = _FreeRect(3, 0, 2, 4)
        assert _try_merge(a, _FreeRect(0, 0, 3, 4)) is True
        assert a == _FreeRect(0, 0, 5, 4)

    def test_merge_when_edges_differ_then_unchanged(self):
        a = _FreeRect(0, 0, 5, 2)
        assert _try_merge(a, _FreeRect(0, 3, 5, 2)) is False
        assert a == _FreeRect(0, 0, 5, 2)

    def test_merge_when_widths_differ_then_not_merged(self):
        a = _FreeRect(0, 0, 5, 2)
        assert _try_merge(a, _FreeRect(0, 2, 4, 2)) is False
