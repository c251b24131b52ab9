"""
Unit Tests for Spiral Algorithm

Covers ring filling and each of the three post-passes on hand-built
placements.
"""

import pytest

from collage_toolkit.core.models import AlgorithmInput, CollageRect, PlacedImage
from collage_toolkit.layout.algorithms import spiral_algorithm
from collage_toolkit.layout.algorithms.spiral import (
    expand_to_fill_center,
    shift_outward,
    tuck_placements,
)
from collage_toolkit.layout.geometry import rects_intersect


def _placed(image_id, x, y, w, h, scale=1.0):
    return PlacedImage(image_id, CollageRect(x, y, w, h), scale_factor=scale)


class TestSpiralAlgorithm:
    """Tests for spiral_algorithm()."""

    def test_layout_when_single_image_then_stretch_capped_at_one_and_half(self, make_images):
        out = spiral_algorithm(AlgorithmInput(make_images((2, 2)), 10, 10, seed=1))

        assert out.placed_count == 1
        placement = out.placements[0]
        assert placement.scale_factor == pytest.approx(1.5)
        assert (placement.rect.x, placement.rect.y) == (0, 0)
        assert placement.rect.width == pytest.approx(3.0)

    def test_layout_when_top_edge_holds_all_then_stretched_to_span_it(self, make_images):
        images = make_images((2, 2), (2, 2), (2, 2), (2, 2))
        out = spiral_algorithm(AlgorithmInput(images, 10, 10, seed=1))

        assert out.placed_count == 4
        assert all(p.rect.y == 0 for p in out.placements)
        assert all(p.scale_factor == pytest.approx(1.25) for p in out.placements)
        xs = sorted(p.rect.x for p in out.placements)
        assert xs == pytest.approx([0, 2.5, 5, 7.5])
        assert out.coverage == pytest.approx(0.25)

    def test_layout_when_image_fits_no_edge_then_unused(self, make_images):
        images = make_images((2, 12), (2, 2))
        out = spiral_algorithm(AlgorithmInput(images, 10, 10, seed=1))

        assert out.unused_image_ids == ("img0",)
        assert out.placed_ids == {"img1"}

    def test_layout_when_many_images_then_outer_ring_touches_page_edges(self, mixed_input):
        out = spiral_algorithm(mixed_input)

        rects = [p.rect for p in out.placements]
        assert min(r.x for r in rects) == pytest.approx(0)
        assert min(r.y for r in rects) == pytest.approx(0)


class TestTuckPlacements:
    """Tests for tuck_placements()."""

    def test_tuck_when_top_and_left_tie_then_moves_up(self):
        result = tuck_placements([_placed("a", 3, 3, 2, 2)], 0.5, 10, 10)
        assert (result[0].rect.x, result[0].rect.y) == (3, 0)

    def test_tuck_when_nearest_edge_is_right_then_moves_right(self):
        result = tuck_placements([_placed("a", 6, 4, 2, 2)], 0.5, 10, 10)
        assert (result[0].rect.x, result[0].rect.y) == (8, 4)

    def test_tuck_when_blocked_then_stops_gap_short(self):
        placements = [_placed("wall", 0, 0, 10, 1), _placed("a", 3, 2.5, 2, 2)]
        result = tuck_placements(placements, 0.5, 10, 10)
        assert result[1].rect.y == pytest.approx(1.5)

    def test_tuck_when_already_within_gap_of_edge_then_unchanged(self):
        original = _placed("a", 0.25, 4, 2, 2)
        result = tuck_placements([original], 0.5, 10, 10)
        assert result[0] is original

    def test_tuck_when_called_then_input_not_modified(self):
        placements = [_placed("a", 3, 3, 2, 2)]
        tuck_placements(placements, 0.5, 10, 10)
        assert placements[0].rect.y == 3


class TestShiftOutward:
    """Tests for shift_outward()."""

    def test_shift_when_right_of_center_horizontally_then_moves_to_right_edge(self):
        result = shift_outward([_placed("a", 6, 4, 2, 1)], 0, 10, 10)
        assert (result[0].rect.x, result[0].rect.y) == (8, 4)

    def test_shift_when_below_center_vertically_then_moves_to_bottom(self):
        result = shift_outward([_placed("a", 4, 6, 1, 2)], 0.25, 10, 10)
        assert (result[0].rect.x, result[0].rect.y) == (4, 8)

    def test_shift_when_blocked_then_keeps_gap(self):
        placements = [_placed("edge", 9, 0, 1, 10), _placed("a", 6, 4, 2, 1)]
        result = shift_outward(placements, 0.5, 10, 10)
        assert result[1].rect.x == pytest.approx(6.5)

    def test_shift_when_neighbour_overlaps_by_float_noise_then_not_passed_through(self):
        placements = [_placed("top", 0, 0, 2, 2.0000000000000036), _placed("a", 0, 2, 1.1, 0.8)]

        result = shift_outward(placements, 0, 7, 14)

        assert result[1].rect.y >= 2.0
        assert not rects_intersect(result[0].rect, result[1].rect, -1e-9)


class TestExpandToFillCenter:
    """Tests for expand_to_fill_center()."""

    def test_expand_when_below_native_scale_then_grows_toward_center(self):
        result = expand_to_fill_center([_placed("a", 0, 0, 2, 2, scale=0.5)], 0, 10, 10)

        grown = result[0]
        assert grown.scale_factor == pytest.approx(1.0)
        assert (grown.rect.x, grown.rect.y) == (0, 0)
        assert grown.rect.width == pytest.approx(4.0)
        assert grown.rect.height == pytest.approx(4.0)

    def test_expand_when_space_limited_then_grows_only_into_space(self):
        placements = [_placed("a", 0, 0, 2, 2, scale=0.5), _placed("b", 0, 3.5, 2, 2)]
        result = expand_to_fill_center(placements, 0.5, 10, 10)

        # One inch of open space below: 2 -> 3 inches tall
        assert result[0].scale_factor == pytest.approx(0.75)
        assert result[0].rect.height == pytest.approx(3.0)

    def test_expand_when_neighbour_touches_gap_then_unchanged(self):
        placements = [_placed("a", 0, 0, 2, 2, scale=0.5), _placed("b", 0, 2.5, 2, 2)]
        result = expand_to_fill_center(placements, 0.5, 10, 10)
        assert result[0] is placements[0]

    def test_expand_when_at_native_scale_then_unchanged(self):
        placements = [_placed("a", 0, 0, 2, 2, scale=1.0)]
        result = expand_to_fill_center(placements, 0, 10, 10)
        assert result[0] is placements[0]

    def test_expand_when_change_negligible_then_unchanged(self):
        placements = [_placed("a", 0, 0, 2, 2, scale=0.9995)]
        result = expand_to_fill_center(placements, 0, 10, 10)
        assert result[0] is placements[0]
