"""
Unit Tests for Layout Geometry

Tests for intersection, collision, movement bounds and growth space.
"""

import pytest

from collage_toolkit.core.models import CollageRect, PlacedImage
from collage_toolkit.layout.geometry import (
    find_max_x,
    find_max_y,
    find_min_x,
    find_min_y,
    find_space_above,
    find_space_below,
    find_space_left,
    find_space_right,
    has_collision,
    rect_within_page,
    rects_intersect,
)


def _placed(image_id, x, y, w, h):
    return PlacedImage(image_id, CollageRect(x, y, w, h))


class TestRectsIntersect:
    """Tests for rects_intersect()."""

    def test_intersect_when_overlapping_then_true(self):
        assert rects_intersect(CollageRect(0, 0, 2, 2), CollageRect(1, 1, 2, 2)) is True

    def test_intersect_when_touching_without_tolerance_then_false(self):
        assert rects_intersect(CollageRect(0, 0, 2, 2), CollageRect(2, 0, 2, 2)) is False

    def test_intersect_when_closer_than_tolerance_then_true(self):
        a = CollageRect(0, 0, 2, 2)
        b = CollageRect(2.1, 0, 2, 2)
        assert rects_intersect(a, b, 0.25) is True

    def test_intersect_when_exactly_tolerance_apart_then_false(self):
        a = CollageRect(0, 0, 2, 2)
        b = CollageRect(2.5, 0, 2, 2)
        assert rects_intersect(a, b, 0.5) is False

    def test_intersect_when_apart_vertically_then_false(self):
        a = CollageRect(0, 0, 2, 2)
        b = CollageRect(0, 3, 2, 2)
        assert rects_intersect(a, b, 0.5) is False

    def test_intersect_when_arguments_swapped_then_same_answer(self):
        a = CollageRect(0, 0, 3, 1)
        b = CollageRect(2, 0.5, 3, 1)
        assert rects_intersect(a, b) == rects_intersect(b, a)


class TestHasCollision:
    """Tests for has_collision()."""

    def test_collision_when_only_self_overlaps_then_false(self):
        placements = [_placed("a", 0, 0, 2, 2)]
        assert has_collision(CollageRect(0, 0, 2, 2), placements, "a", 0.1) is False

    def test_collision_when_other_within_gap_then_true(self):
        placements = [_placed("a", 0, 0, 2, 2), _placed("b", 2.05, 0, 2, 2)]
        assert has_collision(CollageRect(0, 0, 2, 2), placements, "a", 0.1) is True

    def test_collision_when_empty_placements_then_false(self):
        assert has_collision(CollageRect(0, 0, 1, 1), [], "x", 0.5) is False


class TestMovementBounds:
    """Tests for find_min_y / find_max_y / find_min_x / find_max_x."""

    @pytest.fixture
    def column(self):
        """Three rects stacked in one column, 1 unit apart."""
        return [
            _placed("top", 0, 0, 2, 2),
            _placed("mid", 0, 4, 2, 2),
            _placed("bot", 0, 8, 2, 1),
        ]

    def test_min_y_when_blocker_above_then_stops_gap_below_it(self, column):
        assert find_min_y(column[1].rect, column, 1, 0.5) == pytest.approx(2.5)

    def test_min_y_when_nothing_above_then_page_top(self, column):
        assert find_min_y(column[0].rect, column, 0, 0.5) == 0.0

    def test_max_y_when_blocker_below_then_stops_gap_above_it(self, column):
        assert find_max_y(column[1].rect, column, 1, 0.5, 10) == pytest.approx(5.5)

    def test_max_y_when_nothing_below_then_page_bottom(self, column):
        assert find_max_y(column[2].rect, column, 2, 0.5, 10) == pytest.approx(9.0)

    def test_min_y_when_blocker_not_horizontally_overlapping_then_ignored(self):
        placements = [_placed("a", 5, 0, 2, 2), _placed("b", 0, 4, 2, 2)]
        assert find_min_y(placements[1].rect, placements, 1, 0.5) == 0.0

    def test_min_x_when_blocker_left_then_stops_gap_right_of_it(self):
        placements = [_placed("a", 0, 0, 2, 2), _placed("b", 5, 1, 2, 2)]
        assert find_min_x(placements[1].rect, placements, 1, 0.25) == pytest.approx(2.25)

    def test_max_x_when_nothing_right_then_page_edge(self):
        placements = [_placed("a", 0, 0, 2, 2)]
        assert find_max_x(placements[0].rect, placements, 0, 0.25, 10) == pytest.approx(8.0)

    def test_max_x_when_blocker_right_then_stops_gap_left_of_it(self):
        placements = [_placed("a", 0, 0, 2, 2), _placed("b", 6, 0, 2, 2)]
        assert find_max_x(placements[0].rect, placements, 0, 0.5, 10) == pytest.approx(3.5)

    # ─── Neighbours overlapping by float noise ───

    def test_min_y_when_blocker_above_overlaps_slightly_then_no_room_to_move(self):
        placements = [_placed("top", 0, 0, 2, 2.0000000000000036), _placed("a", 0, 2, 1, 1)]
        assert find_min_y(placements[1].rect, placements, 1, 0.0) >= 2.0

    def test_max_y_when_blocker_below_overlaps_slightly_then_no_room_to_move(self):
        placements = [_placed("a", 0, 0, 1, 2), _placed("bottom", 0, 1.9999999999999964, 2, 2)]
        assert find_max_y(placements[0].rect, placements, 0, 0.0, 10) <= 0.0

    def test_min_x_when_blocker_left_overlaps_slightly_then_no_room_to_move(self):
        placements = [_placed("left", 0, 0, 2.0000000000000036, 2), _placed("a", 2, 0, 1, 1)]
        assert find_min_x(placements[1].rect, placements, 1, 0.0) >= 2.0

    def test_max_x_when_blocker_right_overlaps_slightly_then_no_room_to_move(self):
        placements = [_placed("a", 0, 0, 2, 1), _placed("right", 1.9999999999999964, 0, 2, 2)]
        assert find_max_x(placements[0].rect, placements, 0, 0.0, 10) <= 0.0

    def test_min_y_when_blocker_overlaps_deeply_then_bound_not_above_rect(self):
        placements = [_placed("big", 0, 0, 4, 4), _placed("a", 1, 3, 1, 1)]
        assert find_min_y(placements[1].rect, placements, 1, 0.0) >= 3.0


class TestGrowthSpace:
    """Tests for find_space_* functions."""

    def test_space_right_when_blocker_then_distance_minus_gap(self):
        placements = [_placed("a", 0, 0, 2, 2), _placed("b", 5, 0, 2, 2)]
        assert find_space_right(placements[0].rect, placements, 0, 0.5, 10) == pytest.approx(2.5)

    def test_space_right_when_clear_then_distance_to_page_edge(self):
        placements = [_placed("a", 0, 0, 2, 2)]
        assert find_space_right(placements[0].rect, placements, 0, 0.5, 10) == pytest.approx(8.0)

    def test_space_left_when_blocker_then_distance_minus_gap(self):
        placements = [_placed("a", 0, 0, 2, 2), _placed("b", 5, 0, 2, 2)]
        assert find_space_left(placements[1].rect, placements, 1, 0.5) == pytest.approx(2.5)

    def test_space_below_when_clear_then_distance_to_page_bottom(self):
        placements = [_placed("a", 0, 1, 2, 2)]
        assert find_space_below(placements[0].rect, placements, 0, 0.5, 10) == pytest.approx(7.0)

    def test_space_above_when_blocker_then_distance_minus_gap(self):
        placements = [_placed("a", 0, 0, 2, 2), _placed("b", 0, 6, 2, 2)]
        assert find_space_above(placements[1].rect, placements, 1, 0.5) == pytest.approx(3.5)


class TestRectWithinPage:
    """Tests for rect_within_page()."""

    def test_within_when_inside_then_true(self):
        assert rect_within_page(CollageRect(0, 0, 10, 10), 10, 10) is True

    def test_within_when_past_right_edge_then_false(self):
        assert rect_within_page(CollageRect(1, 0, 10, 10), 10, 10) is False

    def test_within_when_negative_origin_then_false(self):
        assert rect_within_page(CollageRect(-0.5, 0, 1, 1), 10, 10) is False
