"""
Unit Tests for Masonry Algorithm
"""

import pytest

from collage_toolkit.core.models import AlgorithmInput, ImageDimensions
from collage_toolkit.layout.algorithms import masonry_algorithm
from collage_toolkit.layout.algorithms.masonry import column_count_for


def _widths(*widths):
    return [ImageDimensions(f"w{i}", w, 1.0) for i, w in enumerate(widths)]


class TestColumnCount:
    """Tests for column_count_for()."""

    def test_count_when_average_divides_page_then_page_over_average(self):
        assert column_count_for(_widths(2, 2, 2), page_width=10, gap=0, min_size=1) == 5

    def test_count_when_half_way_then_rounds_up(self):
        assert column_count_for(_widths(4, 4), page_width=10, gap=0, min_size=1) == 3

    def test_count_when_images_wider_than_page_then_at_least_two(self):
        assert column_count_for(_widths(20), page_width=10, gap=0, min_size=1) == 2

    def test_count_when_columns_too_narrow_then_reduced_to_min_size(self):
        assert column_count_for(_widths(0.5, 0.5), page_width=10, gap=0, min_size=1) == 10

    def test_count_when_gap_set_then_included_in_column_pitch(self):
        # 10 / (1 + 0.5) rounds to 7 columns of exactly 1 inch
        assert column_count_for(_widths(1, 1), page_width=10, gap=0.5, min_size=1) == 7


class TestMasonryAlgorithm:
    """Tests for masonry_algorithm()."""

    def test_layout_when_equal_squares_then_fills_shortest_column_first(self, make_images):
        layout_input = AlgorithmInput(make_images((5, 5), (5, 5), (5, 5)), 10, 20, seed=4)

        out = masonry_algorithm(layout_input)

        positions = [(p.rect.x, p.rect.y) for p in out.placements]
        assert positions == [(0, 0), (5, 0), (0, 5)]

    def test_layout_when_placed_then_width_is_column_width(self, make_images):
        layout_input = AlgorithmInput(make_images((4, 2), (6, 3)), 10, 10, seed=1)

        out = masonry_algorithm(layout_input)

        sizes = {img.id: img for img in layout_input.images}
        assert out.placed_count == 2
        for p in out.placements:
            img = sizes[p.image_id]
            assert p.rect.width == pytest.approx(5.0)
            assert p.scale_factor == pytest.approx(5.0 / img.width)
            assert p.rect.height == pytest.approx(img.height * p.scale_factor)

    def test_layout_when_gap_set_then_stacked_images_spaced_by_gap(self, make_images):
        images = make_images((4.75, 4.75), (4.75, 4.75), (4.75, 4.75))
        out = masonry_algorithm(AlgorithmInput(images, 10, 20, gap_inches=0.5, seed=1))

        positions = sorted((p.rect.x, p.rect.y) for p in out.placements)
        assert positions[0] == (0, 0)
        assert positions[1] == (0, pytest.approx(5.25))
        assert positions[2] == (pytest.approx(5.25), 0)

    def test_layout_when_column_overflows_page_then_image_unused(self, make_images):
        images = make_images((5, 5), (5, 5), (5, 5))
        out = masonry_algorithm(AlgorithmInput(images, 10, 6, seed=1))

        assert out.placed_count == 2
        assert len(out.unused_image_ids) == 1
        assert out.coverage == pytest.approx(50 / 60)

    def test_layout_when_gap_wider_than_page_then_single_column(self, make_images):
        images = make_images((1, 1), (1, 1))
        out = masonry_algorithm(AlgorithmInput(images, 1, 10, gap_inches=2, seed=1))

        positions = sorted((p.rect.x, p.rect.y) for p in out.placements)
        assert positions == [(0, 0), (0, 3)]
