"""
Unit Tests for Crop Calculation
"""

import pytest

from collage_toolkit.layout.config import CropAnchor
from collage_toolkit.layout.cropping import calculate_crop


class TestCalculateCrop:
    """Tests for calculate_crop()."""

    def test_crop_when_target_wider_then_height_cropped_up_to_limit(self):
        box = calculate_crop(1000, 1000, 2.0, 0.15, CropAnchor.TOP)

        assert (box.sx, box.sy) == (0, 0)
        assert box.sw == 1000
        assert box.sh == pytest.approx(850)

    def test_crop_when_within_limit_then_matches_target_aspect(self):
        box = calculate_crop(1000, 1000, 1.1, 0.15)

        assert box.sw / box.sh == pytest.approx(1.1)
        assert box.sy == pytest.approx((1000 - box.sh) / 2)

    def test_crop_when_target_narrower_then_width_cropped(self):
        box = calculate_crop(1000, 1000, 0.5, 0.15, CropAnchor.RIGHT)

        assert box.sw == pytest.approx(850)
        assert box.sx == pytest.approx(150)
        assert box.sh == 1000

    def test_crop_when_aspect_already_matches_then_full_source(self):
        box = calculate_crop(1200, 900, 1200 / 900, 0.15)

        assert (box.sx, box.sy) == pytest.approx((0, 0))
        assert (box.sw, box.sh) == pytest.approx((1200, 900))

    @pytest.mark.parametrize(
        "anchor,expected",
        [
            (CropAnchor.CENTER, (0, 75)),
            (CropAnchor.TOP_LEFT, (0, 0)),
            (CropAnchor.BOTTOM_RIGHT, (0, 150)),
            ("bottom-left", (0, 150)),
        ],
    )
    def test_crop_when_anchor_given_then_leftover_placed_accordingly(self, anchor, expected):
        box = calculate_crop(1000, 1000, 2.0, 0.15, anchor)
        assert (box.sx, box.sy) == pytest.approx(expected)

    @pytest.mark.parametrize("size", [(0, 100), (100, -1)])
    def test_crop_when_source_size_not_positive_then_raises(self, size):
        with pytest.raises(ValueError, match="Source size"):
            calculate_crop(size[0], size[1], 1.0, 0.15)

    def test_crop_when_aspect_not_positive_then_raises(self):
        with pytest.raises(ValueError, match="target_aspect"):
            calculate_crop(100, 100, 0, 0.15)

    def test_crop_when_anchor_unknown_then_raises(self):
        with pytest.raises(ValueError):
            calculate_crop(100, 100, 1.0, 0.15, "middle")
