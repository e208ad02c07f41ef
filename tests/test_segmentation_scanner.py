"""Tests for connected-component scanning."""

import numpy as np
from hypothesis import given, strategies as st
from hypothesis.extra.numpy import arrays

from stickercut.image.loader import PixelBuffer
from stickercut.segmentation.geometry import Rect
from stickercut.segmentation.scanner import scan_components
from tests.helpers.sheet_factory import make_sheet


class TestScanComponents:
    def test_blank_white_sheet_has_no_components(self):
        assert scan_components(make_sheet((64, 64))) == []

    def test_fully_transparent_sheet_has_no_components(self):
        sheet = make_sheet((64, 64), background=(0, 0, 0, 0))
        assert scan_components(sheet) == []

    def test_ten_pixel_square_is_kept(self):
        """A 10x10 square has 100 pixels and a delta of 9 on both axes."""
        sheet = make_sheet((64, 64), [(20, 20, 29, 29)])
        assert scan_components(sheet) == [Rect(min_x=20, max_x=29, min_y=20, max_y=29)]

    def test_four_pixel_square_is_noise(self):
        sheet = make_sheet((64, 64), [(20, 20, 23, 23)])
        assert scan_components(sheet) == []

    def test_extent_filter_uses_delta(self):
        """A 6 pixel wide bar has delta 5 and is dropped even with plenty of pixels."""
        narrow = make_sheet((64, 64), [(10, 10, 15, 39)])
        assert scan_components(narrow) == []

        wider = make_sheet((64, 64), [(10, 10, 16, 39)])
        assert scan_components(wider) == [Rect(min_x=10, max_x=16, min_y=10, max_y=39)]

    def test_pixel_count_filter_is_strict(self):
        """An L shape with delta > 5 on both axes but only 50 pixels is dropped."""
        # 25 + 25 pixels: a horizontal and a vertical bar sharing the corner at (10, 10)
        sheet = make_sheet((64, 64), [(10, 10, 34, 10), (10, 11, 10, 35)])
        assert scan_components(sheet) == []

        sheet = make_sheet((64, 64), [(10, 10, 34, 10), (10, 11, 10, 36)])
        assert scan_components(sheet) == [Rect(min_x=10, max_x=34, min_y=10, max_y=36)]

    def test_diagonal_neighbours_are_separate_components(self):
        """Squares that only touch at a corner are not 4-connected."""
        sheet = make_sheet((64, 64), [(10, 10, 19, 19), (20, 20, 29, 29)])
        rects = scan_components(sheet)
        assert rects == [
            Rect(min_x=10, max_x=19, min_y=10, max_y=19),
            Rect(min_x=20, max_x=29, min_y=20, max_y=29),
        ]

    def test_hollow_outline_is_one_component(self):
        sheet = make_sheet((64, 64), [(10, 10, 40, 11), (10, 39, 40, 40), (10, 10, 11, 40), (39, 10, 40, 40)])
        assert scan_components(sheet) == [Rect(min_x=10, max_x=40, min_y=10, max_y=40)]

    def test_rects_follow_raster_order_of_seed(self):
        """The component whose top row comes first is reported first."""
        sheet = make_sheet((100, 100), [(60, 5, 79, 24), (5, 30, 24, 49), (40, 30, 59, 49)])
        rects = scan_components(sheet)
        assert [r.min_x for r in rects] == [60, 5, 40]

    def test_near_white_ink_is_ignored(self):
        sheet = make_sheet((64, 64), [(10, 10, 40, 40)], fill=(245, 245, 245, 255))
        assert scan_components(sheet) == []

    def test_components_touching_image_border(self):
        sheet = make_sheet((32, 32), [(0, 0, 9, 9), (22, 22, 31, 31)])
        assert scan_components(sheet) == [
            Rect(min_x=0, max_x=9, min_y=0, max_y=9),
            Rect(min_x=22, max_x=31, min_y=22, max_y=31),
        ]

    def test_custom_thresholds(self):
        sheet = make_sheet((64, 64), [(20, 20, 23, 23)])
        assert scan_components(sheet, min_pixel_count=10, min_extent=2) == [
            Rect(min_x=20, max_x=23, min_y=20, max_y=23)
        ]

    def test_large_component_does_not_recurse(self):
        """A component spanning the whole sheet is filled with the explicit stack."""
        sheet = make_sheet((400, 400), [(0, 0, 399, 399)])
        assert scan_components(sheet) == [Rect(min_x=0, max_x=399, min_y=0, max_y=399)]


@st.composite
def background_only_pixels(draw):
    """RGBA arrays where every pixel is either near-transparent or near-white."""
    height = draw(st.integers(1, 24))
    width = draw(st.integers(1, 24))
    white = draw(arrays(np.uint8, (height, width, 3), elements=st.integers(241, 255)))
    alpha = draw(arrays(np.uint8, (height, width, 1), elements=st.integers(0, 255)))
    pixels = np.concatenate([white, alpha], axis=2)
    transparent = draw(arrays(np.bool_, (height, width)))
    noise = draw(arrays(np.uint8, (height, width, 3)))
    pixels[transparent, :3] = noise[transparent]
    pixels[transparent, 3] = pixels[transparent, 3] % 20
    return pixels


class TestScanProperties:
    @given(background_only_pixels())
    def test_background_only_images_yield_nothing(self, pixels):
        """For any image made only of background pixels, no rects are produced."""
        assert scan_components(PixelBuffer.from_array(pixels)) == []
