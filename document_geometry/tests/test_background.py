"""
Tests for background calibration
"""

import numpy as np

from document_geometry.background import estimate_background_luminance, ink_threshold
from document_geometry.raster import RasterImage


def page_with_dark_corners(dark_corners, size=200, paper=240):
    pixels = np.full((size, size), paper, dtype=np.uint8)
    side = size // 20
    spots = {
        "tl": (slice(0, side), slice(0, side)),
        "tr": (slice(0, side), slice(size - side, size)),
        "bl": (slice(size - side, size), slice(0, side)),
        "br": (slice(size - side, size), slice(size - side, size)),
    }
    for name in dark_corners:
        pixels[spots[name]] = 0
    return RasterImage(pixels)


class TestBackground:

    def test_uniform_page(self):
        assert estimate_background_luminance(page_with_dark_corners([])) == 240

    def test_one_dark_corner_ignored(self):
        assert estimate_background_luminance(page_with_dark_corners(["tl"])) == 240

    def test_two_dark_corners_uses_upper_middle(self):
        assert estimate_background_luminance(page_with_dark_corners(["tl", "br"])) == 240

    def test_three_dark_corners(self):
        assert estimate_background_luminance(page_with_dark_corners(["tl", "tr", "bl"])) == 0

    def test_tiny_image_falls_back(self):
        image = RasterImage(np.zeros((10, 10), dtype=np.uint8))
        assert estimate_background_luminance(image) == 240

    def test_ink_threshold(self):
        assert ink_threshold(240) == 210
        assert ink_threshold(255) == 225
