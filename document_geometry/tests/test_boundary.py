"""
Tests for content boundary estimators and fusion
"""

import numpy as np
import pytest

from common.bounds import EdgeBounds
from document_geometry.boundary import (
    BoundaryMethod,
    ContentMap,
    detect_bounds,
    detect_candidates,
    detect_content_bounds,
    detect_edge_bounds,
    detect_projection_bounds,
    edge_intensity_map,
    fuse_bounds,
    select_bound,
)
from document_geometry.config import BoundaryConfig
from document_geometry.raster import RasterImage


THRESHOLD = 225


def page(width, height, box=None, ink=0):
    """White page, optionally with a solid ink box (left, top, right, bottom)."""
    pixels = np.full((height, width), 255, dtype=np.uint8)
    if box is not None:
        left, top, right, bottom = box
        pixels[top:bottom, left:right] = ink
    return RasterImage(pixels)


class TestContentMap:

    def test_stride_small_image(self):
        assert ContentMap.sampling_stride(300, 300, 100_000) == 1

    def test_stride_grows_with_image(self):
        assert ContentMap.sampling_stride(2000, 2000, 100_000) == 7
        assert ContentMap.sampling_stride(4000, 3000, 100_000) == 11

    def test_grid_size_near_budget(self):
        gray = np.full((2000, 2000), 255, dtype=np.uint8)
        content_map = ContentMap.build(gray, THRESHOLD, 100_000)
        rows, cols = content_map.shape
        assert rows * cols <= 100_000

    def test_density(self):
        gray = np.full((100, 100), 255, dtype=np.uint8)
        gray[50, :] = 0
        content_map = ContentMap.build(gray, THRESHOLD, 100_000)
        rows = content_map.row_density(0.1)
        assert rows[50] == pytest.approx(1.0)
        assert rows[10] == 0.0


class TestEstimators:

    @pytest.fixture
    def boxed_page(self):
        return page(600, 600, box=(100, 100, 500, 500))

    def test_content_bounds(self, boxed_page):
        bounds = detect_content_bounds(boxed_page, THRESHOLD)
        # stride 2: first sampled ink row is 100, padded by 5
        assert bounds == EdgeBounds(top=95, bottom=503, left=95, right=503)

    def test_edge_bounds(self, boxed_page):
        bounds = detect_edge_bounds(boxed_page)
        # gradient fires on the last white line before the box
        assert bounds == EdgeBounds(top=96, bottom=502, left=96, right=502)

    def test_projection_bounds(self, boxed_page):
        bounds = detect_projection_bounds(boxed_page, THRESHOLD)
        assert bounds == EdgeBounds(top=98, bottom=501, left=98, right=501)

    def test_blank_page_defaults(self):
        blank = page(1000, 2000)
        assert detect_content_bounds(blank, THRESHOLD) == EdgeBounds(200, 1800, 100, 900)
        assert detect_edge_bounds(blank) == EdgeBounds(160, 1840, 80, 920)
        assert detect_projection_bounds(blank, THRESHOLD) == EdgeBounds(160, 1840, 80, 920)

    def test_isolated_speck_not_corroborated(self):
        # a thin line is a trigger without the sustained look-ahead
        speck = page(600, 600, box=(100, 100, 500, 102))
        bounds = detect_content_bounds(speck, THRESHOLD)
        assert bounds.top == 60

    def test_edge_map_border_is_zero(self, boxed_page):
        edges = edge_intensity_map(boxed_page.gray())
        assert edges[0, :].max() == 0
        assert edges[:, 0].max() == 0
        assert edges[99, 300] == 255

    def test_candidates_in_method_order(self, boxed_page):
        candidates = detect_candidates(boxed_page, THRESHOLD)
        assert list(candidates) == list(BoundaryMethod)

    def test_candidates_subset(self, boxed_page):
        candidates = detect_candidates(boxed_page, THRESHOLD, methods=[BoundaryMethod.PROJECTION_PROFILE])
        assert list(candidates) == [BoundaryMethod.PROJECTION_PROFILE]


class TestFusion:

    def test_select_closest_to_edge(self):
        assert select_bound([95, 96, 98], 600, is_start=True) == 95
        assert select_bound([503, 502, 501], 600, is_start=False) == 503

    def test_out_of_band_candidates_dropped(self):
        # 2 px is under 1% of 1000, 500 px is over 40%
        assert select_bound([2, 500, 120], 1000, is_start=True) == 120
        assert select_bound([999, 880], 1000, is_start=False) == 880

    def test_fallback_when_nothing_valid(self):
        assert select_bound([0, 3], 1000, is_start=True) == 80
        assert select_bound([1000], 1000, is_start=False) == 920
        assert select_bound([], 500, is_start=True) == 40

    def test_fused_margins_inside_band(self):
        config = BoundaryConfig()
        candidates = {
            BoundaryMethod.CONTENT_DENSITY: EdgeBounds(0, 1000, 0, 800),
            BoundaryMethod.EDGE_GRADIENT: EdgeBounds(450, 990, 300, 790),
        }
        fused = fuse_bounds(candidates, 800, 1000, config)
        low, high = config.valid_band
        margins = fused.margins_px(800, 1000)
        for side, dimension in (("top", 1000), ("bottom", 1000), ("left", 800), ("right", 800)):
            assert low <= margins[side] / dimension <= high

    def test_detect_bounds_calibrates_threshold(self):
        boxed = page(600, 600, box=(100, 100, 500, 500))
        bounds = detect_bounds(boxed)
        assert bounds == EdgeBounds(top=95, bottom=503, left=95, right=503)
