"""
Tests for paper size classification and DPI inference
"""

import numpy as np
import pytest

from document_geometry.config import DpiConfig, PaperSizeConfig, A4, LETTER, LEGAL
from document_geometry.dpi import aspect_ratio, estimate_dpi, match_dpi_family
from document_geometry.paper_size import classify_dimensions, classify_paper_size, match_paper_family
from document_geometry.raster import RasterImage


def blank(width, height):
    return RasterImage(np.full((height, width), 255, dtype=np.uint8))


class TestPaperSize:

    @pytest.mark.parametrize("width, height, expected", [
        (2100, 2970, "A4 Portrait"),
        (2970, 2100, "A4 Landscape"),
        (850, 1100, "Letter Portrait"),
        (1100, 850, "Letter Landscape"),
        (850, 1400, "Legal Portrait"),
        (1000, 1000, "Custom Size (1000x1000)"),
        (3000, 1000, "Custom Size (3000x1000)"),
    ])
    def test_classify_dimensions(self, width, height, expected):
        assert classify_dimensions(width, height) == expected

    def test_classify_image(self):
        assert classify_paper_size(blank(210, 297)) == "A4 Portrait"

    def test_first_family_wins(self):
        # 0.64 is within tolerance of both Legal and Tabloid
        assert match_paper_family(0.64) is LEGAL

    def test_no_match(self):
        assert match_paper_family(0.9) is None

    def test_custom_tolerance(self):
        assert classify_dimensions(1000, 1000, PaperSizeConfig(tolerance=0.5)) == "A4 Portrait"


class TestDpi:

    def test_aspect_ratio(self):
        assert aspect_ratio(200, 100) == 0.5
        assert aspect_ratio(100, 200) == 0.5

    def test_first_family_in_order(self):
        # a Letter ratio is also within tolerance of A4, which comes first
        assert match_dpi_family(0.7727) is A4
        assert match_dpi_family(0.8) is LETTER
        assert match_dpi_family(0.7071) is A4
        assert match_dpi_family(0.5) is None

    @pytest.mark.parametrize("width, height, expected", [
        (2480, 3508, 300.0),   # A4 @ 300
        (1654, 2339, 200.0),   # A4 @ 200
        (1240, 1754, 150.0),   # A4 @ 150
        (827, 1169, 100.0),    # A4 @ 100
        (2550, 3300, 300.0),   # Letter @ 300, matched on the A4 tiers
        (1700, 2200, 200.0),   # Letter @ 200
        (2640, 3300, 200.0),   # only Letter within tolerance, not above its 3300 tier
        (2551, 3301, 300.0),
        (1000, 1000, 96.0),    # generic
        (2000, 2000, 120.0),
        (2001, 2001, 180.0),
        (4000, 4000, 250.0),
    ])
    def test_estimate_dpi(self, width, height, expected):
        assert estimate_dpi(blank(width, height)) == expected

    def test_orientation_independent(self):
        assert estimate_dpi(blank(3508, 2480)) == estimate_dpi(blank(2480, 3508))

    def test_family_order_is_configurable(self):
        config = DpiConfig(families=(LETTER, A4))
        assert estimate_dpi(blank(2550, 3300), config) == 200.0

    def test_families_restricted(self):
        config = DpiConfig(families=())
        assert estimate_dpi(blank(2480, 3508), config) == 250.0
