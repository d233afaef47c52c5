"""
Tests for margin conversion
"""

import numpy as np
import pytest

from common.bounds import EdgeBounds
from document_geometry.config import MarginConfig
from document_geometry.margins import Margins, clamp_margin, compute_margins
from document_geometry.raster import RasterImage


class TestClampMargin:

    @pytest.mark.parametrize("inches, expected", [
        (0.0, 0.1),
        (0.03, 0.1),     # noise
        (0.07, 0.1),     # under the display floor
        (0.5, 0.5),
        (1.234, 1.23),
        (2.999, 3.0),
        (3.0, 3.0),
        (7.5, 3.0),
    ])
    def test_clamp(self, inches, expected):
        assert clamp_margin(inches) == expected

    def test_custom_policy(self):
        config = MarginConfig(noise_floor_in=0.0, min_margin_in=0.0, max_margin_in=10.0)
        assert clamp_margin(7.5, config) == 7.5


class TestComputeMargins:

    def test_compute(self):
        image = RasterImage(np.zeros((1100, 850), dtype=np.uint8))
        bounds = EdgeBounds(top=100, bottom=1000, left=100, right=750)
        margins = compute_margins(image, bounds, 100.0)
        assert margins == Margins(top=1.0, bottom=1.0, left=1.0, right=1.0)

    def test_asymmetric(self):
        image = RasterImage(np.zeros((1000, 1000), dtype=np.uint8))
        bounds = EdgeBounds(top=50, bottom=800, left=200, right=990)
        margins = compute_margins(image, bounds, 100.0)
        assert margins.to_dict() == {"top": 0.5, "bottom": 2.0, "left": 2.0, "right": 0.1}
