"""
Pixel bounds to physical margins
"""

from dataclasses import dataclass, asdict

from common.bounds import EdgeBounds
from .config import MarginConfig
from .raster import RasterImage


@dataclass(frozen=True)
class Margins:
    """Page margins in inches."""
    top: float
    bottom: float
    left: float
    right: float

    def to_dict(self) -> dict:
        return asdict(self)


def clamp_margin(inches: float, config: MarginConfig = MarginConfig()) -> float:
    """
    Apply the reporting policy to one measured margin.

    Near-zero values are treated as detection noise and reported at the
    display floor; values past the ceiling are capped. Anything else is
    kept as measured, rounded to two decimals.
    """
    if inches < config.noise_floor_in:
        return config.min_margin_in
    if inches > config.max_margin_in:
        return config.max_margin_in
    return max(config.min_margin_in, round(inches, 2))


def compute_margins(image: RasterImage, bounds: EdgeBounds, dpi: float, config: MarginConfig = MarginConfig()) -> Margins:
    """
    Convert fused bounds to margins in inches.

    Args:
        image: Raster the bounds were measured on
        bounds: Fused content bounds
        dpi: Assumed resolution
        config: Floor and ceiling policy

    Returns:
        Margins
    """
    px = bounds.margins_px(image.width, image.height)
    return Margins(
        top=clamp_margin(px["top"] / dpi, config),
        bottom=clamp_margin(px["bottom"] / dpi, config),
        left=clamp_margin(px["left"] / dpi, config),
        right=clamp_margin(px["right"] / dpi, config),
    )
