"""
Page background calibration from the image corners
"""

from .config import BackgroundConfig
from .raster import RasterImage


def estimate_background_luminance(image: RasterImage, config: BackgroundConfig = BackgroundConfig()) -> int:
    """
    Estimate the page luminance from four corner squares.

    Each corner is averaged separately and the upper-middle of the four
    sorted means is returned, so a single corner covered by content or a
    shadow does not drag the estimate.

    Args:
        image: Raster to sample
        config: Corner size divisor and fallback value

    Returns:
        Background luminance 0..255 (fallback when the corners have no area)
    """
    gray = image.gray()
    h, w = gray.shape[:2]
    size = min(w, h) // config.corner_divisor

    if size <= 0:
        return config.fallback_luminance

    corners = [
        gray[0:size, 0:size],                # top-left
        gray[0:size, w - size:w],            # top-right
        gray[h - size:h, 0:size],            # bottom-left
        gray[h - size:h, w - size:w],        # bottom-right
    ]

    means = sorted(int(corner.sum(dtype=int)) // corner.size for corner in corners if corner.size > 0)
    if not means:
        return config.fallback_luminance

    return means[len(means) // 2]


def ink_threshold(background_luminance: int, config: BackgroundConfig = BackgroundConfig()) -> int:
    """Luminance below which a pixel counts as ink."""
    return background_luminance - config.ink_offset
