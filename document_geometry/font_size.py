"""
Body-text font size estimation from ink run lengths
"""

import numpy as np
from typing import List, Optional

from common.bounds import EdgeBounds
from .config import FontSizeConfig
from .raster import RasterImage
from .runs import find_runs, hysteresis_runs


def crop_content(image: RasterImage, bounds: EdgeBounds) -> Optional[RasterImage]:
    """Sub-image inside the bounds, or None when the region has no area."""
    left = max(0, bounds.left)
    top = max(0, bounds.top)
    right = min(image.width, bounds.right)
    bottom = min(image.height, bounds.bottom)
    if right <= left or bottom <= top:
        return None
    return image.crop(left, top, right, bottom)


def line_heights(gray: np.ndarray, threshold: int, config: FontSizeConfig = FontSizeConfig()) -> List[int]:
    """
    Heights of text lines found by scanning per-row ink density.

    A line opens when the density rises above the enter level and closes
    when it falls below the (lower) exit level.
    """
    h, w = gray.shape[:2]
    if h == 0 or w == 0:
        return []

    density = np.count_nonzero(gray < threshold, axis=1) / w
    runs = hysteresis_runs(density, config.line_enter_density, config.line_exit_density)
    return [end - start for start, end in runs if config.min_line_px <= end - start <= config.max_line_px]


def character_widths(gray: np.ndarray, threshold: int, config: FontSizeConfig = FontSizeConfig()) -> List[int]:
    """
    Widths of horizontal ink runs in the middle half of the region,
    sampled every few rows. Runs cut off by the right edge are ignored.
    """
    h = gray.shape[0]
    widths = []
    for y in range(h // 4, (h * 3) // 4, config.char_row_step):
        for start, end in find_runs(gray[y] < threshold, keep_open_end=False):
            width = end - start
            if config.min_char_px <= width <= config.max_char_px:
                widths.append(width)
    return widths


def px_to_pt(pixels: float, dpi: float) -> float:
    return pixels * 72.0 / dpi


def estimate_font_size_pt(
    content: Optional[RasterImage],
    dpi: float,
    ink_threshold: Optional[int] = None,
    config: FontSizeConfig = FontSizeConfig()
) -> float:
    """
    Estimate the body-text font size of a content region.

    Line height (scaled by the line-to-font ratio) and character width
    (divided by the glyph aspect) are converted to points and blended,
    line height weighted higher.

    Args:
        content: Region cropped to the content bounds (None or empty for
                 a degenerate region)
        dpi: Assumed resolution of the source image
        ink_threshold: Luminance below which a pixel is ink
        config: Thresholds, weights and the plausible band

    Returns:
        Font size in points, one decimal, inside [min_pt, max_pt]
    """
    if content is None or content.width <= 0 or content.height <= 0 or dpi <= 0:
        return config.default_pt

    threshold = config.fallback_ink_threshold if ink_threshold is None else ink_threshold
    gray = content.gray()

    heights = line_heights(gray, threshold, config)
    widths = character_widths(gray, threshold, config)

    signals = []
    if heights:
        line_pt = px_to_pt(float(np.median(heights)), dpi) * config.line_to_font
        signals.append((line_pt, config.line_weight))
    if widths:
        char_pt = px_to_pt(float(np.median(widths)), dpi) / config.glyph_aspect
        signals.append((char_pt, config.char_weight))

    if not signals:
        return config.default_pt

    total_weight = sum(weight for _, weight in signals)
    combined = sum(value * weight for value, weight in signals) / total_weight
    combined = max(config.min_pt, min(config.max_pt, combined))

    return round(combined, 1)
