"""
Assumed-resolution inference from pixel dimensions
"""

from typing import Optional, Sequence, Tuple

from .config import DpiConfig, PaperFamily
from .raster import RasterImage


def aspect_ratio(width: int, height: int) -> float:
    """Short side over long side, 0..1."""
    return min(width, height) / max(width, height)


def _bucket(longer_side: int, tiers: Sequence[Tuple[int, float]], base: float) -> float:
    for min_pixels, dpi in tiers:
        if longer_side > min_pixels:
            return dpi
    return base


def match_dpi_family(ratio: float, config: DpiConfig = DpiConfig()) -> Optional[PaperFamily]:
    """First family in table order whose ratio is within tolerance, if any."""
    for family in config.families:
        if abs(ratio - family.ratio) < config.tolerance:
            return family
    return None


def estimate_dpi(image: RasterImage, config: DpiConfig = DpiConfig()) -> float:
    """
    Infer the scan/photo resolution of a page image.

    No metadata is available, so the longer pixel side is bucketed into
    coarse tiers: per paper family when the aspect ratio matches one,
    generic tiers otherwise.

    Args:
        image: Raster (full, uncropped)
        config: Families, tolerance and tier tables

    Returns:
        Assumed DPI
    """
    longer_side = max(image.width, image.height)
    family = match_dpi_family(aspect_ratio(image.width, image.height), config)

    if family is not None and family.dpi_tiers:
        return _bucket(longer_side, family.dpi_tiers, family.base_dpi)

    return _bucket(longer_side, config.generic_tiers, config.generic_base)
