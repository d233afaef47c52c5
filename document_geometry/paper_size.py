"""
Paper size and orientation from the full image aspect ratio
"""

from typing import Optional

from .config import PaperFamily, PaperSizeConfig
from .dpi import aspect_ratio
from .raster import RasterImage


def is_landscape(width: int, height: int) -> bool:
    return width > height


def match_paper_family(ratio: float, config: PaperSizeConfig = PaperSizeConfig()) -> Optional[PaperFamily]:
    """First family in table order whose ratio is within tolerance."""
    for family in config.families:
        if abs(ratio - family.ratio) < config.tolerance:
            return family
    return None


def classify_dimensions(width: int, height: int, config: PaperSizeConfig = PaperSizeConfig()) -> str:
    family = match_paper_family(aspect_ratio(width, height), config)
    if family is None:
        return f"Custom Size ({width}x{height})"

    orientation = "Landscape" if is_landscape(width, height) else "Portrait"
    return f"{family.name} {orientation}"


def classify_paper_size(image: RasterImage, config: PaperSizeConfig = PaperSizeConfig()) -> str:
    """
    Label the paper size of an image, e.g. "A4 Portrait".

    The original (uncropped) image dimensions are used. When no known
    family matches, the label carries the literal pixel size:
    "Custom Size (WxH)".
    """
    return classify_dimensions(image.width, image.height, config)
