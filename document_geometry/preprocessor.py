"""
Luminance preprocessing ahead of boundary and font analysis
"""

import cv2
import numpy as np

from .config import PreprocessConfig
from .raster import RasterImage


def _to_uint8(values: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def preprocess(image: RasterImage, config: PreprocessConfig = PreprocessConfig()) -> RasterImage:
    """
    Normalize an image for ink detection.

    Steps (order matters):
    1. Grayscale (luminance)
    2. Gaussian blur against sensor/JPEG noise
    3. Contrast stretch around mid-gray
    4. Brightness lift

    Args:
        image: Source raster, left untouched
        config: Blur radius and contrast/brightness factors

    Returns:
        New grayscale RasterImage of the same size
    """
    gray = image.gray()

    if config.blur_radius > 0:
        kernel = 2 * config.blur_radius + 1
        gray = cv2.GaussianBlur(gray, (kernel, kernel), 0)

    values = gray.astype(np.float32)

    if config.contrast != 1.0:
        values = _to_uint8((values - config.mid_gray) * config.contrast + config.mid_gray).astype(np.float32)

    if config.brightness != 1.0:
        values = _to_uint8(values * config.brightness).astype(np.float32)

    return RasterImage(_to_uint8(values))
