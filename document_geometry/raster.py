"""
Immutable raster wrapper and image loading
"""

import os
import cv2
import numpy as np
from typing import Union


class ImageDecodeError(ValueError):
    """Raised when an image file cannot be read or decoded."""
    pass


class RasterImage:
    """
    Read-only grid of pixel samples.

    Wraps a grayscale (HxW) or BGR/BGRA (HxWxC) uint8 array. The array is
    copied and locked on construction so no stage can mutate it in place.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels is None or pixels.size == 0:
            raise ValueError("RasterImage requires a non-empty pixel buffer")
        if pixels.ndim not in (2, 3):
            raise ValueError(f"Unsupported pixel buffer shape: {pixels.shape}")
        if pixels.ndim == 3 and pixels.shape[2] not in (1, 3, 4):
            raise ValueError(f"Unsupported channel count: {pixels.shape[2]}")

        data = np.array(pixels, dtype=np.uint8, copy=True, order="C")
        if data.ndim == 3 and data.shape[2] == 1:
            data = data[:, :, 0].copy()
        data.setflags(write=False)
        self._pixels = data
        self._gray = None

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def is_grayscale(self) -> bool:
        return self._pixels.ndim == 2

    def gray(self) -> np.ndarray:
        """Luminance plane (HxW uint8), read-only."""
        if self._gray is None:
            if self.is_grayscale:
                gray = self._pixels
            elif self._pixels.shape[2] == 4:
                gray = cv2.cvtColor(self._pixels, cv2.COLOR_BGRA2GRAY)
            else:
                gray = cv2.cvtColor(self._pixels, cv2.COLOR_BGR2GRAY)
            gray.setflags(write=False)
            self._gray = gray
        return self._gray

    def luminance(self, x: int, y: int) -> int:
        return int(self.gray()[y, x])

    def crop(self, left: int, top: int, right: int, bottom: int) -> "RasterImage":
        """New raster holding the [left, right) x [top, bottom) region."""
        return RasterImage(self._pixels[top:bottom, left:right])

    def to_bgr(self) -> np.ndarray:
        """Writable BGR copy, for drawing."""
        if self.is_grayscale:
            return cv2.cvtColor(self._pixels, cv2.COLOR_GRAY2BGR)
        if self._pixels.shape[2] == 4:
            return cv2.cvtColor(self._pixels, cv2.COLOR_BGRA2BGR)
        return self._pixels.copy()

    def __repr__(self) -> str:
        return f"RasterImage({self.width}x{self.height}, {'gray' if self.is_grayscale else 'color'})"


def from_array(pixels: np.ndarray) -> RasterImage:
    return RasterImage(pixels)


def load_image(path: Union[str, os.PathLike]) -> RasterImage:
    """
    Decode an image file into a RasterImage.

    Args:
        path: Path to a JPEG/PNG (anything OpenCV can decode)

    Returns:
        RasterImage with the decoded pixels

    Raises:
        ImageDecodeError: If the file is missing, empty or not decodable
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise ImageDecodeError(f"Image not found: {path}")
    if os.path.getsize(path) == 0:
        raise ImageDecodeError(f"Image file is empty: {path}")

    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        raise ImageDecodeError(f"Failed to decode image: {path}")

    return RasterImage(image)
