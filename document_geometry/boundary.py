"""
Page content boundary detection

Three independent estimators each propose an EdgeBounds for the page
content; fuse_bounds() picks one value per side from those candidates.
"""

import math
import numpy as np
from enum import Enum
from typing import Dict, Iterable, Optional, Sequence

from common.bounds import EdgeBounds
from .background import estimate_background_luminance, ink_threshold
from .config import BackgroundConfig, BoundaryConfig
from .raster import RasterImage
from .runs import first_run_start, last_run_end


class BoundaryMethod(Enum):
    CONTENT_DENSITY = "content_density"
    EDGE_GRADIENT = "edge_gradient"
    PROJECTION_PROFILE = "projection_profile"


def _fraction(length: int, ratio: float) -> int:
    """length * ratio rounded half away from zero."""
    return int(math.floor(length * ratio + 0.5))


def _default_bounds(width: int, height: int, ratio: float) -> EdgeBounds:
    return EdgeBounds(
        top=_fraction(height, ratio),
        bottom=height - _fraction(height, ratio),
        left=_fraction(width, ratio),
        right=width - _fraction(width, ratio),
    )


class ContentMap:
    """
    Coarse has-ink grid sampled every ``stride`` pixels on both axes.

    The stride grows with the image so the grid stays near a fixed cell
    budget whatever the input resolution.
    """

    def __init__(self, grid: np.ndarray, stride: int):
        self.grid = grid
        self.stride = stride

    @staticmethod
    def sampling_stride(width: int, height: int, cell_budget: int) -> int:
        if cell_budget <= 0:
            return 1
        return max(1, int(math.ceil(math.sqrt(width * height / cell_budget))))

    @classmethod
    def build(cls, gray: np.ndarray, threshold: int, cell_budget: int) -> "ContentMap":
        h, w = gray.shape[:2]
        stride = cls.sampling_stride(w, h, cell_budget)
        grid = gray[::stride, ::stride] < threshold
        return cls(grid, stride)

    @property
    def shape(self):
        return self.grid.shape

    def row_density(self, band: float) -> np.ndarray:
        """Ink fraction per sampled row, over the central columns."""
        cols = self.grid.shape[1]
        return _band_mean(self.grid[:, _fraction(cols, band):_fraction(cols, 1.0 - band)], axis=1)

    def column_density(self, band: float) -> np.ndarray:
        """Ink fraction per sampled column, over the central rows."""
        rows = self.grid.shape[0]
        return _band_mean(self.grid[_fraction(rows, band):_fraction(rows, 1.0 - band), :], axis=0)


def _band_mean(band: np.ndarray, axis: int) -> np.ndarray:
    length = band.shape[1 - axis]
    if band.shape[axis] == 0:
        return np.zeros(length, dtype=np.float64)
    return band.mean(axis=axis, dtype=np.float64)


def _scan_density(density: np.ndarray, config: BoundaryConfig, from_start: bool) -> Optional[int]:
    """
    Index of the first line whose density passes the trigger and is
    corroborated by the following look-ahead window, scanning inward from
    one end up to the midline.
    """
    n = len(density)
    half = n // 2
    window = config.corroboration_window

    if from_start:
        indices = range(0, half)
    else:
        indices = range(n - 1, half - 1, -1)

    for i in indices:
        if density[i] <= config.content_trigger:
            continue

        if from_start:
            ahead = density[i:min(n, i + window + 1)]
        else:
            ahead = density[max(0, i - window):i + 1]

        sustained = np.count_nonzero(ahead > config.corroboration_density)
        if len(ahead) > 0 and sustained / len(ahead) > config.corroboration_ratio:
            return i

    return None


def detect_content_bounds(image: RasterImage, threshold: int, config: BoundaryConfig = BoundaryConfig()) -> EdgeBounds:
    """
    Content-density estimator over a sampled content map.

    Args:
        image: Preprocessed raster
        threshold: Ink threshold (luminance below it is ink)
        config: Trigger, corroboration and padding settings

    Returns:
        EdgeBounds; sides without content fall back to a fixed fraction
    """
    gray = image.gray()
    h, w = gray.shape[:2]
    content_map = ContentMap.build(gray, threshold, config.content_cell_budget)
    stride = content_map.stride
    pad = config.content_padding

    rows = content_map.row_density(config.content_band)
    cols = content_map.column_density(config.content_band)
    default = _default_bounds(w, h, config.content_default)

    top = _scan_density(rows, config, from_start=True)
    bottom = _scan_density(rows, config, from_start=False)
    left = _scan_density(cols, config, from_start=True)
    right = _scan_density(cols, config, from_start=False)

    return EdgeBounds(
        top=default.top if top is None else max(0, top * stride - pad),
        bottom=default.bottom if bottom is None else min(h - 1, bottom * stride + pad),
        left=default.left if left is None else max(0, left * stride - pad),
        right=default.right if right is None else min(w - 1, right * stride + pad),
    )


def edge_intensity_map(gray: np.ndarray) -> np.ndarray:
    """
    First-difference gradient magnitude |dx| + |dy|, clipped to 255.

    The one-pixel image border is left at zero.
    """
    h, w = gray.shape[:2]
    edges = np.zeros((h, w), dtype=np.uint8)
    if h < 3 or w < 3:
        return edges

    g = gray.astype(np.int16)
    center = g[1:-1, 1:-1]
    dx = np.abs(g[1:-1, 2:] - center)
    dy = np.abs(g[2:, 1:-1] - center)
    edges[1:-1, 1:-1] = np.minimum(dx + dy, 255).astype(np.uint8)
    return edges


def _edge_hits(edges: np.ndarray, axis: int, config: BoundaryConfig) -> np.ndarray:
    """
    Per-line trigger mask. axis=1 evaluates rows over the central columns,
    axis=0 evaluates columns over the central rows.
    """
    span = edges.shape[axis]
    lo, hi = span // 6, (span * 5) // 6
    if axis == 1:
        band = edges[:, lo:hi]
    else:
        band = edges[lo:hi, :]

    sample = span * 2 / 3
    if sample <= 0:
        return np.zeros(edges.shape[1 - axis], dtype=bool)

    edge_ratio = np.count_nonzero(band > config.edge_low, axis=axis) / sample
    strong_ratio = np.count_nonzero(band > config.edge_high, axis=axis) / sample
    return (edge_ratio > config.edge_trigger) | (strong_ratio > config.strong_edge_trigger)


def _first_hit(hits: np.ndarray, stop: int) -> Optional[int]:
    found = np.flatnonzero(hits[:stop])
    return int(found[0]) if found.size else None


def _last_hit(hits: np.ndarray, start: int) -> Optional[int]:
    found = np.flatnonzero(hits[start:])
    return int(found[-1]) + start if found.size else None


def detect_edge_bounds(image: RasterImage, config: BoundaryConfig = BoundaryConfig()) -> EdgeBounds:
    """
    Gradient estimator: first line in the outer third of each axis with
    enough edge activity.
    """
    gray = image.gray()
    h, w = gray.shape[:2]
    edges = edge_intensity_map(gray)
    pad = config.edge_padding
    default = _default_bounds(w, h, config.edge_default)

    row_hits = _edge_hits(edges, axis=1, config=config)
    col_hits = _edge_hits(edges, axis=0, config=config)

    top = _first_hit(row_hits, h // 3)
    bottom = _last_hit(row_hits, (h * 2) // 3)
    left = _first_hit(col_hits, w // 3)
    right = _last_hit(col_hits, (w * 2) // 3)

    return EdgeBounds(
        top=default.top if top is None else max(0, top - pad),
        bottom=default.bottom if bottom is None else min(h - 1, bottom + pad),
        left=default.left if left is None else max(0, left - pad),
        right=default.right if right is None else min(w - 1, right + pad),
    )


def projection_profiles(gray: np.ndarray, threshold: int):
    """Ink pixel count per row and per column."""
    ink = gray < threshold
    return ink.sum(axis=1), ink.sum(axis=0)


def detect_projection_bounds(image: RasterImage, threshold: int, config: BoundaryConfig = BoundaryConfig()) -> EdgeBounds:
    """
    Projection-profile estimator: first sustained run of rows/columns whose
    ink count passes a size-relative threshold, from each side.
    """
    gray = image.gray()
    h, w = gray.shape[:2]
    horizontal, vertical = projection_profiles(gray, threshold)
    pad = config.projection_padding
    min_run = config.projection_min_run
    default = _default_bounds(w, h, config.projection_default)

    rows_with_ink = horizontal > _fraction(w, config.projection_trigger)
    cols_with_ink = vertical > _fraction(h, config.projection_trigger)

    top = first_run_start(rows_with_ink, min_run)
    bottom = last_run_end(rows_with_ink, min_run)
    left = first_run_start(cols_with_ink, min_run)
    right = last_run_end(cols_with_ink, min_run)

    return EdgeBounds(
        top=default.top if top is None else max(0, top - pad),
        bottom=default.bottom if bottom is None else min(h - 1, bottom + pad),
        left=default.left if left is None else max(0, left - pad),
        right=default.right if right is None else min(w - 1, right + pad),
    )


def run_boundary_method(
    method: BoundaryMethod,
    image: RasterImage,
    threshold: int,
    config: BoundaryConfig = BoundaryConfig()
) -> EdgeBounds:
    if method is BoundaryMethod.CONTENT_DENSITY:
        return detect_content_bounds(image, threshold, config)
    if method is BoundaryMethod.EDGE_GRADIENT:
        return detect_edge_bounds(image, config)
    if method is BoundaryMethod.PROJECTION_PROFILE:
        return detect_projection_bounds(image, threshold, config)
    raise ValueError(f"Unknown boundary method: {method}")


def detect_candidates(
    image: RasterImage,
    threshold: int,
    config: BoundaryConfig = BoundaryConfig(),
    methods: Iterable[BoundaryMethod] = tuple(BoundaryMethod)
) -> Dict[BoundaryMethod, EdgeBounds]:
    """Run each estimator; the result keeps enumeration order."""
    wanted = set(methods)
    return {
        method: run_boundary_method(method, image, threshold, config)
        for method in BoundaryMethod
        if method in wanted
    }


def select_bound(candidates: Sequence[int], dimension: int, is_start: bool, config: BoundaryConfig = BoundaryConfig()) -> int:
    """
    Pick one bound for a side.

    Candidates whose distance from their edge falls outside the valid band
    are dropped; of the rest the one closest to the edge wins (smallest for
    top/left, largest for bottom/right). With nothing valid, a fixed
    fraction of the dimension is used.
    """
    low, high = config.valid_band
    valid = []
    for bound in candidates:
        offset = bound if is_start else dimension - bound
        ratio = offset / dimension if dimension > 0 else 0.0
        if low <= ratio <= high:
            valid.append(bound)

    if not valid:
        fallback = _fraction(dimension, config.fallback_margin)
        return fallback if is_start else dimension - fallback

    return min(valid) if is_start else max(valid)


def fuse_bounds(
    candidates: Dict[BoundaryMethod, EdgeBounds],
    width: int,
    height: int,
    config: BoundaryConfig = BoundaryConfig()
) -> EdgeBounds:
    ordered = [candidates[method] for method in BoundaryMethod if method in candidates]
    return EdgeBounds(
        top=select_bound([b.top for b in ordered], height, True, config),
        bottom=select_bound([b.bottom for b in ordered], height, False, config),
        left=select_bound([b.left for b in ordered], width, True, config),
        right=select_bound([b.right for b in ordered], width, False, config),
    )


def detect_bounds(
    image: RasterImage,
    threshold: Optional[int] = None,
    config: BoundaryConfig = BoundaryConfig(),
    background_config: BackgroundConfig = BackgroundConfig()
) -> EdgeBounds:
    """
    Detect the fused content bounds of a preprocessed page.

    Args:
        image: Preprocessed raster
        threshold: Ink threshold; calibrated from the image corners if omitted
        config: Estimator and fusion settings
        background_config: Calibration settings used when threshold is omitted

    Returns:
        Fused EdgeBounds in the image's pixel coordinates
    """
    if threshold is None:
        threshold = ink_threshold(estimate_background_luminance(image, background_config), background_config)

    candidates = detect_candidates(image, threshold, config)
    return fuse_bounds(candidates, image.width, image.height, config)
