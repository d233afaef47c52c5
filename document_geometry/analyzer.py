"""
Document geometry analyzer
"""

import os
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

from .background import estimate_background_luminance, ink_threshold
from .boundary import detect_candidates, fuse_bounds
from .config import AnalysisConfig
from .dpi import estimate_dpi
from .font_size import crop_content, estimate_font_size_pt
from .margins import Margins, compute_margins
from .models import DocumentAnalysis, GeometryReport
from .paper_size import classify_paper_size
from .preprocessor import preprocess
from .raster import RasterImage, load_image


class DocumentAnalyzer:
    """
    Estimates paper size, body font size and margins of a page image.

    Pipeline: preprocess -> calibrate background -> detect and fuse
    content bounds -> DPI -> paper size -> font size -> margins.
    Holds no state between calls.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None, debug: bool = False):
        """
        Initialize the analyzer.

        Args:
            config: Tuning constants for every stage (defaults if omitted)
            debug: Print per-stage diagnostics
        """
        self.config = config or AnalysisConfig()
        self.debug = debug

    def _log(self, message: str):
        if self.debug:
            print(message)

    def _measure(self, image: RasterImage) -> Tuple[RasterImage, GeometryReport]:
        cfg = self.config
        self._log(f"Image dimensions: {image.width}x{image.height}")

        processed = preprocess(image, cfg.preprocess)

        background = estimate_background_luminance(processed, cfg.background)
        threshold = ink_threshold(background, cfg.background)
        self._log(f"Background luminance: {background}, ink threshold: {threshold}")

        candidates = detect_candidates(processed, threshold, cfg.boundary)
        for method, bounds in candidates.items():
            self._log(f"  {method.value}: {bounds}")

        bounds = fuse_bounds(candidates, processed.width, processed.height, cfg.boundary)
        self._log(f"Fused bounds: {bounds}")

        dpi = estimate_dpi(image, cfg.dpi)
        self._log(f"Estimated DPI: {dpi}")

        report = GeometryReport(
            width=image.width,
            height=image.height,
            background_luminance=background,
            ink_threshold=threshold,
            dpi=dpi,
            candidates=candidates,
            bounds=bounds,
        )
        return processed, report

    def measure(self, image: RasterImage) -> GeometryReport:
        """
        Run the geometry stages and return their intermediate values.

        Args:
            image: Decoded page image

        Returns:
            GeometryReport with candidate bounds, fused bounds and DPI
        """
        return self._measure(image)[1]

    def analyze(
        self,
        image: RasterImage,
        source_path: str = "",
        created_at: Optional[datetime] = None
    ) -> DocumentAnalysis:
        """
        Analyze a page image.

        Args:
            image: Decoded page image (non-empty)
            source_path: Identifier of the image, stored on the result
            created_at: Timestamp for the result (now, UTC, if omitted)

        Returns:
            DocumentAnalysis; never fails on blank or content-free pages
        """
        analysis, _ = self.analyze_with_report(image, source_path, created_at)
        return analysis

    def analyze_with_report(
        self,
        image: RasterImage,
        source_path: str = "",
        created_at: Optional[datetime] = None
    ) -> Tuple[DocumentAnalysis, GeometryReport]:
        cfg = self.config
        processed, report = self._measure(image)

        paper_size = classify_paper_size(image, cfg.paper_size)

        content = crop_content(processed, report.bounds)
        font_size = estimate_font_size_pt(content, report.dpi, report.ink_threshold, cfg.font_size)

        margins: Margins = compute_margins(image, report.bounds, report.dpi, cfg.margins)
        self._log(f"Paper: {paper_size}, font: {font_size} pt, margins: {margins.to_dict()}")

        analysis = DocumentAnalysis(
            paper_size=paper_size,
            font_size_pt=font_size,
            top_margin=margins.top,
            bottom_margin=margins.bottom,
            left_margin=margins.left,
            right_margin=margins.right,
            source_image_path=source_path,
            created_at=created_at or datetime.now(timezone.utc),
        )
        return analysis, report

    def analyze_file(self, path: Union[str, os.PathLike], created_at: Optional[datetime] = None) -> DocumentAnalysis:
        """
        Decode an image file and analyze it.

        Raises:
            ImageDecodeError: If the file cannot be decoded
        """
        image = load_image(path)
        return self.analyze(image, os.fspath(path), created_at)
