"""
Visualization of detected page geometry
"""

import os
import cv2
import numpy as np
from typing import Dict, List, Optional, Tuple

from common.bounds import EdgeBounds
from .boundary import BoundaryMethod
from .models import DocumentAnalysis, GeometryReport
from .raster import RasterImage


CANDIDATE_COLORS: Dict[BoundaryMethod, Tuple[int, int, int]] = {
    BoundaryMethod.CONTENT_DENSITY: (0, 200, 0),      # green
    BoundaryMethod.EDGE_GRADIENT: (0, 140, 255),      # orange
    BoundaryMethod.PROJECTION_PROFILE: (200, 0, 200), # magenta
}


class GeometryVisualizer:
    """
    Draws the detected content box, margin overlay and measured values
    onto a copy of the page image.
    """

    def __init__(
        self,
        border_color: Tuple[int, int, int] = (255, 100, 0),  # Blue in BGR
        border_thickness: int = 3,
        overlay_color: Tuple[int, int, int] = (255, 200, 100),  # Light blue in BGR
        overlay_alpha: float = 0.3,
        candidate_thickness: int = 1
    ):
        """
        Initialize the visualizer.

        Args:
            border_color: Content box color in BGR format
            border_thickness: Content box thickness in pixels
            overlay_color: Margin overlay color in BGR format
            overlay_alpha: Overlay transparency (0.0 = transparent, 1.0 = opaque)
            candidate_thickness: Thickness of per-method candidate lines
        """
        self.border_color = border_color
        self.border_thickness = border_thickness
        self.overlay_color = overlay_color
        self.overlay_alpha = overlay_alpha
        self.candidate_thickness = candidate_thickness

    def _draw_margin_overlay(self, image: np.ndarray, bounds: EdgeBounds) -> np.ndarray:
        h, w = image.shape[:2]
        mask = np.ones((h, w), dtype=bool)
        mask[max(0, bounds.top):max(0, bounds.bottom), max(0, bounds.left):max(0, bounds.right)] = False

        overlay = image.copy()
        overlay[mask] = self.overlay_color
        return cv2.addWeighted(overlay, self.overlay_alpha, image, 1 - self.overlay_alpha, 0)

    def _draw_candidates(self, image: np.ndarray, candidates: Dict[BoundaryMethod, EdgeBounds]):
        h, w = image.shape[:2]
        for method, bounds in candidates.items():
            color = CANDIDATE_COLORS.get(method, (128, 128, 128))
            cv2.line(image, (0, bounds.top), (w - 1, bounds.top), color, self.candidate_thickness)
            cv2.line(image, (0, bounds.bottom), (w - 1, bounds.bottom), color, self.candidate_thickness)
            cv2.line(image, (bounds.left, 0), (bounds.left, h - 1), color, self.candidate_thickness)
            cv2.line(image, (bounds.right, 0), (bounds.right, h - 1), color, self.candidate_thickness)

    def _draw_text_block(self, image: np.ndarray, lines: List[str]):
        scale = max(0.5, min(2.0, min(image.shape[:2]) / 1000))
        step = int(30 * scale) + 5
        y_offset = step

        for i, text in enumerate(lines):
            position = (10, y_offset + i * step)
            # White outline
            cv2.putText(image, text, position, cv2.FONT_HERSHEY_SIMPLEX, scale, (255, 255, 255), 3, cv2.LINE_AA)
            # Black text
            cv2.putText(image, text, position, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), 1, cv2.LINE_AA)

    def draw(
        self,
        image: RasterImage,
        report: GeometryReport,
        analysis: Optional[DocumentAnalysis] = None,
        draw_candidates: bool = False,
        draw_overlay: bool = True
    ) -> np.ndarray:
        """
        Visualize detected geometry on the image.

        Args:
            image: Page image the report was measured on
            report: Geometry report with fused (and candidate) bounds
            analysis: Final analysis; its values are printed on the image
            draw_candidates: Also draw each boundary method's lines
            draw_overlay: Shade the margin area

        Returns:
            BGR image with visualization
        """
        result = image.to_bgr()
        bounds = report.bounds
        if bounds is None:
            return result

        if draw_overlay:
            result = self._draw_margin_overlay(result, bounds)

        if draw_candidates:
            self._draw_candidates(result, report.candidates)

        cv2.rectangle(
            result,
            (bounds.left, bounds.top),
            (bounds.right, bounds.bottom),
            self.border_color,
            self.border_thickness
        )

        info_text = [f"DPI: {report.dpi:.0f}"]
        if analysis is not None:
            info_text = [
                analysis.paper_size,
                f"Font: {analysis.font_size_pt:.1f}pt",
                f"Margins T/B: {analysis.top_margin:.2f}in / {analysis.bottom_margin:.2f}in",
                f"Margins L/R: {analysis.left_margin:.2f}in / {analysis.right_margin:.2f}in",
            ] + info_text
        self._draw_text_block(result, info_text)

        return result

    def save(self, path: str, image: RasterImage, report: GeometryReport, analysis: Optional[DocumentAnalysis] = None, **kwargs) -> str:
        """Draw and write the preview; returns the output path."""
        result = self.draw(image, report, analysis, **kwargs)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not cv2.imwrite(path, result):
            raise ValueError(f"Failed to write preview: {path}")
        return path
