"""
Document Geometry Module

Estimates paper size, body-text font size and page margins from a single
photographed or scanned page, using ink-density statistics only.
"""

from .analyzer import DocumentAnalyzer
from .config import AnalysisConfig
from .models import DocumentAnalysis, GeometryReport
from .raster import RasterImage, ImageDecodeError, load_image, from_array
from .visualizer import GeometryVisualizer

__all__ = [
    'DocumentAnalyzer',
    'AnalysisConfig',
    'DocumentAnalysis',
    'GeometryReport',
    'RasterImage',
    'ImageDecodeError',
    'load_image',
    'from_array',
    'GeometryVisualizer',
]
