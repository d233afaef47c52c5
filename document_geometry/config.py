"""
Tuning constants for the analysis pipeline.

Every threshold used by the stages lives here so it can be calibrated
without touching the algorithms.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class PreprocessConfig:
    blur_radius: int = 1              # 0 disables the blur
    contrast: float = 1.2             # multiplicative, centered at mid_gray
    mid_gray: float = 128.0
    brightness: float = 1.1           # 1.0 disables the lift


@dataclass(frozen=True)
class BackgroundConfig:
    corner_divisor: int = 20          # corner side = min(w, h) // corner_divisor
    fallback_luminance: int = 240
    ink_offset: int = 30              # ink threshold = background - ink_offset


@dataclass(frozen=True)
class BoundaryConfig:
    # content density (sampled content map)
    content_cell_budget: int = 100_000
    content_band: float = 0.1         # skip this fraction at both ends of the perpendicular axis
    content_trigger: float = 0.08
    corroboration_density: float = 0.03
    corroboration_window: int = 5
    corroboration_ratio: float = 0.6
    content_padding: int = 5
    content_default: float = 0.10

    # edge / gradient
    edge_low: int = 50
    edge_high: int = 100
    edge_trigger: float = 0.10
    strong_edge_trigger: float = 0.05
    edge_padding: int = 3
    edge_default: float = 0.08

    # projection profile
    projection_trigger: float = 0.05
    projection_min_run: int = 3
    projection_padding: int = 2
    projection_default: float = 0.08

    # fusion
    valid_band: Tuple[float, float] = (0.01, 0.40)
    fallback_margin: float = 0.08


@dataclass(frozen=True)
class PaperFamily:
    name: str
    ratio: float                      # short edge / long edge
    long_edge_in: float = 0.0
    dpi_tiers: Tuple[Tuple[int, float], ...] = ()
    base_dpi: float = 100.0


A4 = PaperFamily(
    "A4", 0.707, 11.69,
    ((3000, 300.0), (2000, 200.0), (1500, 150.0)),
)
LETTER = PaperFamily(
    "Letter", 0.773, 11.0,
    ((3300, 300.0), (2200, 200.0), (1650, 150.0)),
)
LEGAL = PaperFamily("Legal", 0.607, 14.0)
TABLOID = PaperFamily("Tabloid", 0.647, 17.0)


@dataclass(frozen=True)
class PaperSizeConfig:
    # Order is the tie-break: the first family within tolerance wins.
    families: Tuple[PaperFamily, ...] = (A4, LETTER, LEGAL, TABLOID)
    tolerance: float = 0.05


@dataclass(frozen=True)
class DpiConfig:
    families: Tuple[PaperFamily, ...] = (A4, LETTER)
    tolerance: float = 0.08
    generic_tiers: Tuple[Tuple[int, float], ...] = ((3000, 250.0), (2000, 180.0), (1200, 120.0))
    generic_base: float = 96.0


@dataclass(frozen=True)
class FontSizeConfig:
    default_pt: float = 12.0
    min_pt: float = 8.0
    max_pt: float = 24.0
    fallback_ink_threshold: int = 180

    line_enter_density: float = 0.05
    line_exit_density: float = 0.02
    min_line_px: int = 8
    max_line_px: int = 100
    line_to_font: float = 0.8

    min_char_px: int = 3
    max_char_px: int = 40
    char_row_step: int = 3
    glyph_aspect: float = 0.6

    line_weight: float = 0.7
    char_weight: float = 0.3


@dataclass(frozen=True)
class MarginConfig:
    noise_floor_in: float = 0.05
    min_margin_in: float = 0.1
    max_margin_in: float = 3.0


@dataclass(frozen=True)
class AnalysisConfig:
    preprocess: PreprocessConfig = field(default_factory=PreprocessConfig)
    background: BackgroundConfig = field(default_factory=BackgroundConfig)
    boundary: BoundaryConfig = field(default_factory=BoundaryConfig)
    paper_size: PaperSizeConfig = field(default_factory=PaperSizeConfig)
    dpi: DpiConfig = field(default_factory=DpiConfig)
    font_size: FontSizeConfig = field(default_factory=FontSizeConfig)
    margins: MarginConfig = field(default_factory=MarginConfig)
