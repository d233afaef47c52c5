"""
Result records produced by the analyzer
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Optional

from common.bounds import EdgeBounds
from .boundary import BoundaryMethod


def to_epoch_millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(round(moment.timestamp() * 1000))


def from_epoch_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000.0, tz=timezone.utc)


@dataclass(frozen=True)
class DocumentAnalysis:
    """
    Estimated physical properties of one photographed page.

    Margins are in inches, the font size in points. ``id`` is only set
    once the record has been stored.
    """
    paper_size: str
    font_size_pt: float
    top_margin: float
    bottom_margin: float
    left_margin: float
    right_margin: float
    source_image_path: str
    created_at: datetime
    id: Optional[int] = None

    def with_id(self, record_id: int) -> "DocumentAnalysis":
        return replace(self, id=record_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "imagePath": self.source_image_path,
            "paperSize": self.paper_size,
            "fontSize": self.font_size_pt,
            "topMargin": self.top_margin,
            "bottomMargin": self.bottom_margin,
            "leftMargin": self.left_margin,
            "rightMargin": self.right_margin,
            "createdAt": to_epoch_millis(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentAnalysis":
        return cls(
            id=data.get("id"),
            source_image_path=data["imagePath"],
            paper_size=data["paperSize"],
            font_size_pt=float(data["fontSize"]),
            top_margin=float(data["topMargin"]),
            bottom_margin=float(data["bottomMargin"]),
            left_margin=float(data["leftMargin"]),
            right_margin=float(data["rightMargin"]),
            created_at=from_epoch_millis(int(data["createdAt"])),
        )


@dataclass(frozen=True)
class GeometryReport:
    """Intermediate measurements of one analysis, for previews and debugging."""
    width: int
    height: int
    background_luminance: int
    ink_threshold: int
    dpi: float
    candidates: Dict[BoundaryMethod, EdgeBounds] = field(default_factory=dict)
    bounds: Optional[EdgeBounds] = None

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "backgroundLuminance": self.background_luminance,
            "inkThreshold": self.ink_threshold,
            "dpi": self.dpi,
            "candidates": {method.value: b.as_dict() for method, b in self.candidates.items()},
            "bounds": self.bounds.as_dict() if self.bounds else None,
        }
