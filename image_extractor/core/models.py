"""
Core domain models for the extraction pipeline.

These are request-scoped data structures; nothing here outlives a call.
"""
import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import DEFAULT_PAGE, DEFAULT_PDF_DPI


class SourceKind(str, Enum):
    """Where a reference points."""
    FILE = "file"
    URL = "url"
    INLINE = "base64"


class ContentKind(str, Enum):
    """What the fetched bytes are."""
    DOCUMENT = "pdf"
    IMAGE = "image"


class RegionShape(str, Enum):
    """Discriminant for RegionSpec."""
    XYXY = "xyxy"
    CENTER = "center"


@dataclass(frozen=True)
class RegionSpec:
    """
    Region of interest.

    XYXY holds (x1, y1, x2, y2); CENTER holds (cx, cy, half_width, half_height).
    The four values are either all ratios of the image size or all pixels.
    """
    shape: RegionShape
    values: Tuple[float, float, float, float]

    @property
    def is_ratio(self) -> bool:
        """All four values in [0, 1] means ratio mode."""
        return all(0.0 <= v <= 1.0 for v in self.values)

    @classmethod
    def from_xyxy(cls, values: Sequence[float]) -> "RegionSpec":
        return cls(RegionShape.XYXY, _four(values))

    @classmethod
    def from_focal_point(cls, values: Sequence[float]) -> "RegionSpec":
        return cls(RegionShape.CENTER, _four(values))

    @classmethod
    def from_params(
        cls,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> Optional["RegionSpec"]:
        """
        Build a region from tool parameters.

        focus_xyxy wins over focal_point. Lists that do not hold exactly four
        finite numbers are ignored.
        """
        if _usable(focus_xyxy):
            return cls.from_xyxy(focus_xyxy)
        if _usable(focal_point):
            return cls.from_focal_point(focal_point)
        return None


def _usable(values: Optional[Sequence[float]]) -> bool:
    return values is not None and len(values) == 4 and all(math.isfinite(v) for v in values)


def _four(values: Sequence[float]) -> Tuple[float, float, float, float]:
    if len(values) != 4:
        raise ValueError(f"Region needs exactly 4 values, got {len(values)}")
    a, b, c, d = (float(v) for v in values)
    return (a, b, c, d)


@dataclass
class FetchedPayload:
    """Raw bytes plus where they came from."""
    data: bytes
    reference: str
    declared_mime_type: Optional[str] = None
    extension: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class PageSelector:
    """Page choice for documents. Page bounds are checked once the document is open."""
    page: int = DEFAULT_PAGE
    dpi: int = DEFAULT_PDF_DPI

    def __post_init__(self):
        if self.dpi <= 0:
            raise ValueError("dpi must be a positive integer")


@dataclass
class RasterImage:
    """Encoded image bytes with decoded dimensions."""
    data: bytes
    width: int
    height: int
    format: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class RenderedPage:
    """One rasterized document page."""
    image_bytes: bytes
    page: int
    total_pages: int
    dpi: int
    width: int = 0
    height: int = 0


@dataclass
class ResultArtifact:
    """Caller-facing result: a list of typed content parts."""
    content: List[Dict] = field(default_factory=list)
    is_error: bool = False
    metadata: Optional[Dict] = None

    @classmethod
    def success(cls, metadata: Dict, image_base64: str, mime_type: str) -> "ResultArtifact":
        return cls(
            content=[
                {'type': 'text', 'text': json.dumps(metadata)},
                {'type': 'image', 'data': image_base64, 'mimeType': mime_type},
            ],
            metadata=metadata
        )

    @classmethod
    def error(cls, message: str) -> "ResultArtifact":
        return cls(content=[{'type': 'text', 'text': message}], is_error=True)

    @property
    def text(self) -> str:
        """Text of the first part (metadata JSON or error message)."""
        return self.content[0]['text'] if self.content else ""

    def to_dict(self) -> dict:
        """Convert to the wire shape."""
        result = {'content': list(self.content)}
        if self.is_error:
            result['isError'] = True
        return result
