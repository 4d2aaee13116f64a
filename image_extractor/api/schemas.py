"""
Pydantic schemas for tool request/response validation.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.constants import (
    DEFAULT_INLINE_MIME_TYPE,
    DEFAULT_PAGE,
    MAX_PDF_DPI,
    MIN_PDF_DPI
)

FOCUS_XYXY_DESCRIPTION = (
    "Optional focus rectangle [x1, y1, x2, y2]. "
    "Can be pixel coordinates or ratios (0.0-1.0)."
)
FOCAL_POINT_DESCRIPTION = (
    "Optional focal point [centerX, centerY, halfWidth, halfHeight]. "
    "Can be pixel coordinates or ratios (0.0-1.0)."
)


class RegionParams(BaseModel):
    """Region-of-interest parameters shared by every tool."""
    focus_xyxy: Optional[List[float]] = Field(default=None, description=FOCUS_XYXY_DESCRIPTION)
    focal_point: Optional[List[float]] = Field(default=None, description=FOCAL_POINT_DESCRIPTION)


class ReadVisualRequest(RegionParams):
    """Request body for read_visual."""
    source: str = Field(description="Local file path, http(s) URL, raw base64 or data URL")
    page: int = Field(default=DEFAULT_PAGE, ge=1, description="For PDFs: 1-indexed page to render")
    dpi: Optional[int] = Field(default=None, ge=MIN_PDF_DPI, le=MAX_PDF_DPI, description="For PDFs: rendering DPI")
    mime_type: Optional[str] = Field(default=None, description="Hint for raw base64 data")


class ImageFileRequest(RegionParams):
    file_path: str


class ImageUrlRequest(RegionParams):
    url: str


class ImageBase64Request(RegionParams):
    base64: str
    mime_type: str = DEFAULT_INLINE_MIME_TYPE


class PdfFileRequest(RegionParams):
    file_path: str
    page: int = Field(default=DEFAULT_PAGE, ge=1)


class PdfUrlRequest(RegionParams):
    url: str
    page: int = Field(default=DEFAULT_PAGE, ge=1)


class PdfBase64Request(RegionParams):
    base64: str
    page: int = Field(default=DEFAULT_PAGE, ge=1)


class ToolResponse(BaseModel):
    """Result of a tool call: typed content parts and an error flag."""
    content: List[Dict]
    isError: bool = False


class ToolInfo(BaseModel):
    """Tool listing entry."""
    name: str
    description: str
