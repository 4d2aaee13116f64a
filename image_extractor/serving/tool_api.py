"""
Tool API - exposes the extraction operations as named tools over HTTP.

Endpoints:
- GET  /tools               list tool names and descriptions
- POST /tools/<tool_name>   run a tool; the body is the tool's parameter record
- GET  /health

A tool call whose body passes schema validation always answers 200, and
failures are signalled by isError in the body. Bodies that fail validation
get FastAPI's 422.
"""
from typing import List

from fastapi import Depends, FastAPI

from .. import __version__
from ..api.dependencies import get_extraction_service
from ..api.schemas import (
    ImageBase64Request,
    ImageFileRequest,
    ImageUrlRequest,
    PdfBase64Request,
    PdfFileRequest,
    PdfUrlRequest,
    ReadVisualRequest,
    ToolInfo,
    ToolResponse
)
from ..core.constants import TOOL_DESCRIPTIONS
from ..services.extraction_service import ExtractionService

tool_app = FastAPI(
    title="Image Extractor",
    description="Images and PDF pages from files, URLs and base64 data, prepared for LLM visual analysis",
    version=__version__
)


@tool_app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@tool_app.get("/tools", response_model=List[ToolInfo])
async def list_tools():
    """List available tools."""
    return [
        ToolInfo(name=name, description=description)
        for name, description in TOOL_DESCRIPTIONS.items()
    ]


@tool_app.post("/tools/read_visual", response_model=ToolResponse)
async def read_visual(
    request: ReadVisualRequest,
    service: ExtractionService = Depends(get_extraction_service)
):
    """Auto-detect source and content type, then return an image."""
    result = await service.read_visual(
        source=request.source,
        page=request.page,
        dpi=request.dpi,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point,
        mime_type=request.mime_type
    )
    return result.to_dict()


@tool_app.post("/tools/extract_image_from_file", response_model=ToolResponse)
async def extract_image_from_file(
    request: ImageFileRequest,
    service: ExtractionService = Depends(get_extraction_service)
):
    result = await service.extract_image_from_file(
        request.file_path,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point
    )
    return result.to_dict()


@tool_app.post("/tools/extract_image_from_url", response_model=ToolResponse)
async def extract_image_from_url(
    request: ImageUrlRequest,
    service: ExtractionService = Depends(get_extraction_service)
):
    result = await service.extract_image_from_url(
        request.url,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point
    )
    return result.to_dict()


@tool_app.post("/tools/extract_image_from_base64", response_model=ToolResponse)
async def extract_image_from_base64(
    request: ImageBase64Request,
    service: ExtractionService = Depends(get_extraction_service)
):
    result = await service.extract_image_from_base64(
        request.base64,
        mime_type=request.mime_type,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point
    )
    return result.to_dict()


@tool_app.post("/tools/extract_pdf_from_file", response_model=ToolResponse)
async def extract_pdf_from_file(
    request: PdfFileRequest,
    service: ExtractionService = Depends(get_extraction_service)
):
    result = await service.extract_pdf_from_file(
        request.file_path,
        page=request.page,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point
    )
    return result.to_dict()


@tool_app.post("/tools/extract_pdf_from_url", response_model=ToolResponse)
async def extract_pdf_from_url(
    request: PdfUrlRequest,
    service: ExtractionService = Depends(get_extraction_service)
):
    result = await service.extract_pdf_from_url(
        request.url,
        page=request.page,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point
    )
    return result.to_dict()


@tool_app.post("/tools/extract_pdf_from_base64", response_model=ToolResponse)
async def extract_pdf_from_base64(
    request: PdfBase64Request,
    service: ExtractionService = Depends(get_extraction_service)
):
    result = await service.extract_pdf_from_base64(
        request.base64,
        page=request.page,
        focus_xyxy=request.focus_xyxy,
        focal_point=request.focal_point
    )
    return result.to_dict()


# Export app for uvicorn
app = tool_app
