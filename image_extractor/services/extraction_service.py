"""
Extraction Service - Resolves a visual content reference into an LLM-ready image.

Pipeline: classify source -> acquire bytes -> classify content -> render PDF
page (documents only) -> crop -> resize -> compress -> assemble result.

Every public operation returns a ResultArtifact; failures become error
results instead of exceptions.
"""
import asyncio
import functools
import logging
from typing import Dict, Optional, Sequence

import httpx

from ..config.settings import Settings, settings as default_settings
from ..core.constants import (
    DEFAULT_INLINE_MIME_TYPE,
    DEFAULT_PAGE,
    MAX_PDF_DPI,
    MIN_PDF_DPI
)
from ..core.errors import ExtractionError
from ..core.models import (
    ContentKind,
    FetchedPayload,
    PageSelector,
    RasterImage,
    RegionSpec,
    ResultArtifact,
    SourceKind
)
from ..utils.content_utils import (
    classify_content,
    format_from_mime_type,
    get_mime_and_format,
    is_svg,
    mime_type_for_format
)
from ..utils.image_utils import (
    compress_image,
    decode_image,
    encode_lossless,
    normalize_image,
    rasterize_svg
)
from ..utils.pdf_utils import render_pdf_page
from ..utils.source_utils import classify_source
from .fetcher import decode_inline, fetch_url, read_file
from .response_builder import build_result, error_result

logger = logging.getLogger(__name__)


def tool_boundary(name: str):
    """Convert any failure of a tool operation into an error result."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> ResultArtifact:
            try:
                return await func(self, *args, **kwargs)
            except ExtractionError as e:
                logger.warning("%s failed (%s): %s", name, e.kind, e)
                return error_result(str(e))
            except Exception as e:
                logger.exception("Unexpected error in %s", name)
                return error_result(str(e) or e.__class__.__name__)
        return wrapper
    return decorator


class ExtractionService:
    """Service for turning images and PDF pages into bounded, compressed images."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize extraction service.

        Args:
            settings: Settings instance (default: global settings)
            transport: Optional httpx transport for URL downloads
        """
        self.settings = settings or default_settings
        self.transport = transport

    # Unified entry point

    @tool_boundary("read_visual")
    async def read_visual(
        self,
        source: str,
        page: int = DEFAULT_PAGE,
        dpi: Optional[int] = None,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None,
        mime_type: Optional[str] = None
    ) -> ResultArtifact:
        """
        Analyze visual content from a file path, URL or base64 data.

        Args:
            source: File path, http(s) URL, raw base64 or data URL
            page: For PDFs, 1-indexed page to render
            dpi: For PDFs, rendering resolution (default from settings)
            focus_xyxy: Optional [x1, y1, x2, y2] region (pixels or ratios)
            focal_point: Optional [cx, cy, half_w, half_h] region (pixels or ratios)
            mime_type: Hint for raw base64 data

        Returns:
            ResultArtifact
        """
        source_kind = classify_source(source)
        payload = await self._acquire(source, source_kind, mime_type)

        content_kind = classify_content(
            payload.data,
            extension=payload.extension if source_kind is SourceKind.FILE else None,
            declared_mime_type=payload.declared_mime_type,
            url_suffix=payload.extension if source_kind is SourceKind.URL else None,
            policy=self.settings.pdf_detection_policy
        )
        logger.info(
            "read_visual: %s source, %s content, %d bytes",
            source_kind.value, content_kind.value, payload.size
        )

        region = RegionSpec.from_params(focus_xyxy, focal_point)
        if content_kind is ContentKind.DOCUMENT:
            return await asyncio.to_thread(
                self._process_pdf,
                payload.data,
                self._page_selector(page, dpi),
                region
            )

        return await asyncio.to_thread(
            self.process_image_buffer,
            payload.data,
            fmt=self._image_format(payload, source_kind),
            region=region,
            mime_type_hint=payload.declared_mime_type
        )

    # Image-only entry points

    @tool_boundary("extract_image_from_file")
    async def extract_image_from_file(
        self,
        file_path: str,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> ResultArtifact:
        payload = await asyncio.to_thread(
            read_file,
            file_path,
            self.settings.max_image_size,
            what="Image"
        )
        return await asyncio.to_thread(
            self.process_image_buffer,
            payload.data,
            fmt=self._image_format(payload, SourceKind.FILE),
            region=RegionSpec.from_params(focus_xyxy, focal_point)
        )

    @tool_boundary("extract_image_from_url")
    async def extract_image_from_url(
        self,
        url: str,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> ResultArtifact:
        payload = await self._fetch(url, what="Image")
        return await asyncio.to_thread(
            self.process_image_buffer,
            payload.data,
            region=RegionSpec.from_params(focus_xyxy, focal_point),
            mime_type_hint=payload.declared_mime_type
        )

    @tool_boundary("extract_image_from_base64")
    async def extract_image_from_base64(
        self,
        base64_data: str,
        mime_type: str = DEFAULT_INLINE_MIME_TYPE,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> ResultArtifact:
        payload = await asyncio.to_thread(
            decode_inline,
            base64_data,
            self.settings.max_image_size,
            mime_type_hint=mime_type,
            what="Image"
        )
        return await asyncio.to_thread(
            self.process_image_buffer,
            payload.data,
            region=RegionSpec.from_params(focus_xyxy, focal_point),
            mime_type_hint=payload.declared_mime_type
        )

    # Document-only entry points

    @tool_boundary("extract_pdf_from_file")
    async def extract_pdf_from_file(
        self,
        file_path: str,
        page: int = DEFAULT_PAGE,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> ResultArtifact:
        payload = await asyncio.to_thread(
            read_file,
            file_path,
            self.settings.max_image_size,
            what="PDF"
        )
        return await asyncio.to_thread(
            self._process_pdf,
            payload.data,
            self._page_selector(page),
            RegionSpec.from_params(focus_xyxy, focal_point)
        )

    @tool_boundary("extract_pdf_from_url")
    async def extract_pdf_from_url(
        self,
        url: str,
        page: int = DEFAULT_PAGE,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> ResultArtifact:
        payload = await self._fetch(url, what="PDF")
        return await asyncio.to_thread(
            self._process_pdf,
            payload.data,
            self._page_selector(page),
            RegionSpec.from_params(focus_xyxy, focal_point)
        )

    @tool_boundary("extract_pdf_from_base64")
    async def extract_pdf_from_base64(
        self,
        base64_data: str,
        page: int = DEFAULT_PAGE,
        focus_xyxy: Optional[Sequence[float]] = None,
        focal_point: Optional[Sequence[float]] = None
    ) -> ResultArtifact:
        payload = await asyncio.to_thread(
            decode_inline,
            base64_data,
            self.settings.max_image_size,
            mime_type_hint='application/pdf',
            what="PDF"
        )
        return await asyncio.to_thread(
            self._process_pdf,
            payload.data,
            self._page_selector(page),
            RegionSpec.from_params(focus_xyxy, focal_point)
        )

    # Shared pipeline

    def process_image_buffer(
        self,
        data: bytes,
        fmt: Optional[str] = None,
        region: Optional[RegionSpec] = None,
        extra_metadata: Optional[Dict] = None,
        mime_type_hint: Optional[str] = None
    ) -> ResultArtifact:
        """
        Crop, resize, compress and package an encoded image.

        Args:
            data: Encoded image bytes
            fmt: Compression format (default: the detected source format)
            region: Optional region of interest
            extra_metadata: Extra metadata fields (page info for PDFs)
            mime_type_hint: Declared MIME type, used when the format cannot be detected

        Returns:
            ResultArtifact

        Raises:
            DecodeFailureError: If the bytes are neither a raster image nor SVG
        """
        if is_svg(data, mime_type_hint):
            data = rasterize_svg(data)

        img, source_format = decode_image(data)
        original_width, original_height = img.size

        img, changed = normalize_image(
            img,
            region,
            self.settings.default_max_width,
            self.settings.default_max_height
        )

        target_format = fmt or source_format or format_from_mime_type(mime_type_hint)
        try:
            final = compress_image(img, target_format, **self.settings.get_compression_params())
        except (KeyError, OSError, ValueError) as e:
            logger.warning("Compression to %s failed, using uncompressed image: %s", target_format, e)
            final = self._uncompressed(
                img,
                changed,
                data,
                (original_width, original_height),
                source_format or target_format
            )

        return build_result(
            final,
            mime_type_for_format(final.format),
            original_width,
            original_height,
            has_region=region is not None,
            extra_metadata=extra_metadata
        )

    @staticmethod
    def _uncompressed(img, changed: bool, data: bytes, source_size, source_format: str) -> RasterImage:
        """Lossless copy of processed pixels, or the source bytes when that fails too."""
        if changed:
            try:
                return encode_lossless(img)
            except (OSError, ValueError) as e:
                logger.warning("Lossless encoding failed, returning source bytes: %s", e)

        width, height = source_size
        return RasterImage(data=data, width=width, height=height, format=source_format)

    def _process_pdf(
        self,
        pdf_bytes: bytes,
        selector: PageSelector,
        region: Optional[RegionSpec]
    ) -> ResultArtifact:
        rendered = render_pdf_page(pdf_bytes, selector.page, selector.dpi)
        return self.process_image_buffer(
            rendered.image_bytes,
            fmt='png',
            region=region,
            extra_metadata={
                'source': 'pdf',
                'page': rendered.page,
                'totalPages': rendered.total_pages,
                'dpi': rendered.dpi
            }
        )

    def _page_selector(self, page: int, dpi: Optional[int] = None) -> PageSelector:
        dpi = dpi if dpi is not None else self.settings.pdf_dpi
        if not MIN_PDF_DPI <= dpi <= MAX_PDF_DPI:
            raise ValueError(f"dpi must be between {MIN_PDF_DPI} and {MAX_PDF_DPI}, got {dpi}")
        return PageSelector(page=page, dpi=dpi)

    async def _acquire(
        self,
        source: str,
        source_kind: SourceKind,
        mime_type: Optional[str]
    ) -> FetchedPayload:
        if source_kind is SourceKind.URL:
            return await self._fetch(source)
        if source_kind is SourceKind.INLINE:
            return await asyncio.to_thread(
                decode_inline,
                source,
                self.settings.max_image_size,
                mime_type_hint=mime_type
            )
        return await asyncio.to_thread(read_file, source, self.settings.max_image_size)

    async def _fetch(self, url: str, what: str = "Content") -> FetchedPayload:
        return await fetch_url(
            url,
            self.settings.max_image_size,
            allowed_domains=self.settings.get_allowed_domains(),
            timeout=self.settings.http_timeout,
            transport=self.transport,
            what=what
        )

    @staticmethod
    def _image_format(payload: FetchedPayload, source_kind: SourceKind) -> Optional[str]:
        """Files are compressed by extension; other sources by detected format."""
        if source_kind is SourceKind.FILE:
            return get_mime_and_format(payload.extension or '')[1]
        return None
