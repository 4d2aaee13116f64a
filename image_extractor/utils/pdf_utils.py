"""
PDF page rendering with PyMuPDF.

Renders exactly one page of an in-memory PDF to a PNG buffer and reports the
document's page count with it.
"""
import logging
import threading

from ..core.constants import DEFAULT_PDF_DPI, PDF_POINTS_PER_INCH
from ..core.errors import PageOutOfRangeError, RenderFailureError
from ..core.models import RenderedPage

logger = logging.getLogger(__name__)

_pdf_backend = None
_pdf_backend_lock = threading.Lock()


def get_pdf_backend():
    """
    Get the PyMuPDF module, importing it once per process.

    Returns:
        The fitz module
    """
    global _pdf_backend
    if _pdf_backend is None:
        with _pdf_backend_lock:
            if _pdf_backend is None:
                import fitz  # PyMuPDF
                _pdf_backend = fitz
                logger.debug("Loaded PyMuPDF %s", getattr(fitz, 'VersionBind', 'unknown'))
    return _pdf_backend


def _open_document(pdf_bytes: bytes):
    fitz = get_pdf_backend()
    if not pdf_bytes:
        raise RenderFailureError("Failed to open PDF document: empty input")
    try:
        return fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as e:
        raise RenderFailureError(f"Failed to open PDF document: {e}") from e


def render_pdf_page(pdf_bytes: bytes, page_num: int, dpi: int = DEFAULT_PDF_DPI) -> RenderedPage:
    """
    Render a PDF page to a PNG image.

    Args:
        pdf_bytes: PDF document bytes
        page_num: 1-indexed page number
        dpi: Target DPI for rendering (default 150)

    Returns:
        RenderedPage with PNG bytes and the total page count

    Raises:
        RenderFailureError: If the document cannot be opened or rasterized
        PageOutOfRangeError: If page_num is outside 1..page_count
    """
    fitz = get_pdf_backend()
    doc = _open_document(pdf_bytes)
    try:
        page_count = doc.page_count
        if not page_count:
            raise RenderFailureError("Failed to determine PDF page count")

        if page_num < 1 or page_num > page_count:
            raise PageOutOfRangeError(page_num, page_count)

        scale = dpi / PDF_POINTS_PER_INCH
        try:
            page = doc.load_page(page_num - 1)  # 0-indexed
            pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            png_bytes = pix.tobytes("png")
        except Exception as e:
            raise RenderFailureError(f"Failed to render page {page_num}: {e}") from e

        return RenderedPage(
            image_bytes=png_bytes,
            page=page_num,
            total_pages=page_count,
            dpi=dpi,
            width=pix.width,
            height=pix.height
        )
    finally:
        doc.close()
