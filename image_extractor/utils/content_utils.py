"""
Content-type classification for fetched payloads.

Magic bytes are authoritative; MIME type and extension hints only come into
play when the magic bytes do not identify a PDF.
"""
import os
from typing import Optional, Tuple
from urllib.parse import urlparse

from ..core.constants import (
    DEFAULT_FORMAT,
    DEFAULT_MIME_TYPE,
    EXTENSION_FORMATS,
    FORMAT_MIME_TYPES,
    PDF_DETECTION_POLICIES,
    PDF_MAGIC,
    SVG_MIME_TYPE
)
from ..core.models import ContentKind


def is_pdf_bytes(data: bytes) -> bool:
    """Check the %PDF- magic marker."""
    return len(data) >= len(PDF_MAGIC) and data[:len(PDF_MAGIC)] == PDF_MAGIC


def is_pdf_mime_type(mime_type: Optional[str]) -> bool:
    return bool(mime_type) and 'pdf' in mime_type.lower()


def is_pdf_extension(extension: Optional[str]) -> bool:
    return bool(extension) and extension.lower().endswith('.pdf')


def is_svg(data: bytes, declared_mime_type: Optional[str] = None) -> bool:
    """
    Check for SVG markup.

    Matches an image/svg+xml MIME type, or markup whose first kilobyte
    opens an <svg> element (after any XML declaration, doctype or comment).
    """
    if declared_mime_type and declared_mime_type.lower() == SVG_MIME_TYPE:
        return True
    head = data[:1024].lstrip(b'\xef\xbb\xbf \t\r\n').lower()
    return head.startswith(b'<') and b'<svg' in head


def classify_content(
    data: bytes,
    extension: Optional[str] = None,
    declared_mime_type: Optional[str] = None,
    url_suffix: Optional[str] = None,
    policy: str = 'hints'
) -> ContentKind:
    """
    Decide whether a payload is a document or an image.

    Args:
        data: Payload bytes
        extension: File extension (e.g. '.pdf')
        declared_mime_type: MIME type from a header, data URL or caller hint
        url_suffix: Suffix of the URL path
        policy: 'hints' falls back to MIME/extension hints, 'magic' trusts
            magic bytes only

    Returns:
        ContentKind.DOCUMENT or ContentKind.IMAGE
    """
    if policy not in PDF_DETECTION_POLICIES:
        raise ValueError(f"Unknown PDF detection policy: {policy}")

    if is_pdf_bytes(data):
        return ContentKind.DOCUMENT

    if policy == 'magic':
        return ContentKind.IMAGE

    if is_pdf_mime_type(declared_mime_type):
        return ContentKind.DOCUMENT

    if is_pdf_extension(extension) or is_pdf_extension(url_suffix):
        return ContentKind.DOCUMENT

    return ContentKind.IMAGE


def get_extension(reference: str) -> str:
    """Lower-case extension of a path or URL path ('' if none)."""
    if reference.startswith('http://') or reference.startswith('https://'):
        reference = urlparse(reference).path
    return os.path.splitext(reference)[1].lower()


def get_mime_and_format(extension: str) -> Tuple[str, str]:
    """
    Map a file extension to (mime_type, compression_format).

    Unknown extensions map to the default lossy format.
    """
    return EXTENSION_FORMATS.get(extension.lower(), (DEFAULT_MIME_TYPE, DEFAULT_FORMAT))


def format_from_mime_type(mime_type: Optional[str]) -> str:
    """'image/webp' -> 'webp'; falls back to the default format."""
    if mime_type and '/' in mime_type:
        subtype = mime_type.split('/', 1)[1].split(';', 1)[0].strip().lower()
        if subtype:
            return subtype
    return DEFAULT_FORMAT


def mime_type_for_format(fmt: str) -> str:
    """MIME type of an encoded output format."""
    return FORMAT_MIME_TYPES.get(fmt.lower(), DEFAULT_MIME_TYPE)
