"""Utilities package - Helper functions for source, content, image and PDF handling."""

from .source_utils import (
    classify_source,
    is_file_path,
    is_valid_base64,
    clean_base64,
    parse_data_url
)

from .content_utils import (
    classify_content,
    is_pdf_bytes,
    get_extension,
    get_mime_and_format,
    format_from_mime_type,
    is_svg,
    mime_type_for_format
)

from .image_utils import (
    rasterize_svg,
    decode_image,
    resolve_region,
    crop_to_region,
    resize_to_fit,
    normalize_image,
    to_png_mode,
    compress_image,
    encode_lossless,
    image_to_base64
)

from .pdf_utils import (
    get_pdf_backend,
    render_pdf_page
)

__all__ = [
    # Source utils
    'classify_source',
    'is_file_path',
    'is_valid_base64',
    'clean_base64',
    'parse_data_url',

    # Content utils
    'classify_content',
    'is_pdf_bytes',
    'get_extension',
    'get_mime_and_format',
    'format_from_mime_type',
    'is_svg',
    'mime_type_for_format',

    # Image utils
    'rasterize_svg',
    'decode_image',
    'resolve_region',
    'crop_to_region',
    'resize_to_fit',
    'normalize_image',
    'to_png_mode',
    'compress_image',
    'encode_lossless',
    'image_to_base64',

    # PDF utils
    'get_pdf_backend',
    'render_pdf_page'
]
