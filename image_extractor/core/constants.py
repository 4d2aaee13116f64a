"""
Constants and fallback defaults for the extraction pipeline.
"""

# PDF magic bytes
PDF_MAGIC = b'%PDF-'

# Fallbacks used when nothing more specific is known
DEFAULT_FORMAT = 'jpeg'
DEFAULT_MIME_TYPE = 'image/jpeg'
DEFAULT_INLINE_MIME_TYPE = 'image/png'
DEFAULT_SOURCE_KIND = 'file'

# Pipeline defaults (overridable through settings)
DEFAULT_MAX_IMAGE_SIZE = 50 * 1024 * 1024
DEFAULT_MAX_WIDTH = 512
DEFAULT_MAX_HEIGHT = 512
DEFAULT_PDF_DPI = 150
DEFAULT_PAGE = 1
MIN_PDF_DPI = 72
MAX_PDF_DPI = 600
PDF_POINTS_PER_INCH = 72
DEFAULT_COMPRESSION_QUALITY = 80
DEFAULT_PNG_COMPRESSION_LEVEL = 9

# Above this many source pixels, an unfocused request gets an advisory hint
LARGE_IMAGE_PIXEL_THRESHOLD = 300_000

# Source classifier limits
MIN_INLINE_BASE64_LENGTH = 100
MAX_PATH_LIKE_LENGTH = 500

# Pixel modes the PNG encoder stores as-is
PNG_MODES = ('1', 'L', 'LA', 'I', 'I;16', 'P', 'RGB', 'RGBA')

SVG_MIME_TYPE = 'image/svg+xml'

# Content-type detection policies
PDF_DETECTION_POLICIES = ('hints', 'magic')

# File extension -> (mime type, compression format)
EXTENSION_FORMATS = {
    '.png': ('image/png', 'png'),
    '.jpg': ('image/jpeg', 'jpeg'),
    '.jpeg': ('image/jpeg', 'jpeg'),
    '.gif': ('image/gif', 'gif'),
    '.webp': ('image/webp', 'webp'),
    # SVG is rasterized with cairosvg, so it leaves the pipeline as PNG
    '.svg': ('image/png', 'png'),
    '.avif': ('image/avif', 'avif'),
    '.tif': ('image/tiff', 'tiff'),
    '.tiff': ('image/tiff', 'tiff'),
}

# Compression format -> mime type of the encoded output
FORMAT_MIME_TYPES = {
    'jpeg': 'image/jpeg',
    'jpg': 'image/jpeg',
    'png': 'image/png',
    'gif': 'image/gif',
    'webp': 'image/webp',
    'avif': 'image/avif',
    'tiff': 'image/tiff',
    'bmp': 'image/bmp',
}

# Compression format -> Pillow encoder name and which tunables it takes.
# 'quality' applies the lossy quality setting, 'compress_level' the lossless level.
COMPRESSION_OPTIONS = {
    'jpeg': {'encoder': 'JPEG', 'params': ('quality',)},
    'jpg': {'encoder': 'JPEG', 'params': ('quality',)},
    'png': {'encoder': 'PNG', 'params': ('compress_level',)},
    'webp': {'encoder': 'WEBP', 'params': ('quality',)},
    'avif': {'encoder': 'AVIF', 'params': ('quality',)},
    'tiff': {'encoder': 'TIFF', 'params': (), 'extra': {'compression': 'tiff_deflate'}},
    'gif': {'encoder': 'GIF', 'params': ()},
}

LARGE_IMAGE_HINT = (
    "Large image detected ({width}x{height} = {pixels:,} pixels). "
    "Consider using focus_xyxy or focal_point to zoom into specific regions "
    "for better detail recognition and reduced token usage."
)

# Tool names and descriptions exposed by the tool API
TOOL_DESCRIPTIONS = {
    'read_visual': (
        "Analyze visual content from any source: local files, URLs, or base64 data. "
        "Automatically detects source type and content format (images or PDFs). "
        "For PDFs, renders the specified page as an image."
    ),
    'extract_image_from_file': "Extract and analyze an image from a local file path.",
    'extract_image_from_url': "Extract and analyze an image from an HTTP/HTTPS URL.",
    'extract_image_from_base64': "Extract and analyze an image from base64-encoded data.",
    'extract_pdf_from_file': "Render one page of a local PDF file as an image. Returns total page count in metadata.",
    'extract_pdf_from_url': "Render one page of a PDF at an HTTP/HTTPS URL as an image. Returns total page count in metadata.",
    'extract_pdf_from_base64': "Render one page of a base64-encoded PDF as an image. Returns total page count in metadata.",
}
