"""
Image utilities for the extraction pipeline.

Handles decoding, region-of-interest cropping, bounded resizing and
format-specific compression.
"""
import base64
import math
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.constants import (
    COMPRESSION_OPTIONS,
    DEFAULT_COMPRESSION_QUALITY,
    DEFAULT_FORMAT,
    DEFAULT_PNG_COMPRESSION_LEVEL,
    PNG_MODES
)
from ..core.errors import DecodeFailureError
from ..core.models import RasterImage, RegionShape, RegionSpec


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def rasterize_svg(data: bytes) -> bytes:
    """
    Rasterize SVG markup to PNG bytes at its intrinsic size.

    Raises:
        DecodeFailureError: If the markup cannot be rendered
    """
    # cairosvg loads the system cairo library on import
    import cairosvg

    try:
        return cairosvg.svg2png(bytestring=data)
    except Exception as e:
        raise DecodeFailureError(f"Could not rasterize SVG image - {e}") from e


def decode_image(data: bytes) -> Tuple[Image.Image, Optional[str]]:
    """
    Decode image bytes.

    EXIF orientation is applied so region coordinates refer to the image as
    it is displayed.

    Args:
        data: Encoded image bytes

    Returns:
        Tuple of (PIL Image, lower-case source format such as 'png', or None)

    Raises:
        DecodeFailureError: If the bytes are not a decodable raster image
    """
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeFailureError(f"Could not process image data - {e}") from e

    source_format = img.format.lower() if img.format else None
    img = ImageOps.exif_transpose(img)
    return img, source_format


def resolve_region(
    region: RegionSpec,
    width: int,
    height: int
) -> Optional[Tuple[int, int, int, int]]:
    """
    Resolve a region to a clamped pixel rectangle.

    Args:
        region: Region of interest (ratio or pixel values)
        width: Source image width
        height: Source image height

    Returns:
        (left, top, width, height) inside the image, or None if the clamped
        rectangle is empty
    """
    a, b, c, d = region.values
    if region.is_ratio:
        a, c = a * width, c * width
        b, d = b * height, d * height

    if region.shape is RegionShape.XYXY:
        left = round_half_up(a)
        top = round_half_up(b)
        crop_w = round_half_up(c - a)
        crop_h = round_half_up(d - b)
    elif region.shape is RegionShape.CENTER:
        left = round_half_up(a - c)
        top = round_half_up(b - d)
        crop_w = round_half_up(c * 2)
        crop_h = round_half_up(d * 2)
    else:
        raise ValueError(f"Unknown region shape: {region.shape}")

    left = max(0, left)
    top = max(0, top)
    if left + crop_w > width:
        crop_w = width - left
    if top + crop_h > height:
        crop_h = height - top

    if crop_w <= 0 or crop_h <= 0:
        return None
    return left, top, crop_w, crop_h


def crop_to_region(img: Image.Image, region: Optional[RegionSpec]) -> Tuple[Image.Image, bool]:
    """
    Crop an image to a region of interest.

    Returns:
        Tuple of (image, whether a crop was applied). An empty region leaves
        the image untouched.
    """
    if region is None:
        return img, False

    box = resolve_region(region, img.width, img.height)
    if box is None:
        return img, False

    left, top, crop_w, crop_h = box
    return img.crop((left, top, left + crop_w, top + crop_h)), True


def resize_to_fit(img: Image.Image, max_width: int, max_height: int) -> Tuple[Image.Image, bool]:
    """
    Shrink an image to fit inside max_width x max_height, keeping aspect ratio.

    Never enlarges.

    Returns:
        Tuple of (image, whether it was resized)
    """
    width, height = img.size
    target_width = min(width, max_width)
    target_height = min(height, max_height)

    if width <= target_width and height <= target_height:
        return img, False

    resized = img.copy()
    resized.thumbnail((target_width, target_height), Image.Resampling.LANCZOS)
    return resized, True


def normalize_image(
    img: Image.Image,
    region: Optional[RegionSpec],
    max_width: int,
    max_height: int
) -> Tuple[Image.Image, bool]:
    """
    Crop then resize.

    Cropping first keeps region coordinates relative to the source resolution.

    Returns:
        Tuple of (image, whether the pixels changed)
    """
    img, cropped = crop_to_region(img, region)
    img, resized = resize_to_fit(img, max_width, max_height)
    return img, cropped or resized


def to_png_mode(img: Image.Image) -> Image.Image:
    """Convert pixel modes PNG cannot store (CMYK, YCbCr, LAB, ...) to RGB or RGBA."""
    if img.mode in PNG_MODES:
        return img
    return img.convert('RGBA' if img.mode.upper().endswith('A') else 'RGB')


def compress_image(
    img: Image.Image,
    fmt: str,
    quality: int = DEFAULT_COMPRESSION_QUALITY,
    compression_level: int = DEFAULT_PNG_COMPRESSION_LEVEL
) -> RasterImage:
    """
    Encode an image with format-specific compression settings.

    Args:
        img: PIL Image
        fmt: Target format ('jpeg', 'png', 'webp', ...). Unknown formats use
            the default lossy format.
        quality: Lossy quality, 1-100
        compression_level: Lossless compression level, 0-9

    Returns:
        RasterImage with the encoded bytes
    """
    fmt = fmt.lower()
    options = COMPRESSION_OPTIONS.get(fmt)
    if options is None:
        fmt = DEFAULT_FORMAT
        options = COMPRESSION_OPTIONS[fmt]

    encoder = options['encoder']
    save_kwargs = dict(options.get('extra', {}))
    if 'quality' in options['params']:
        save_kwargs['quality'] = quality
    if 'compress_level' in options['params']:
        save_kwargs['compress_level'] = compression_level

    # JPEG has no alpha or palette
    if encoder == 'JPEG' and img.mode not in ('RGB', 'L', 'CMYK'):
        img = img.convert('RGB')
    elif encoder == 'PNG':
        img = to_png_mode(img)

    buf = BytesIO()
    img.save(buf, format=encoder, **save_kwargs)

    return RasterImage(
        data=buf.getvalue(),
        width=img.width,
        height=img.height,
        format='jpeg' if encoder == 'JPEG' else fmt
    )


def encode_lossless(img: Image.Image) -> RasterImage:
    """Encode as PNG with default settings."""
    img = to_png_mode(img)
    buf = BytesIO()
    img.save(buf, format='PNG')
    return RasterImage(data=buf.getvalue(), width=img.width, height=img.height, format='png')


def image_to_base64(data: bytes) -> str:
    """Encode bytes as base64 text."""
    return base64.b64encode(data).decode()

