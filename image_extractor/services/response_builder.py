"""
Response assembly - turns a final raster image into a ResultArtifact.
"""
from typing import Dict, Optional

from ..core.constants import LARGE_IMAGE_HINT, LARGE_IMAGE_PIXEL_THRESHOLD
from ..core.models import RasterImage, ResultArtifact
from ..utils.image_utils import image_to_base64


def build_metadata(
    image: RasterImage,
    original_width: int,
    original_height: int,
    has_region: bool,
    extra_metadata: Optional[Dict] = None
) -> Dict:
    """
    Build the metadata object returned next to the image.

    Args:
        image: Final encoded image
        original_width: Width before crop/resize
        original_height: Height before crop/resize
        has_region: Whether the caller asked for a region of interest
        extra_metadata: Caller extras (page info for documents)

    Returns:
        Metadata dictionary
    """
    metadata = {
        'width': image.width,
        'height': image.height,
        'format': image.format,
        'size': image.size,
    }
    if extra_metadata:
        metadata.update(extra_metadata)

    original_pixels = original_width * original_height
    if original_pixels > LARGE_IMAGE_PIXEL_THRESHOLD and not has_region:
        metadata['info'] = LARGE_IMAGE_HINT.format(
            width=original_width,
            height=original_height,
            pixels=original_pixels
        )

    return metadata


def build_result(
    image: RasterImage,
    mime_type: str,
    original_width: int,
    original_height: int,
    has_region: bool = False,
    extra_metadata: Optional[Dict] = None
) -> ResultArtifact:
    """Package the final image and its metadata."""
    metadata = build_metadata(
        image,
        original_width,
        original_height,
        has_region,
        extra_metadata
    )
    return ResultArtifact.success(metadata, image_to_base64(image.data), mime_type)


def error_result(message: str) -> ResultArtifact:
    """Text-only error result."""
    return ResultArtifact.error(f"Error: {message}")
