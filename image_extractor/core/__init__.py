"""Core package - Domain models, constants and errors."""

from .models import (
    SourceKind,
    ContentKind,
    RegionShape,
    RegionSpec,
    FetchedPayload,
    PageSelector,
    RasterImage,
    RenderedPage,
    ResultArtifact
)
from .errors import (
    ExtractionError,
    NotFoundError,
    SizeExceededError,
    InvalidEncodingError,
    InvalidReferenceError,
    DomainRejectedError,
    PageOutOfRangeError,
    RenderFailureError,
    DecodeFailureError
)

__all__ = [
    'SourceKind',
    'ContentKind',
    'RegionShape',
    'RegionSpec',
    'FetchedPayload',
    'PageSelector',
    'RasterImage',
    'RenderedPage',
    'ResultArtifact',
    'ExtractionError',
    'NotFoundError',
    'SizeExceededError',
    'InvalidEncodingError',
    'InvalidReferenceError',
    'DomainRejectedError',
    'PageOutOfRangeError',
    'RenderFailureError',
    'DecodeFailureError'
]
