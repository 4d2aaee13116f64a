"""Services package - Byte acquisition, pipeline orchestration and response assembly."""

from .extraction_service import ExtractionService
from .fetcher import read_file, fetch_url, decode_inline, validate_url
from .response_builder import build_result, build_metadata, error_result

__all__ = [
    'ExtractionService',
    'read_file',
    'fetch_url',
    'decode_inline',
    'validate_url',
    'build_result',
    'build_metadata',
    'error_result'
]
