"""
Source classification for content references.

Decides from the reference string alone whether it is a URL, inline base64
data or a filesystem path. No I/O happens here.
"""
import re
from typing import Optional, Tuple

from ..core.constants import (
    DEFAULT_SOURCE_KIND,
    MAX_PATH_LIKE_LENGTH,
    MIN_INLINE_BASE64_LENGTH
)
from ..core.models import SourceKind

DRIVE_PATH_PATTERN = re.compile(r'^[A-Za-z]:[\\/]')
RELATIVE_PATH_PATTERN = re.compile(r'^\.{0,2}[\\/]')
EXTENSION_PATTERN = re.compile(r'\.[A-Za-z0-9]+$')
BASE64_PATTERN = re.compile(r'^[A-Za-z0-9+/]+={0,2}$')
DATA_URL_PATTERN = re.compile(r'^data:([^;,]+);base64,(.+)$', re.DOTALL)
WHITESPACE_PATTERN = re.compile(r'\s+')


def classify_source(reference: str) -> SourceKind:
    """
    Classify a content reference.

    Order matters: URL and data-URI prefixes are unambiguous, path shapes are
    checked before the weaker base64 heuristic, and anything left over is
    treated as a file path so it fails later with a clear "does not exist".

    Args:
        reference: Caller-supplied reference string

    Returns:
        SourceKind
    """
    if reference.startswith('http://') or reference.startswith('https://'):
        return SourceKind.URL

    if reference.startswith('data:'):
        return SourceKind.INLINE

    if is_file_path(reference):
        return SourceKind.FILE

    if len(reference) >= MIN_INLINE_BASE64_LENGTH and is_valid_base64(reference):
        return SourceKind.INLINE

    return SourceKind(DEFAULT_SOURCE_KIND)


def is_file_path(text: str) -> bool:
    """Check if a string looks like a filesystem path."""
    # Windows drive path (C:\, D:/)
    if DRIVE_PATH_PATTERN.match(text):
        return True

    # Windows UNC path (\\server\share)
    if text.startswith('\\\\'):
        return True

    # Absolute or ./ ../ relative path
    if RELATIVE_PATH_PATTERN.match(text):
        return True

    # Bare name with an extension
    if (EXTENSION_PATTERN.search(text)
            and ' ' not in text
            and len(text) < MAX_PATH_LIKE_LENGTH):
        return True

    return False


def clean_base64(text: str) -> str:
    """Strip all whitespace from base64 text."""
    return WHITESPACE_PATTERN.sub('', text)


def is_valid_base64(text: str, min_length: int = 0) -> bool:
    """
    Structural base64 check: alphabet, optional padding, length multiple of 4.

    Args:
        text: Candidate base64 text (whitespace allowed)
        min_length: Minimum length of the raw text
    """
    if len(text) < min_length:
        return False

    b64 = clean_base64(text)
    if not b64:
        return False
    if len(b64) % 4 != 0:
        return False

    return BASE64_PATTERN.match(b64) is not None


def parse_data_url(data_url: str) -> Optional[Tuple[str, str]]:
    """
    Split a data URL into (mime_type, base64_payload).

    Returns None when the text is not a base64 data URL.
    """
    match = DATA_URL_PATTERN.match(data_url)
    if not match:
        return None
    return match.group(1).strip().lower(), match.group(2)
