"""
Byte acquisition for content references.

Reads local files, downloads URLs with a bounded-size streaming GET, and
decodes inline base64 / data URLs. Every path enforces the payload ceiling.
"""
import base64
import binascii
import logging
import os
from typing import List, Optional
from urllib.parse import urlparse

import httpx

from ..core.constants import DEFAULT_INLINE_MIME_TYPE
from ..core.errors import (
    DomainRejectedError,
    ExtractionError,
    InvalidEncodingError,
    InvalidReferenceError,
    NotFoundError,
    SizeExceededError
)
from ..core.models import FetchedPayload
from ..utils.content_utils import get_extension
from ..utils.source_utils import clean_base64, is_valid_base64, parse_data_url

logger = logging.getLogger(__name__)


def read_file(file_path: str, max_size: int, what: str = "File") -> FetchedPayload:
    """
    Read a local file.

    Args:
        file_path: Path to the file
        max_size: Maximum allowed size in bytes
        what: Noun used in the size error message

    Raises:
        NotFoundError: If the path is not an existing file
        SizeExceededError: If the file is larger than max_size
    """
    if not os.path.isfile(file_path):
        raise NotFoundError(file_path)

    if os.path.getsize(file_path) > max_size:
        raise SizeExceededError(max_size, what)

    with open(file_path, 'rb') as f:
        data = f.read()

    return FetchedPayload(
        data=data,
        reference=file_path,
        extension=get_extension(file_path)
    )


def validate_url(url: str, allowed_domains: List[str]) -> str:
    """
    Check scheme and domain allow-list.

    A host is allowed if it equals an allowed domain or is a subdomain of one.

    Returns:
        The URL host

    Raises:
        InvalidReferenceError: If the scheme is not http/https
        DomainRejectedError: If the host is not on a non-empty allow-list
    """
    if not (url.startswith('http://') or url.startswith('https://')):
        raise InvalidReferenceError("URL must start with http:// or https://")

    domain = (urlparse(url).hostname or '').lower()
    if not domain:
        raise InvalidReferenceError(f"URL has no host: {url}")

    if allowed_domains and not any(
        domain == allowed or domain.endswith(f".{allowed}")
        for allowed in allowed_domains
    ):
        raise DomainRejectedError(domain)

    return domain


async def fetch_url(
    url: str,
    max_size: int,
    allowed_domains: Optional[List[str]] = None,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    what: str = "Content"
) -> FetchedPayload:
    """
    Download a URL, refusing bodies larger than max_size.

    Redirects are followed, but every hop is checked against the scheme rule
    and the allow-list before it is requested.

    Args:
        url: HTTP(S) URL
        max_size: Maximum allowed size in bytes
        allowed_domains: Host allow-list (empty = unrestricted)
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests use httpx.MockTransport)
        what: Noun used in the size error message

    Returns:
        FetchedPayload with the response Content-Type as declared MIME type
    """
    allowed_domains = allowed_domains or []
    validate_url(url, allowed_domains)

    async def check_hop(request: httpx.Request):
        # Redirect targets must pass the same allow-list as the first URL
        validate_url(str(request.url), allowed_domains)

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        transport=transport,
        event_hooks={'request': [check_hop]}
    ) as client:
        try:
            async with client.stream("GET", url) as response:
                response.raise_for_status()

                declared_length = response.headers.get('content-length')
                if declared_length and declared_length.isdigit() and int(declared_length) > max_size:
                    raise SizeExceededError(max_size, what)

                chunks = []
                received = 0
                async for chunk in response.aiter_bytes():
                    received += len(chunk)
                    if received > max_size:
                        raise SizeExceededError(max_size, what)
                    chunks.append(chunk)

                content_type = response.headers.get('content-type', '')
        except httpx.HTTPStatusError as e:
            raise ExtractionError(
                f"Request to {url} failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise ExtractionError(f"Could not fetch {url}: {e}") from e

    mime_type = content_type.split(';', 1)[0].strip().lower() or None
    logger.debug("Fetched %d bytes from %s (%s)", received, url, mime_type)

    return FetchedPayload(
        data=b''.join(chunks),
        reference=url,
        declared_mime_type=mime_type,
        extension=get_extension(url)
    )


def decode_inline(
    reference: str,
    max_size: int,
    mime_type_hint: Optional[str] = None,
    what: str = "Content"
) -> FetchedPayload:
    """
    Decode raw base64 or a base64 data URL.

    Args:
        reference: Raw base64 text or 'data:<mime>;base64,<payload>'
        max_size: Maximum allowed decoded size in bytes
        mime_type_hint: MIME type for raw base64 (data URLs carry their own)

    Raises:
        InvalidReferenceError: If a data URL is malformed
        InvalidEncodingError: If the base64 is invalid or decodes to nothing
        SizeExceededError: If the decoded bytes exceed max_size
    """
    mime_type = mime_type_hint or DEFAULT_INLINE_MIME_TYPE

    if reference.startswith('data:'):
        parsed = parse_data_url(reference)
        if parsed is None:
            raise InvalidReferenceError("Invalid data URL format")
        mime_type, payload = parsed
    else:
        payload = reference

    if not is_valid_base64(payload):
        raise InvalidEncodingError("Invalid base64 string")

    try:
        data = base64.b64decode(clean_base64(payload), validate=True)
    except binascii.Error as e:
        raise InvalidEncodingError(f"Invalid base64 string - {e}") from e

    if not data:
        raise InvalidEncodingError("Invalid base64 string - decoded to empty buffer")

    if len(data) > max_size:
        raise SizeExceededError(max_size, what)

    return FetchedPayload(
        data=data,
        reference='<inline>',
        declared_mime_type=mime_type
    )
