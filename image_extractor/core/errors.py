"""
Error taxonomy for the extraction pipeline.

Every error here is terminal for a single request. The service layer converts
them into an error ResultArtifact; nothing is raised past that boundary.
"""


class ExtractionError(Exception):
    """Base class for expected pipeline failures."""

    kind = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ExtractionError):
    """Referenced file does not exist."""

    kind = "not_found"

    def __init__(self, path: str):
        super().__init__(f"File {path} does not exist")
        self.path = path


class SizeExceededError(ExtractionError):
    """Payload is larger than the configured ceiling."""

    kind = "size_exceeded"

    def __init__(self, max_size: int, what: str = "Content"):
        super().__init__(f"{what} size exceeds maximum allowed size of {max_size} bytes")
        self.max_size = max_size


class InvalidEncodingError(ExtractionError):
    kind = "invalid_encoding"


class InvalidReferenceError(ExtractionError):
    kind = "invalid_reference"


class DomainRejectedError(ExtractionError):
    kind = "domain_rejected"

    def __init__(self, domain: str):
        super().__init__(f"Domain {domain} is not in the allowed domains list")
        self.domain = domain


class PageOutOfRangeError(ExtractionError):
    kind = "page_out_of_range"

    def __init__(self, page: int, total_pages: int):
        super().__init__(
            f"Page {page} is out of range. Document has {total_pages} page(s)."
        )
        self.page = page
        self.total_pages = total_pages


class RenderFailureError(ExtractionError):
    kind = "render_failure"


class DecodeFailureError(ExtractionError):
    kind = "decode_failure"
