"""image-extractor - turn files, URLs and base64 blobs into LLM-ready images."""

__version__ = "1.0.0"
