"""Serving package - HTTP tool surface."""
