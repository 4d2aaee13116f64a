"""API package - Request schemas and FastAPI dependencies."""
