"""
API Dependencies - Dependency injection for FastAPI.
"""
from ..config.settings import settings
from ..services.extraction_service import ExtractionService


def get_extraction_service() -> ExtractionService:
    """
    Dependency for the extraction service.

    Returns:
        ExtractionService configured from global settings
    """
    return ExtractionService(settings=settings)
