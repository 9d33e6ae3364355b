"""Application services."""

from proxygen.services.generation_service import GenerationService

__all__ = ["GenerationService"]
