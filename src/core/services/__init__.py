"""Service layer implementing business logic.

Services connect ports (interfaces) with the pure calculators, providing
high-level operations to the host application.
"""

from src.core.services.progression_service import ProgressionService

__all__ = ["ProgressionService"]
