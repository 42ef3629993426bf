"""All Pydantic models for Miniloader.

- loader.py: realised loader records and their payload models
- validation.py: validation issues and results
"""

from .loader import (
    EnergySource,
    Ingredient,
    LoaderRecord,
    ResearchTrigger,
    SpeedConfig,
    Tint,
    records_from_yaml,
    records_to_yaml,
)
from .validation import (
    Severity,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Loader
    "EnergySource",
    "Ingredient",
    "LoaderRecord",
    "ResearchTrigger",
    "SpeedConfig",
    "Tint",
    "records_from_yaml",
    "records_to_yaml",
    # Validation
    "Severity",
    "ValidationIssue",
    "ValidationResult",
]
