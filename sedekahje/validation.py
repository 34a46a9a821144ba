"""Turning validation failures into API error bodies."""

from __future__ import annotations

from typing import Any

from .models import InstitutionValidationError


def format_validation_errors(error: InstitutionValidationError) -> dict[str, Any]:
    """Build the JSON body reported for a failed validation."""
    if not isinstance(error, InstitutionValidationError):
        raise TypeError(f"expected InstitutionValidationError, got {type(error).__name__}")
    return {
        "status": "error",
        "errors": {
            e.field: f"Field '{e.field}' validation failed: {e.tag}" for e in error.errors
        },
    }