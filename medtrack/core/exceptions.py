"""
Domain exceptions surfaced to callers and mapped to HTTP responses in main.py
"""
from typing import Dict


class FormValidationError(Exception):
    """A submitted form failed validation. Carries one message per field."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"Validation failed for: {', '.join(sorted(self.errors))}")


class EmptyExportError(ValueError):
    """Raised when asked to export a collection with no records."""

    def __init__(self, message: str = "No data to export"):
        super().__init__(message)
