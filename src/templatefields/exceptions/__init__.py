"""
templatefields exception classes.

This package provides all exception types used throughout templatefields for
consistent error handling and reporting.
"""

from templatefields.exceptions.core import (
    FieldMismatchError,
    ShapeRegistrationError,
    TemplateFieldsError,
    TemplateNotFoundError,
)

__all__ = [
    "TemplateFieldsError",
    "TemplateNotFoundError",
    "FieldMismatchError",
    "ShapeRegistrationError",
]
