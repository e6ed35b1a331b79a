"""
Exception classes for templatefields.

This module defines the error types raised while comparing a template against
the data shape meant to populate it. Configuration problems (asking for a
template that does not exist) and validation mismatches are kept apart so
callers can tell them from each other.
"""


class TemplateFieldsError(Exception):
    """Base exception for all templatefields errors."""

    pass


class TemplateNotFoundError(TemplateFieldsError):
    """Raised when the template to validate is not part of the template set."""

    def __init__(self, template_name: str):
        """
        Initialize the exception.

        Params:
            template_name: Name that failed to resolve in the template set
        """
        self.template_name = template_name
        super().__init__(f"template {template_name!r} not found")


class FieldMismatchError(TemplateFieldsError):
    """Raised when template field references and data fields disagree."""

    def __init__(self, missing: list[str], extra: list[str], message: str):
        """
        Initialize the exception.

        Params:
            missing: Paths the template references that the data lacks
            extra: Paths the data declares that the template never uses
            message: Formatted report of both lists
        """
        self.missing = list(missing)
        self.extra = list(extra)
        super().__init__(message)


class ShapeRegistrationError(TemplateFieldsError):
    """Raised when an explicit field descriptor registration is invalid."""

    def __init__(self, type_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            type_name: Name of the type being registered
            reason: Why the registration was rejected
        """
        self.type_name = type_name
        self.reason = reason
        super().__init__(f"Cannot register shape for '{type_name}': {reason}")
