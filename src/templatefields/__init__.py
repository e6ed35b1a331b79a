"""
templatefields - static cross-check of Jinja2 templates against their data shapes

templatefields walks a template's syntax tree and a data type's declared fields
and reports the fields the template needs but the data lacks, and the fields
the data offers but the template never uses.
"""

from importlib.metadata import version

from templatefields.config import ValidatorConfig
from templatefields.core.field_tree import FieldTree
from templatefields.exceptions import (
    FieldMismatchError,
    ShapeRegistrationError,
    TemplateFieldsError,
    TemplateNotFoundError,
)
from templatefields.reporting import ValidationResult
from templatefields.structure import FieldDescriptor, register_shape
from templatefields.templates import (
    TemplateInclusionExtension,
    TemplateSet,
    create_environment,
)
from templatefields.validation import compare_view_model, validate_view_model

__version__ = version("templatefields")

__all__ = [
    "__version__",
    "compare_view_model",
    "validate_view_model",
    "ValidationResult",
    "ValidatorConfig",
    "TemplateSet",
    "create_environment",
    "TemplateInclusionExtension",
    "FieldTree",
    "FieldDescriptor",
    "register_shape",
    "TemplateFieldsError",
    "TemplateNotFoundError",
    "FieldMismatchError",
    "ShapeRegistrationError",
]
