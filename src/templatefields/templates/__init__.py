"""
templatefields template processing components.

This package turns Jinja2 templates into template node variants and walks
them to discover the field paths they reference.
"""

from templatefields.templates.adapter import TemplateAdapter, adapt_template, bound_names
from templatefields.templates.extension import (
    TemplateInclusionExtension,
    scope_to_mapping,
)
from templatefields.templates.nodes import (
    Action,
    Conditional,
    FieldAccess,
    Inclusion,
    Iteration,
    Other,
    Pipe,
    ScopeMarker,
    ScopeNarrow,
    Sequence,
    TemplateNode,
)
from templatefields.templates.template_set import TemplateSet, create_environment
from templatefields.templates.walker import extract_template_fields, register_pipe

__all__ = [
    "Action",
    "Conditional",
    "FieldAccess",
    "Inclusion",
    "Iteration",
    "Other",
    "Pipe",
    "ScopeMarker",
    "ScopeNarrow",
    "Sequence",
    "TemplateNode",
    "TemplateAdapter",
    "adapt_template",
    "bound_names",
    "TemplateInclusionExtension",
    "scope_to_mapping",
    "TemplateSet",
    "create_environment",
    "extract_template_fields",
    "register_pipe",
]
