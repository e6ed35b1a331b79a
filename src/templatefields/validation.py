"""
Entry points for checking a template against its data shape.

``compare_view_model`` returns the missing/extra path lists as data;
``validate_view_model`` turns a non-empty result into a FieldMismatchError.
Neither renders the template.
"""

# Group 1: External direct imports (alphabetical)
import logging
from typing import Any

# Group 2: External from imports (alphabetical by source module)
from jinja2 import Environment

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.comparison.differ import compare_field_trees
from templatefields.config import ValidatorConfig
from templatefields.core.field_tree import FieldTree
from templatefields.exceptions import FieldMismatchError
from templatefields.reporting import ValidationResult
from templatefields.structure.walker import build_data_tree
from templatefields.templates.template_set import TemplateSet
from templatefields.templates.walker import extract_template_fields

logger = logging.getLogger(__name__)


def build_template_tree(
    templates: TemplateSet, template_name: str, root_name: str
) -> FieldTree:
    """
    Build the field tree of everything a named template references.

    Raises:
        TemplateNotFoundError: When ``template_name`` is not in the set
    """
    body = templates.require(template_name)
    root = FieldTree(root_name)
    extract_template_fields(templates, body, root, frozenset({template_name}))
    return root


def compare_view_model(
    data: Any,
    templates: TemplateSet | Environment,
    template_name: str,
    config: ValidatorConfig | None = None,
) -> ValidationResult:
    """
    Compare the fields a template references with the fields data declares.

    Params:
        data: Data value or type meant to populate the template
        templates: Template set, or a Jinja2 environment holding the templates
        template_name: Name of the template to check
        config: Labelling options; defaults apply when omitted

    Returns:
        ValidationResult with missing and extra path labels

    Raises:
        TemplateNotFoundError: When ``template_name`` is not in the set
    """
    config = config or ValidatorConfig()
    if isinstance(templates, Environment):
        templates = TemplateSet(templates)

    data_tree = build_data_tree(data, config.root_name)
    # render data shadows environment globals of the same name
    templates = templates.declaring(data_tree.children)
    template_tree = build_template_tree(templates, template_name, config.root_name)
    missing, extra = compare_field_trees(
        template_tree, data_tree, config.path_separator
    )
    logger.debug(
        "Compared template %r: %d missing, %d extra",
        template_name,
        len(missing),
        len(extra),
    )
    return ValidationResult(missing=missing, extra=extra)


def validate_view_model(
    data: Any,
    templates: TemplateSet | Environment,
    template_name: str,
    config: ValidatorConfig | None = None,
) -> None:
    """
    Check that a template and its data shape reference the same fields.

    Params:
        data: Data value or type meant to populate the template
        templates: Template set, or a Jinja2 environment holding the templates
        template_name: Name of the template to check
        config: Labelling and tolerance options; defaults apply when omitted

    Raises:
        TemplateNotFoundError: When ``template_name`` is not in the set
        FieldMismatchError: When fields are missing or extra
    """
    config = config or ValidatorConfig()
    result = compare_view_model(data, templates, template_name, config).without(
        missing=config.ignore_missing, extra=config.ignore_extra
    )
    if not result.is_valid:
        raise FieldMismatchError(result.missing, result.extra, result.format_message())
