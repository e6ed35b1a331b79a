"""
Field discovery over template node variants.

The walker registers every field path a template references under a scope
node of a FieldTree, following named inclusions into other templates of the
same set.
"""

# Group 1: External direct imports (alphabetical)
import logging

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.core.field_tree import FieldTree
from templatefields.templates.nodes import (
    Action,
    Conditional,
    FieldAccess,
    Inclusion,
    Iteration,
    Pipe,
    ScopeMarker,
    ScopeNarrow,
    Sequence,
    TemplateNode,
)
from templatefields.templates.template_set import TemplateSet

logger = logging.getLogger(__name__)


def extract_template_fields(
    templates: TemplateSet,
    node: TemplateNode,
    scope: FieldTree,
    active: frozenset[str] = frozenset(),
) -> None:
    """
    Register the field paths referenced below ``node`` under ``scope``.

    Conditionals, loops and ``with`` blocks never narrow the scope: a loop
    only contributes the expression it iterates over, and a ``with`` block
    contributes its bound values and its body.

    Params:
        templates: Template set used to resolve inclusions
        node: Node to walk
        scope: Field tree node that field accesses resolve against
        active: Names of the templates currently being walked; an inclusion
            of one of them is not followed again
    """
    if isinstance(node, Pipe):
        register_pipe(node, scope)
    elif isinstance(node, Action):
        register_pipe(node.pipe, scope)
    elif isinstance(node, Inclusion):
        _walk_inclusion(templates, node, scope, active)
    elif isinstance(node, Sequence):
        for child in node.nodes:
            extract_template_fields(templates, child, scope, active)
    elif isinstance(node, Conditional):
        extract_template_fields(templates, node.body, scope, active)
        if node.else_body is not None:
            extract_template_fields(templates, node.else_body, scope, active)
    elif isinstance(node, Iteration):
        extract_template_fields(templates, node.pipe, scope, active)
    elif isinstance(node, ScopeNarrow):
        extract_template_fields(templates, node.pipe, scope, active)
        extract_template_fields(templates, node.body, scope, active)


def register_pipe(pipe: Pipe, scope: FieldTree) -> None:
    """Register each field-access argument of ``pipe`` under ``scope``."""
    for arg in pipe.args:
        if isinstance(arg, FieldAccess):
            scope.add_path(arg.idents)


def _walk_inclusion(
    templates: TemplateSet,
    node: Inclusion,
    scope: FieldTree,
    active: frozenset[str],
) -> None:
    if isinstance(node.arg, FieldAccess):
        target = scope.add_path(node.arg.idents)
    elif node.arg is None or isinstance(node.arg, ScopeMarker):
        target = scope
    else:
        return

    if node.name in active:
        logger.debug("Not re-entering template %r from itself", node.name)
        return

    body = templates.lookup(node.name)
    if body is None:
        logger.debug("Skipping inclusion of unknown template %r", node.name)
        return
    extract_template_fields(templates, body, target, active | {node.name})
