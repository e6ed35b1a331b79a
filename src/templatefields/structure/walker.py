"""
Field discovery over data shapes.

Builds the data side of a comparison: one FieldTree child per visible field
of the data's record type, recursing into fields that are records
themselves.
"""

# Group 1: External direct imports (alphabetical)
import logging
from typing import Any, get_origin

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.core.field_tree import ROOT_NAME, FieldTree
from templatefields.structure.descriptors import describe_shape, unwrap_indirection

logger = logging.getLogger(__name__)


def shape_of(data: Any) -> Any:
    """
    Return the declared shape of a data value.

    Classes and typing constructs (``Optional[Model]``) are shapes already;
    any other value is described by its type.
    """
    if isinstance(data, type) or get_origin(data) is not None:
        return data
    return type(data)


def build_data_tree(data: Any, root_name: str = ROOT_NAME) -> FieldTree:
    """
    Build the field tree of everything ``data`` publicly declares.

    Params:
        data: Data value or type (pydantic model, dataclass, registered class)
        root_name: Name of the returned root node

    Returns:
        Root node whose descendants mirror the visible fields
    """
    root = FieldTree(root_name)
    extract_data_fields(shape_of(data), root)
    return root


def extract_data_fields(
    tp: Any, scope: FieldTree, expanding: frozenset[type] = frozenset()
) -> None:
    """
    Add one child to ``scope`` per visible field of ``tp``.

    Non-record types add nothing. A record type that is already being
    expanded further up the same path is not expanded again, so
    self-referencing models stay finite.

    Params:
        tp: Shape to walk
        scope: Node receiving the fields
        expanding: Record types on the current path
    """
    tp = unwrap_indirection(tp)
    shape = describe_shape(tp)
    if shape is None:
        return
    if tp in expanding:
        logger.debug("Not expanding %s again below itself", shape.type_name)
        return

    for descriptor in shape.visible_fields:
        child = scope.add_child(descriptor.name)
        if describe_shape(descriptor.annotation) is not None:
            extract_data_fields(descriptor.annotation, child, expanding | {tp})
