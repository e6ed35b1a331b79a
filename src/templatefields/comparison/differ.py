"""
Hierarchical comparison of two field trees.

The template tree and the data tree are walked in lockstep by name. Labels
name the side where the difference shows up: a missing field is reported
under the data node that lacks it, an extra field under the template node
that never references it.
"""

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.core.field_tree import FieldTree

PATH_SEPARATOR = "->"


def compare_field_trees(
    template_field: FieldTree,
    data_field: FieldTree,
    separator: str = PATH_SEPARATOR,
) -> tuple[list[str], list[str]]:
    """
    Compare a template scope node with the matching data scope node.

    Params:
        template_field: Node built from the template
        data_field: Node built from the data shape for the same scope
        separator: Text placed between a parent name and a child name

    Returns:
        ``(missing, extra)`` path labels, e.g. ``["Address->Zip"]`` and
        ``["Root->Phone"]``
    """
    missing: list[str] = []
    extra: list[str] = []

    for name, template_child in template_field.children.items():
        data_child = data_field.children.get(name)
        if data_child is None:
            missing.append(f"{data_field.name}{separator}{name}")
            continue
        child_missing, child_extra = compare_field_trees(
            template_child, data_child, separator
        )
        missing.extend(child_missing)
        extra.extend(child_extra)

    for name in data_field.children:
        if name not in template_field.children:
            extra.append(f"{template_field.name}{separator}{name}")

    return missing, extra
