"""
Core FieldTree node for the templatefields package.

This module contains the recursive named-node structure used to describe both
the field paths a template references and the field paths a data shape
declares. Both sides are built with the same node type so they can be walked
in lockstep by name.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

ROOT_NAME = "Root"


@dataclass
class FieldTree:
    """
    Named node in a field tree.

    The root node carries a sentinel name (``"Root"`` by default) that is not a
    real field. Children are keyed by identifier, so a name can only appear
    once below any given node.

    Params:
        name: Identifier this node represents
        children: Mapping from child identifier to child node
    """

    name: str = ROOT_NAME
    children: dict[str, "FieldTree"] = field(default_factory=dict)

    def add_child(self, name: str) -> "FieldTree":
        """
        Get or create the child node called ``name``.

        Re-adding an existing name returns the node already stored, so the same
        path referenced several times is registered once.

        Params:
            name: Child identifier

        Returns:
            The existing or newly created child node
        """
        child = self.children.get(name)
        if child is None:
            child = FieldTree(name)
            self.children[name] = child
        return child

    def add_path(self, parts: Iterable[str]) -> "FieldTree":
        """
        Register a dotted path below this node, one child per segment.

        Params:
            parts: Path segments in access order (e.g. ``("address", "city")``)

        Returns:
            The node for the last segment, or this node for an empty path
        """
        current = self
        for part in parts:
            current = current.add_child(part)
        return current

    def child(self, name: str) -> "FieldTree | None":
        """Return the child called ``name`` without creating it."""
        return self.children.get(name)

    def iter_paths(self, prefix: tuple[str, ...] = ()) -> Iterator[str]:
        """
        Yield every path below this node as a dotted string.

        Interior nodes are yielded before their descendants, e.g. ``address``
        then ``address.city``. The node's own name is not part of the paths.
        """
        for name, child in self.children.items():
            path = (*prefix, name)
            yield ".".join(path)
            yield from child.iter_paths(path)

    def __contains__(self, name: object) -> bool:
        return name in self.children
