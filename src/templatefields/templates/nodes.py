"""
Template syntax node variants.

This module defines the closed set of node kinds the template walker
understands. Template engine trees are translated into these variants by
``templatefields.templates.adapter`` so the walker never depends on engine
internals.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateNode(ABC):
    """
    Base class for all template node variants.

    Params:
        lineno: Source line the node came from (None when synthesized)
    """

    lineno: int | None = None


@dataclass(frozen=True)
class FieldAccess(TemplateNode):
    """
    Chain of identifiers resolved against the current scope.

    ``{{ address.city }}`` becomes ``FieldAccess(idents=("address", "city"))``.

    Params:
        idents: Identifier chain in access order
    """

    idents: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScopeMarker(TemplateNode):
    """The current scope itself (the bare ``.`` argument of an inclusion)."""


@dataclass(frozen=True)
class Other(TemplateNode):
    """
    Any construct without field-access semantics.

    Params:
        kind: Name of the source construct, kept for debugging
    """

    kind: str = ""


@dataclass(frozen=True)
class Pipe(TemplateNode):
    """
    Expression whose arguments may reference fields.

    Params:
        args: Argument nodes (FieldAccess, ScopeMarker or Other)
    """

    args: tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class Action(TemplateNode):
    """
    Evaluated output expression, e.g. ``{{ user.name | upper }}``.

    Params:
        pipe: Expression being printed
    """

    pipe: Pipe = Pipe()


@dataclass(frozen=True)
class Sequence(TemplateNode):
    """
    Ordered list of sibling nodes sharing one scope.

    Params:
        nodes: Child nodes in source order
    """

    nodes: tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class Inclusion(TemplateNode):
    """
    Inclusion of another named template.

    Params:
        name: Name of the included template
        arg: Scope handed to the included template; None when no argument
            was given (the caller's scope is inherited)
    """

    name: str = ""
    arg: TemplateNode | None = None


@dataclass(frozen=True)
class Conditional(TemplateNode):
    """
    ``if``/``else`` block. ``elif`` chains nest in ``else_body``.

    Params:
        test: Condition expression
        body: Branch taken when the condition holds
        else_body: Alternative branch, None when absent
    """

    test: Pipe = Pipe()
    body: Sequence = Sequence()
    else_body: Sequence | None = None


@dataclass(frozen=True)
class Iteration(TemplateNode):
    """
    Loop over a collection.

    Params:
        pipe: Expression selecting the collection
        body: Loop body
        else_body: Body rendered for an empty collection, None when absent
    """

    pipe: Pipe = Pipe()
    body: Sequence = Sequence()
    else_body: Sequence | None = None


@dataclass(frozen=True)
class ScopeNarrow(TemplateNode):
    """
    ``with`` block.

    Params:
        pipe: Values bound by the block
        body: Block body
    """

    pipe: Pipe = Pipe()
    body: Sequence = Sequence()
