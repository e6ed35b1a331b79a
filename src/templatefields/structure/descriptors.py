"""
Field descriptors for data shapes.

This module describes record types as ordered lists of field descriptors.
Descriptors are derived from pydantic models and dataclasses, or registered
explicitly for any other class. Visibility is part of each descriptor, so
fields that are not part of a type's public contract can be left out of
template comparisons.
"""

# Group 1: External direct imports (alphabetical)
import dataclasses
import types
import typing

# Group 2: External from imports (alphabetical by source module)
from collections.abc import Iterable
from typing import Annotated, Any, Union, get_args, get_origin

from attrs import field, frozen
from pydantic import BaseModel

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.exceptions import ShapeRegistrationError

HIDDEN_PREFIX = "_"


@frozen
class FieldDescriptor:
    """
    One declared field of a record type.

    Params:
        name: Attribute name templates use to reach the field
        annotation: Declared type of the field (None when unknown)
        visible: Whether the field is part of the type's public contract
    """

    name: str
    annotation: Any = None
    visible: bool = True


@frozen
class ShapeDescriptor:
    """
    Ordered field list of a record type.

    Params:
        type_name: Name of the described type, for messages
        fields: Field descriptors in declaration order
    """

    type_name: str
    fields: tuple[FieldDescriptor, ...] = field(converter=tuple, default=())

    @property
    def visible_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.visible)


_registered_shapes: dict[type, ShapeDescriptor] = {}


def register_shape(
    cls: type, fields: Iterable[FieldDescriptor | str]
) -> ShapeDescriptor:
    """
    Register an explicit field list for a class.

    Registered descriptors take precedence over pydantic and dataclass
    derivation, and apply to subclasses that have no registration of their
    own.

    Params:
        cls: Class being described
        fields: Field descriptors, or bare names for visible untyped fields

    Returns:
        The stored shape descriptor

    Raises:
        ShapeRegistrationError: When ``cls`` is not a class or names repeat
    """
    if not isinstance(cls, type):
        raise ShapeRegistrationError(repr(cls), "only classes can be registered")

    descriptors = tuple(
        f if isinstance(f, FieldDescriptor) else FieldDescriptor(name=f)
        for f in fields
    )
    seen: set[str] = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise ShapeRegistrationError(
                cls.__name__, f"field '{descriptor.name}' is declared twice"
            )
        seen.add(descriptor.name)

    shape = ShapeDescriptor(type_name=cls.__name__, fields=descriptors)
    _registered_shapes[cls] = shape
    return shape


def unregister_shape(cls: type) -> None:
    """Remove an explicit registration; unknown classes are ignored."""
    _registered_shapes.pop(cls, None)


def unwrap_indirection(tp: Any) -> Any:
    """
    Strip optional and annotation wrappers from a type.

    ``Optional[Address]``, ``Address | None`` and
    ``Annotated[Address, ...]`` all unwrap to ``Address``. Unions of several
    real types are returned unchanged.
    """
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
            continue
        if origin is Union or origin is types.UnionType:
            members = [arg for arg in get_args(tp) if arg is not type(None)]
            if len(members) == 1:
                tp = members[0]
                continue
        return tp


def describe_shape(tp: Any) -> ShapeDescriptor | None:
    """
    Describe a record type as an ordered field list.

    Params:
        tp: Type to describe; optional and annotation wrappers are removed

    Returns:
        Shape descriptor, or None when the type is not a record (scalars,
        collections, mappings and unresolved forward references)
    """
    tp = unwrap_indirection(tp)
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return None

    for klass in tp.__mro__:
        if klass in _registered_shapes:
            return _registered_shapes[klass]

    if issubclass(tp, BaseModel):
        return _describe_model(tp)
    if dataclasses.is_dataclass(tp):
        return _describe_dataclass(tp)
    return None


def is_hidden_name(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def _describe_model(model: type[BaseModel]) -> ShapeDescriptor:
    # Private attributes are kept out of model_fields by pydantic itself
    descriptors = tuple(
        FieldDescriptor(
            name=name,
            annotation=info.annotation,
            visible=not is_hidden_name(name) and info.exclude is not True,
        )
        for name, info in model.model_fields.items()
    )
    return ShapeDescriptor(type_name=model.__name__, fields=descriptors)


def _describe_dataclass(cls: type) -> ShapeDescriptor:
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except NameError:
        # Unresolvable forward references; fall back to the raw annotations
        hints = {}
    descriptors = tuple(
        FieldDescriptor(
            name=f.name,
            annotation=hints.get(f.name, f.type),
            visible=not is_hidden_name(f.name),
        )
        for f in dataclasses.fields(cls)
    )
    return ShapeDescriptor(type_name=cls.__name__, fields=descriptors)
