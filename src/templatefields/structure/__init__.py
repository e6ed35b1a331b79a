"""
templatefields data shape components.

This package describes data types as field descriptor lists and walks them
into field trees.
"""

from templatefields.structure.descriptors import (
    FieldDescriptor,
    ShapeDescriptor,
    describe_shape,
    register_shape,
    unregister_shape,
    unwrap_indirection,
)
from templatefields.structure.walker import (
    build_data_tree,
    extract_data_fields,
    shape_of,
)

__all__ = [
    "FieldDescriptor",
    "ShapeDescriptor",
    "describe_shape",
    "register_shape",
    "unregister_shape",
    "unwrap_indirection",
    "build_data_tree",
    "extract_data_fields",
    "shape_of",
]
