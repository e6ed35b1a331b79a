"""
templatefields comparison components.

This package compares template and data field trees.
"""

from templatefields.comparison.differ import PATH_SEPARATOR, compare_field_trees

__all__ = [
    "PATH_SEPARATOR",
    "compare_field_trees",
]
