"""
Core templatefields components.

This package provides the field tree shared by the template side and the data
side of a comparison.
"""

from templatefields.core.field_tree import ROOT_NAME, FieldTree

__all__ = [
    "FieldTree",
    "ROOT_NAME",
]
