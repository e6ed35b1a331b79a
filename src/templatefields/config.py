"""
Configuration for template/data field validation.
"""

from dataclasses import dataclass

from templatefields.comparison.differ import PATH_SEPARATOR
from templatefields.core.field_tree import ROOT_NAME


@dataclass
class ValidatorConfig:
    """Configuration for comparing a template with its data shape."""

    root_name: str = ROOT_NAME  # Name of both root nodes, first label segment
    path_separator: str = PATH_SEPARATOR
    ignore_extra: bool = False  # Validation tolerates unused data fields
    ignore_missing: bool = False  # Validation tolerates undeclared template fields

    @classmethod
    def from_dict(cls, config: dict | None = None) -> "ValidatorConfig":
        """Factory method to create config from dict with defaults."""
        if config is None:
            config = {}
        return cls(**config)
