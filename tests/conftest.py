"""
Shared test fixtures and utilities for the templatefields test suite.
"""

import pytest

from templatefields.structure import descriptors
from templatefields.templates import TemplateSet


@pytest.fixture
def make_templates():
    """Factory building a TemplateSet from template sources keyed by name.

    Usage:
        def test_something(make_templates):
            templates = make_templates({"page": "{{ title }}"})
    """

    def _make(sources: dict[str, str], **options) -> TemplateSet:
        return TemplateSet.from_mapping(sources, **options)

    return _make


@pytest.fixture
def clean_shape_registry():
    """Restore the explicit shape registry after a test registers classes."""
    saved = dict(descriptors._registered_shapes)
    yield
    descriptors._registered_shapes.clear()
    descriptors._registered_shapes.update(saved)
