"""
End-to-end tests for comparing templates with their data shapes.

Focus Areas:
1. Exact matches, missing fields and extra fields
2. Scope handling across inclusions
3. Fatal lookup of the validated template
4. Validation errors, their message and tolerance options
"""

from dataclasses import dataclass
from typing import Optional

import pytest
from jinja2 import Environment
from pydantic import BaseModel, Field, PrivateAttr

from templatefields import (
    FieldMismatchError,
    TemplateNotFoundError,
    ValidationResult,
    ValidatorConfig,
    compare_view_model,
    create_environment,
    validate_view_model,
)


class Address(BaseModel):
    City: str


class Person(BaseModel):
    Name: str
    Address: Address


class Inner(BaseModel):
    Field: str


class Outer(BaseModel):
    Inner: Inner


class Flat(BaseModel):
    Field: str


class PairXY(BaseModel):
    X: str
    Y: str


class Profile(BaseModel):
    username: str
    password_hash: str = Field(exclude=True)
    _token: str = PrivateAttr(default="")


@dataclass
class TreeItem:
    label: str
    child: Optional["TreeItem"] = None


class Page(BaseModel):
    title: str
    body: str


class Ranged(BaseModel):
    range: str


PERSON_PAGE = "{{ Name }} lives in {{ Address.City }}"


class TestCompareViewModel:
    """Test the raw missing/extra result."""

    def test_exact_match(self, make_templates):
        """Templates referencing exactly the declared paths produce no findings."""
        templates = make_templates({"person": PERSON_PAGE})
        assert compare_view_model(Person, templates, "person") == ValidationResult()

    def test_result_unpacks_as_pair(self, make_templates):
        templates = make_templates({"person": PERSON_PAGE})
        missing, extra = compare_view_model(Person, templates, "person")
        assert (missing, extra) == ([], [])

    def test_instance_data(self, make_templates):
        """A populated instance is checked against its declared shape."""
        templates = make_templates({"person": PERSON_PAGE})
        person = Person(Name="Ada", Address=Address(City="London"))

        assert compare_view_model(person, templates, "person").is_valid

    def test_unused_nested_record_is_extra(self, make_templates):
        templates = make_templates({"person": "{{ Name }}"})
        missing, extra = compare_view_model(Person, templates, "person")

        assert missing == []
        assert extra == ["Root->Address"]

    def test_undeclared_nested_field_is_missing(self, make_templates):
        templates = make_templates(
            {"person": "{{ Name }} {{ Address.City }} {{ Address.Zip }}"}
        )
        missing, extra = compare_view_model(Person, templates, "person")

        assert missing == ["Address->Zip"]
        assert extra == []

    def test_field_below_scalar_is_missing(self, make_templates):
        """Referencing a child of a scalar field reports the child as missing."""
        templates = make_templates({"page": "{{ Field.Sub }}"})
        missing, extra = compare_view_model(Flat, templates, "page")

        assert missing == ["Field->Sub"]
        assert extra == []

    def test_extra_sibling(self, make_templates):
        templates = make_templates({"page": "{{ X }}"})
        missing, extra = compare_view_model(PairXY, templates, "page")

        assert missing == []
        assert extra == ["Root->Y"]

    def test_hidden_fields_are_never_extra(self, make_templates):
        """Excluded and private fields are not part of the compared shape."""
        templates = make_templates({"page": "{{ username }}"})
        assert compare_view_model(Profile, templates, "page").is_valid

    def test_dataclass_data(self, make_templates):
        templates = make_templates(
            {"tree": '{{ label }}{% if child %}{% template "tree" child %}{% endif %}'}
        )
        assert compare_view_model(TreeItem, templates, "tree").is_valid

    def test_bare_environment_is_accepted(self):
        env = create_environment({"person": PERSON_PAGE})
        assert compare_view_model(Person, env, "person").is_valid

    def test_plain_jinja_environment(self):
        """Environments without the template tag still support include."""
        from jinja2 import DictLoader

        env = Environment(
            loader=DictLoader({"main": '{% include "part" %}', "part": "{{ X }}{{ Y }}"})
        )
        assert compare_view_model(PairXY, env, "main").is_valid

    def test_custom_root_name(self, make_templates):
        templates = make_templates({"person": "{{ Name }}"})
        config = ValidatorConfig(root_name="Model")

        _, extra = compare_view_model(Person, templates, "person", config)

        assert extra == ["Model->Address"]


class TestInclusionScopes:
    """Test scope narrowing through the template tag."""

    def test_field_argument_narrows_scope(self, make_templates):
        templates = make_templates(
            {"main": '{% template "sub" Inner %}', "sub": "{{ Field }}"}
        )
        assert compare_view_model(Outer, templates, "main").is_valid

    def test_narrowed_fields_are_not_at_root(self, make_templates):
        """Fields of a narrowed inclusion do not satisfy root-level fields."""
        templates = make_templates(
            {"main": '{% template "sub" Inner %}', "sub": "{{ Field }}"}
        )
        missing, extra = compare_view_model(Flat, templates, "main")

        assert missing == ["Root->Inner"]
        assert extra == ["Root->Field"]

    @pytest.mark.parametrize(
        "main",
        ['{% template "sub" . %}', '{% template "sub" %}', '{% include "sub" %}'],
    )
    def test_scope_preserving_inclusions(self, make_templates, main):
        templates = make_templates({"main": main, "sub": "{{ Field }}"})
        assert compare_view_model(Flat, templates, "main").is_valid

    def test_unknown_nested_inclusion_is_not_an_error(self, make_templates):
        templates = make_templates({"main": '{{ Field }}{% include "missing" %}'})
        assert compare_view_model(Flat, templates, "main").is_valid


class TestTemplateBindings:
    """Test names the template defines for itself."""

    def test_set_variable_is_not_a_field(self, make_templates):
        """The assigned value is a field reference, the variable is not."""
        templates = make_templates({"page": "{% set greeting = Name %}{{ greeting }}"})
        missing, extra = compare_view_model(Person, templates, "page")

        assert missing == []
        assert extra == ["Root->Address"]

    def test_set_block_body_is_walked(self, make_templates):
        templates = make_templates(
            {"page": "{% set label %}{{ X }}{% endset %}{{ label }}{{ Y }}"}
        )
        assert compare_view_model(PairXY, templates, "page").is_valid

    def test_macro_name_is_not_a_field(self, make_templates):
        templates = make_templates(
            {
                "page": "{% macro show(n) %}{{ n }}{% endmacro %}"
                "{{ show(X) }}{{ show(Y) }}"
            }
        )
        assert compare_view_model(PairXY, templates, "page").is_valid

    def test_import_alias_is_not_a_field(self, make_templates):
        templates = make_templates(
            {
                "page": '{% import "macros" as m %}{{ m.show(X) }}{{ m.show(Y) }}',
                "macros": "{% macro show(n) %}{{ n }}{% endmacro %}",
            }
        )
        assert compare_view_model(PairXY, templates, "page").is_valid

    def test_from_import_names_are_not_fields(self, make_templates):
        templates = make_templates(
            {
                "page": '{% from "macros" import show, show as s %}'
                "{{ show(X) }}{{ s(Y) }}",
                "macros": "{% macro show(n) %}{{ n }}{% endmacro %}",
            }
        )
        assert compare_view_model(PairXY, templates, "page").is_valid

    def test_with_target_is_not_a_field(self, make_templates):
        """A with block contributes its bound values, not the names it binds."""
        templates = make_templates(
            {"page": "{% with place = Address %}{{ Name }}{{ place.City }}{% endwith %}"}
        )
        missing, extra = compare_view_model(Person, templates, "page")

        assert missing == []
        assert extra == ["Address->City"]

    def test_data_field_named_like_a_global(self, make_templates):
        """Data fields shadow environment globals of the same name."""
        templates = make_templates({"page": "{{ range }}"})
        assert compare_view_model(Ranged, templates, "page").is_valid

    def test_globals_are_not_fields_when_undeclared(self, make_templates):
        templates = make_templates(
            {"page": "{% for i in range(3) %}{% endfor %}{{ X }}{{ Y }}"}
        )
        assert compare_view_model(PairXY, templates, "page").is_valid


class TestLayouts:
    """Test template inheritance and context-free includes."""

    def test_extended_layout_fields_are_used(self, make_templates):
        templates = make_templates(
            {
                "base": "<title>{{ title }}</title>{% block content %}{% endblock %}",
                "page": '{% extends "base" %}{% block content %}{{ body }}{% endblock %}',
            }
        )
        assert compare_view_model(Page, templates, "page").is_valid

    def test_include_without_context_is_not_followed(self, make_templates):
        """The included template cannot see the caller's data."""
        templates = make_templates(
            {
                "page": '{{ title }}{% include "footer" without context %}',
                "footer": "{{ body }}",
            }
        )
        missing, extra = compare_view_model(Page, templates, "page")

        assert missing == []
        assert extra == ["Root->body"]


class TestTemplateLookup:
    """Test the fatal lookup of the validated template."""

    def test_unknown_template_raises(self, make_templates):
        templates = make_templates({"person": PERSON_PAGE})

        with pytest.raises(TemplateNotFoundError) as exc_info:
            compare_view_model(Person, templates, "nope")

        assert exc_info.value.template_name == "nope"

    def test_validate_raises_lookup_error_not_mismatch(self, make_templates):
        templates = make_templates({})

        with pytest.raises(TemplateNotFoundError):
            validate_view_model(Person, templates, "nope")


class TestValidateViewModel:
    """Test turning findings into errors."""

    def test_valid_returns_none(self, make_templates):
        templates = make_templates({"person": PERSON_PAGE})
        assert validate_view_model(Person, templates, "person") is None

    def test_extra_only_message(self, make_templates):
        templates = make_templates({"person": "{{ Name }}"})

        with pytest.raises(FieldMismatchError) as exc_info:
            validate_view_model(Person, templates, "person")

        assert str(exc_info.value) == "extra fields [Root->Address]"
        assert exc_info.value.extra == ["Root->Address"]
        assert exc_info.value.missing == []

    def test_missing_only_message(self, make_templates):
        templates = make_templates({"page": "{{ X }}{{ Y }}{{ Z }}{{ W }}"})

        with pytest.raises(FieldMismatchError) as exc_info:
            validate_view_model(PairXY, templates, "page")

        assert str(exc_info.value) == "missing fields [Root->Z, Root->W]"

    def test_extra_and_missing_message(self, make_templates):
        """Extra fields are listed first, separated from missing by a space."""
        templates = make_templates({"page": "{{ X }}{{ Address.City }}"})

        with pytest.raises(FieldMismatchError) as exc_info:
            validate_view_model(PairXY, templates, "page")

        assert str(exc_info.value) == "extra fields [Root->Y] missing fields [Root->Address]"

    def test_ignore_extra(self, make_templates):
        """Tolerated extras pass validation but stay visible in comparison."""
        templates = make_templates({"person": "{{ Name }}"})
        config = ValidatorConfig(ignore_extra=True)

        validate_view_model(Person, templates, "person", config)

        assert compare_view_model(Person, templates, "person", config).extra == [
            "Root->Address"
        ]

    def test_ignore_missing_keeps_extra(self, make_templates):
        templates = make_templates({"page": "{{ X }}{{ Z }}"})
        config = ValidatorConfig.from_dict({"ignore_missing": True})

        with pytest.raises(FieldMismatchError) as exc_info:
            validate_view_model(PairXY, templates, "page", config)

        assert str(exc_info.value) == "extra fields [Root->Y]"
