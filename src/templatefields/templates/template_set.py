"""
Named template lookup over a Jinja2 environment.

A TemplateSet is the collection of mutually includable templates a
validation runs against. Lookups parse the template source through the
environment and translate the result into template node variants.
"""

# Group 1: External direct imports (alphabetical)
import logging
from collections.abc import Iterable, Mapping
from typing import Any

# Group 2: External from imports (alphabetical by source module)
from jinja2 import DictLoader, Environment, TemplateNotFound

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.exceptions import TemplateNotFoundError
from templatefields.templates.adapter import adapt_template
from templatefields.templates.extension import TemplateInclusionExtension
from templatefields.templates.nodes import Sequence

logger = logging.getLogger(__name__)


def create_environment(
    templates: Mapping[str, str] | None = None, **options: Any
) -> Environment:
    """
    Build a Jinja2 environment with the ``template`` tag installed.

    Params:
        templates: Template sources by name, served through a DictLoader
        **options: Extra keyword arguments for ``jinja2.Environment``

    Returns:
        Configured environment
    """
    extensions = list(options.pop("extensions", ()))
    if TemplateInclusionExtension not in extensions:
        extensions.append(TemplateInclusionExtension)
    loader = options.pop("loader", None)
    if loader is None:
        loader = DictLoader(dict(templates or {}))
    return Environment(loader=loader, extensions=extensions, **options)


class TemplateSet:
    """
    Collection of named templates backed by a Jinja2 environment.

    Params:
        environment: Environment whose loader provides the template sources
        declared_names: Top-level field names of the data; an environment
            global with one of these names resolves to the data instead
    """

    def __init__(
        self, environment: Environment, declared_names: Iterable[str] = ()
    ):
        self.environment = environment
        self.declared_names = frozenset(declared_names)

    @classmethod
    def from_mapping(cls, templates: Mapping[str, str], **options: Any) -> "TemplateSet":
        """Create a set from template sources keyed by name."""
        return cls(create_environment(templates, **options))

    @property
    def global_names(self) -> frozenset[str]:
        """Names resolved by the environment rather than the template data."""
        return frozenset(self.environment.globals) - self.declared_names

    def declaring(self, names: Iterable[str]) -> "TemplateSet":
        """Return a set over the same environment with different declared names."""
        return TemplateSet(self.environment, names)

    def lookup(self, name: str) -> Sequence | None:
        """
        Parse the named template and return its adapted body.

        Params:
            name: Template name as known to the environment's loader

        Returns:
            Adapted template body, or None when the name does not resolve
        """
        loader = self.environment.loader
        if loader is None:
            return None
        try:
            source, filename, _ = loader.get_source(self.environment, name)
        except TemplateNotFound:
            return None
        parsed = self.environment.parse(source, name, filename)
        return adapt_template(parsed, self.global_names)

    def require(self, name: str) -> Sequence:
        """
        Return the adapted body of a template that must exist.

        Raises:
            TemplateNotFoundError: When the name does not resolve
        """
        body = self.lookup(name)
        if body is None:
            raise TemplateNotFoundError(name)
        logger.debug("Loaded template %r with %d top-level nodes", name, len(body.nodes))
        return body

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None
