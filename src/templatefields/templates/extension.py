"""
Jinja2 extension adding a ``template`` tag for scoped inclusion.

``{% template "name" ARG %}`` renders another template of the same
environment with ARG as its whole context, so the included template refers
to ARG's fields directly. ARG is either an expression, a bare ``.`` (the
caller's context) or omitted (also the caller's context).
"""

# Group 1: External direct imports (alphabetical)
import dataclasses
from collections.abc import Mapping
from typing import Any

# Group 2: External from imports (alphabetical by source module)
from jinja2 import nodes
from jinja2.ext import Extension
from jinja2.runtime import Context
from markupsafe import Markup
from pydantic import BaseModel

RENDER_METHOD = "_render_template"


def scope_to_mapping(value: Any) -> Mapping[str, Any]:
    """
    Expose a value's fields as a template context.

    Params:
        value: Mapping, pydantic model, dataclass instance or plain object

    Returns:
        Mapping of field name to field value
    """
    if isinstance(value, Context):
        return value.get_all()
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if hasattr(value, "__dict__"):
        return vars(value)
    raise TypeError(
        f"Cannot use {type(value).__name__} as a template scope; "
        "expected a mapping, a model or an object with attributes"
    )


class TemplateInclusionExtension(Extension):
    """Provides ``{% template "name" [ARG | .] %}``."""

    tags = {"template"}

    def parse(self, parser):
        lineno = next(parser.stream).lineno
        name = parser.stream.expect("string").value
        args = [nodes.Const(name), nodes.ContextReference()]

        if parser.stream.skip_if("dot"):
            args.append(nodes.ContextReference())
        elif parser.stream.current.type != "block_end":
            args.append(parser.parse_expression())

        call = self.call_method(RENDER_METHOD, args, lineno=lineno)
        return nodes.Output([call], lineno=lineno)

    def _render_template(self, name: str, context: Context, *scope: Any) -> str:
        template = self.environment.get_template(name)
        data = scope[0] if scope else context
        rendered = template.render(scope_to_mapping(data))
        if context.eval_ctx.autoescape:
            return Markup(rendered)
        return rendered
