"""
Translation of Jinja2 syntax trees into template node variants.

Jinja2 expressions are richer than plain field chains, so every expression is
flattened into a Pipe whose arguments are the maximal field-access chains it
contains: ``{{ user.name ~ " " ~ order.total | round }}`` yields the chains
``user.name`` and ``order.total``. Names provided by the environment
(``range``, ``dict``, ...) and names the template binds itself (``set``,
``macro``, ``import`` and ``with`` targets) are never treated as fields.
"""

# Group 1: External direct imports (alphabetical)
from collections.abc import Container, Iterable

# Group 2: External from imports (alphabetical by source module)
from jinja2 import nodes as jinja_nodes

# Group 4: Internal from imports (alphabetical by source module)
from templatefields.templates.extension import RENDER_METHOD
from templatefields.templates.nodes import (
    Action,
    Conditional,
    FieldAccess,
    Inclusion,
    Iteration,
    Other,
    Pipe,
    ScopeMarker,
    ScopeNarrow,
    Sequence,
    TemplateNode,
)

# Jinja2 node types that only wrap a body without changing what it references
TRANSPARENT_BLOCKS = (
    jinja_nodes.Block,
    jinja_nodes.FilterBlock,
    jinja_nodes.Scope,
    jinja_nodes.EvalContextModifier,
    jinja_nodes.AssignBlock,
)

# Jinja2 statements that bind names inside the template
BINDING_STATEMENTS = (
    jinja_nodes.Assign,
    jinja_nodes.AssignBlock,
    jinja_nodes.With,
    jinja_nodes.Macro,
    jinja_nodes.Import,
    jinja_nodes.FromImport,
)


def adapt_template(
    template: jinja_nodes.Template, global_names: Container[str] = ()
) -> Sequence:
    """
    Convert a parsed Jinja2 template into a Sequence variant.

    Params:
        template: Root node returned by ``Environment.parse``
        global_names: Names supplied by the environment rather than the data

    Returns:
        Sequence holding the adapted body
    """
    adapter = TemplateAdapter(global_names, bound_names(template))
    return adapter.adapt_body(template.body)


def bound_names(template: jinja_nodes.Template) -> frozenset[str]:
    """
    Collect the names a template binds for itself.

    Covers ``set`` targets (plain and block form), ``with`` targets, macro
    names, and the aliases introduced by ``import`` and ``from ... import``.
    """
    names: set[str] = set()
    for node in template.find_all(BINDING_STATEMENTS):
        if isinstance(node, (jinja_nodes.Assign, jinja_nodes.AssignBlock)):
            names.update(_target_names(node.target))
        elif isinstance(node, jinja_nodes.With):
            for target in node.targets:
                names.update(_target_names(target))
        elif isinstance(node, jinja_nodes.Macro):
            names.add(node.name)
        elif isinstance(node, jinja_nodes.Import):
            names.add(node.target)
        else:
            for item in node.names:
                names.add(item[1] if isinstance(item, tuple) else item)
    return frozenset(names)


def _target_names(target: jinja_nodes.Node) -> set[str]:
    # namespace attribute targets (ns.x) bind nothing new
    if isinstance(target, jinja_nodes.Name):
        return {target.name}
    return {name.name for name in target.find_all(jinja_nodes.Name)}


class TemplateAdapter:
    """
    Translator bound to the names that never resolve to template data.

    Params:
        global_names: Names the environment provides globally
        local_names: Names the template binds itself
    """

    def __init__(
        self, global_names: Container[str] = (), local_names: Container[str] = ()
    ):
        self.global_names = global_names
        self.local_names = local_names

    def adapt_body(self, body: Iterable[jinja_nodes.Node] | None) -> Sequence:
        adapted = tuple(self.adapt(node) for node in body or ())
        return Sequence(nodes=adapted)

    def adapt(self, node: jinja_nodes.Node) -> TemplateNode:
        """Convert one Jinja2 statement or expression node."""
        lineno = getattr(node, "lineno", None)

        if isinstance(node, jinja_nodes.Output):
            return Sequence(
                nodes=tuple(self._adapt_output_item(item) for item in node.nodes),
                lineno=lineno,
            )
        if isinstance(node, jinja_nodes.If):
            return self._adapt_if(node)
        if isinstance(node, jinja_nodes.For):
            return Iteration(
                pipe=self.adapt_pipe(node.iter),
                body=self.adapt_body(node.body),
                else_body=self.adapt_body(node.else_) if node.else_ else None,
                lineno=lineno,
            )
        if isinstance(node, jinja_nodes.With):
            return ScopeNarrow(
                pipe=self.adapt_pipe(*node.values),
                body=self.adapt_body(node.body),
                lineno=lineno,
            )
        if isinstance(node, jinja_nodes.Include):
            return self._adapt_include(node)
        if isinstance(node, jinja_nodes.Extends):
            # the parent layout renders with the child's context
            return self._adapt_named(node.template, "Extends", lineno)
        if isinstance(node, jinja_nodes.Assign):
            return Action(pipe=self.adapt_pipe(node.node), lineno=lineno)
        if isinstance(node, TRANSPARENT_BLOCKS):
            return Sequence(nodes=self.adapt_body(node.body).nodes, lineno=lineno)
        if isinstance(node, jinja_nodes.Expr):
            return Action(pipe=self.adapt_pipe(node), lineno=lineno)
        return Other(kind=type(node).__name__, lineno=lineno)

    def adapt_pipe(self, *exprs: jinja_nodes.Expr) -> Pipe:
        """Flatten expressions into a Pipe of their field-access chains."""
        args: list[TemplateNode] = []
        for expr in exprs:
            args.extend(self._collect_fields(expr))
        lineno = exprs[0].lineno if exprs else None
        return Pipe(args=tuple(args), lineno=lineno)

    def field_chain(self, expr: jinja_nodes.Node) -> tuple[str, ...] | None:
        """
        Return the identifier chain of a plain field access, or None.

        ``user.address.city`` and ``user["address"].city`` both give
        ``("user", "address", "city")``.
        """
        if isinstance(expr, jinja_nodes.Name):
            if (
                expr.ctx != "load"
                or expr.name in self.global_names
                or expr.name in self.local_names
            ):
                return None
            return (expr.name,)
        if isinstance(expr, jinja_nodes.Getattr):
            head = self.field_chain(expr.node)
            return None if head is None else (*head, expr.attr)
        if isinstance(expr, jinja_nodes.Getitem):
            key = expr.arg
            if isinstance(key, jinja_nodes.Const) and isinstance(key.value, str):
                head = self.field_chain(expr.node)
                return None if head is None else (*head, key.value)
        return None

    def _collect_fields(self, expr: jinja_nodes.Node) -> list[TemplateNode]:
        chain = self.field_chain(expr)
        if chain is not None:
            return [FieldAccess(idents=chain, lineno=expr.lineno)]
        found: list[TemplateNode] = []
        for child in expr.iter_child_nodes():
            found.extend(self._collect_fields(child))
        return found

    def _adapt_output_item(self, item: jinja_nodes.Node) -> TemplateNode:
        if isinstance(item, jinja_nodes.TemplateData):
            return Other(kind="TemplateData", lineno=item.lineno)
        if _is_inclusion_call(item):
            return self._adapt_inclusion_call(item)
        return Action(pipe=self.adapt_pipe(item), lineno=item.lineno)

    def _adapt_if(self, node: jinja_nodes.If) -> Conditional:
        else_body = self.adapt_body(node.else_) if node.else_ else None
        # elif chains become nested conditionals in the else branch
        for branch in reversed(node.elif_):
            else_body = Sequence(
                nodes=(
                    Conditional(
                        test=self.adapt_pipe(branch.test),
                        body=self.adapt_body(branch.body),
                        else_body=else_body,
                        lineno=branch.lineno,
                    ),
                ),
                lineno=branch.lineno,
            )
        return Conditional(
            test=self.adapt_pipe(node.test),
            body=self.adapt_body(node.body),
            else_body=else_body,
            lineno=node.lineno,
        )

    def _adapt_include(self, node: jinja_nodes.Include) -> TemplateNode:
        if not node.with_context:
            # the included template sees none of the caller's data
            return Other(kind="Include", lineno=node.lineno)
        return self._adapt_named(node.template, "Include", node.lineno)

    def _adapt_named(
        self, target: jinja_nodes.Expr, kind: str, lineno: int | None
    ) -> TemplateNode:
        if isinstance(target, jinja_nodes.Const) and isinstance(target.value, str):
            return Inclusion(name=target.value, lineno=lineno)
        return Other(kind=kind, lineno=lineno)

    def _adapt_inclusion_call(self, call: jinja_nodes.Call) -> Inclusion:
        name = call.args[0].value
        if len(call.args) < 3:
            return Inclusion(name=name, lineno=call.lineno)

        arg_expr = call.args[2]
        if isinstance(arg_expr, jinja_nodes.ContextReference):
            arg: TemplateNode = ScopeMarker(lineno=call.lineno)
        else:
            chain = self.field_chain(arg_expr)
            if chain is None:
                arg = Other(kind=type(arg_expr).__name__, lineno=call.lineno)
            else:
                arg = FieldAccess(idents=chain, lineno=call.lineno)
        return Inclusion(name=name, arg=arg, lineno=call.lineno)


def _is_inclusion_call(node: jinja_nodes.Node) -> bool:
    return (
        isinstance(node, jinja_nodes.Call)
        and isinstance(node.node, jinja_nodes.ExtensionAttribute)
        and node.node.name == RENDER_METHOD
    )
