"""
Template evaluator.

Walks the AST against a variables mapping and produces the rendered text.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Tuple

from .errors import TemplateEvaluationError
from .nodes import ForNode, IfNode, TemplateAST, TemplateNode, TextNode, VariableNode

_MISSING = object()


class TemplateEvaluator:
    """
    Evaluates a parsed template.

    Names are looked up in loop scopes first (innermost wins), then in the
    root variables. Path segments descend into mappings by key and into
    other objects by attribute.
    """

    def __init__(self, ast: TemplateAST):
        self.ast = ast

    def render(self, variables: Mapping[str, Any]) -> str:
        scopes: List[Mapping[str, Any]] = [variables]
        out: List[str] = []
        self._render_nodes(self.ast, scopes, out)
        return "".join(out)

    def _render_nodes(self, nodes: TemplateAST, scopes: List[Mapping[str, Any]], out: List[str]) -> None:
        for node in nodes:
            self._render_node(node, scopes, out)

    def _render_node(self, node: TemplateNode, scopes: List[Mapping[str, Any]], out: List[str]) -> None:
        if isinstance(node, TextNode):
            out.append(node.text)
        elif isinstance(node, VariableNode):
            value = self._resolve(node.path, scopes)
            if value is _MISSING:
                raise TemplateEvaluationError(f"Unknown variable '{node.dotted}'", node.line, node.column)
            out.append("" if value is None else str(value))
        elif isinstance(node, ForNode):
            self._render_for(node, scopes, out)
        elif isinstance(node, IfNode):
            value = self._resolve(node.condition, scopes)
            truthy = value is not _MISSING and bool(value)
            if node.negate:
                truthy = not truthy
            self._render_nodes(node.body if truthy else node.else_body, scopes, out)
        else:
            raise TypeError(f"Unsupported template node: {type(node).__name__}")

    def _render_for(self, node: ForNode, scopes: List[Mapping[str, Any]], out: List[str]) -> None:
        source = self._resolve(node.source, scopes)
        dotted = ".".join(node.source)
        if source is _MISSING:
            raise TemplateEvaluationError(f"Unknown variable '{dotted}'", node.line, node.column)
        if source is None:
            return
        if isinstance(source, (str, bytes, Mapping)) or not hasattr(source, "__iter__"):
            raise TemplateEvaluationError(
                f"Cannot iterate over '{dotted}' ({type(source).__name__})", node.line, node.column
            )
        for item in source:
            scope: Dict[str, Any] = {node.var: item}
            self._render_nodes(node.body, scopes + [scope], out)

    @staticmethod
    def _resolve(path: Tuple[str, ...], scopes: List[Mapping[str, Any]]) -> Any:
        head, rest = path[0], path[1:]
        value: Any = _MISSING
        for scope in reversed(scopes):
            if head in scope:
                value = scope[head]
                break
        if value is _MISSING:
            return _MISSING

        for part in rest:
            if isinstance(value, Mapping):
                if part not in value:
                    return _MISSING
                value = value[part]
            elif hasattr(value, part):
                value = getattr(value, part)
            else:
                return _MISSING
        return value


def render_template(ast: TemplateAST, variables: Mapping[str, Any]) -> str:
    """
    Render a parsed template.

    Raises:
        TemplateEvaluationError: On unknown variables or bad loop sources
    """
    return TemplateEvaluator(ast).render(variables)


__all__ = ["TemplateEvaluator", "render_template"]
