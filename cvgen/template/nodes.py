"""
AST nodes of the template language.

Immutable node hierarchy produced by the parser and consumed by the evaluator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class TemplateNode:
    """Base class for all template AST nodes."""
    pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Static text, emitted as is."""
    text: str


@dataclass(frozen=True)
class VariableNode(TemplateNode):
    """${a.b.c} placeholder."""
    path: Tuple[str, ...]
    line: int
    column: int

    @property
    def dotted(self) -> str:
        return ".".join(self.path)


@dataclass(frozen=True)
class ForNode(TemplateNode):
    """{% for <var> in <path> %} ... {% endfor %}"""
    var: str
    source: Tuple[str, ...]
    body: List[TemplateNode]
    line: int
    column: int


@dataclass(frozen=True)
class IfNode(TemplateNode):
    """{% if [not] <path> %} ... [{% else %} ...] {% endif %}"""
    condition: Tuple[str, ...]
    negate: bool
    body: List[TemplateNode]
    else_body: List[TemplateNode]
    line: int
    column: int


# Alias for a node list (AST)
TemplateAST = List[TemplateNode]


__all__ = ["TemplateNode", "TextNode", "VariableNode", "ForNode", "IfNode", "TemplateAST"]
