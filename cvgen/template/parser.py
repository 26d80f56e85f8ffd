"""
Template parser.

Turns the token stream into an AST with support for nested loops and
conditional blocks.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Optional, Tuple

from .errors import ParserError
from .lexer import Token, TokenType, tokenize_template
from .nodes import ForNode, IfNode, TemplateAST, TemplateNode, TextNode, VariableNode

_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class TemplateParser:
    """
    Recursive descent parser.

    Block directives (for/if) parse their body until one of the closing
    keywords is reached; an unexpected closer or EOF is a ParserError.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0

    def parse(self) -> TemplateAST:
        """
        Parse the whole token sequence.

        Raises:
            ParserError: On syntax errors
        """
        body, _ = self._parse_block(frozenset())
        return body

    # -------- blocks --------

    def _parse_block(self, stop: FrozenSet[str]) -> Tuple[TemplateAST, Optional[Token]]:
        """
        Parse nodes until a directive whose keyword is in `stop` (returned,
        already consumed) or until EOF (returns None as closer).
        """
        nodes: List[TemplateNode] = []
        while True:
            tok = self._advance()
            if tok.type == TokenType.EOF:
                return nodes, None
            if tok.type == TokenType.TEXT:
                nodes.append(TextNode(text=tok.value))
            elif tok.type == TokenType.COMMENT:
                continue
            elif tok.type == TokenType.PLACEHOLDER:
                nodes.append(VariableNode(path=self._parse_path(tok.value, tok), line=tok.line, column=tok.column))
            else:
                keyword = self._keyword(tok)
                if keyword in ("endfor", "endif", "else"):
                    if keyword in stop:
                        return nodes, tok
                    raise ParserError(f"Unexpected '{keyword}'", tok.line, tok.column)
                if keyword == "for":
                    nodes.append(self._parse_for(tok))
                elif keyword == "if":
                    nodes.append(self._parse_if(tok))
                else:
                    raise ParserError(f"Unknown directive '{keyword}'", tok.line, tok.column)

    def _parse_for(self, tok: Token) -> ForNode:
        words = tok.value.split()
        if len(words) != 4 or words[2] != "in" or not _IDENT.match(words[1]):
            raise ParserError("Expected 'for <name> in <path>'", tok.line, tok.column)
        source = self._parse_path(words[3], tok)

        body, closer = self._parse_block(frozenset({"endfor"}))
        if closer is None:
            raise ParserError("Unclosed 'for' block", tok.line, tok.column)
        self._expect_bare(closer)
        return ForNode(var=words[1], source=source, body=body, line=tok.line, column=tok.column)

    def _parse_if(self, tok: Token) -> IfNode:
        words = tok.value.split()[1:]
        negate = False
        if words and words[0] == "not":
            negate = True
            words = words[1:]
        if len(words) != 1:
            raise ParserError("Expected 'if [not] <path>'", tok.line, tok.column)
        condition = self._parse_path(words[0], tok)

        body, closer = self._parse_block(frozenset({"else", "endif"}))
        if closer is None:
            raise ParserError("Unclosed 'if' block", tok.line, tok.column)
        self._expect_bare(closer)

        else_body: TemplateAST = []
        if self._keyword(closer) == "else":
            else_body, closer = self._parse_block(frozenset({"endif"}))
            if closer is None:
                raise ParserError("Unclosed 'else' block", tok.line, tok.column)
            self._expect_bare(closer)

        return IfNode(
            condition=condition,
            negate=negate,
            body=body,
            else_body=else_body,
            line=tok.line,
            column=tok.column,
        )

    # -------- helpers --------

    @staticmethod
    def _keyword(tok: Token) -> str:
        words = tok.value.split()
        if not words:
            raise ParserError("Empty directive", tok.line, tok.column)
        return words[0]

    @staticmethod
    def _expect_bare(tok: Token) -> None:
        if len(tok.value.split()) != 1:
            raise ParserError(f"'{tok.value.split()[0]}' takes no arguments", tok.line, tok.column)

    @staticmethod
    def _parse_path(text: str, tok: Token) -> Tuple[str, ...]:
        if not text:
            raise ParserError("Empty placeholder", tok.line, tok.column)
        parts = tuple(text.split("."))
        for p in parts:
            if not _IDENT.match(p):
                raise ParserError(f"Invalid variable path '{text}'", tok.line, tok.column)
        return parts

    def _advance(self) -> Token:
        tok = self.tokens[self.position]
        if tok.type != TokenType.EOF:
            self.position += 1
        return tok


def parse_template(text: str) -> TemplateAST:
    """
    Tokenize and parse template source.

    Raises:
        LexerError: On an unterminated tag
        ParserError: On syntax errors
    """
    return TemplateParser(tokenize_template(text)).parse()


__all__ = ["TemplateParser", "parse_template"]
