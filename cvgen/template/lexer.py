"""
Lexer for the conversion template language.

Splits template source into TEXT, PLACEHOLDER (${...}), DIRECTIVE ({% ... %})
and COMMENT ({# ... #}) tokens. Generated code is brace-heavy, so a lone
"{" or "}" is ordinary text: only the three openers above start a tag.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import LexerError


class TokenType(enum.Enum):
    """Token types of the template language."""
    TEXT = "TEXT"
    PLACEHOLDER = "PLACEHOLDER"   # ${ ... }
    DIRECTIVE = "DIRECTIVE"       # {% ... %}
    COMMENT = "COMMENT"           # {# ... #}
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Token with position info for precise error diagnostics.

    For tag tokens `value` is the stripped tag content.
    """
    type: TokenType
    value: str
    position: int       # Offset in the source text
    line: int           # 1-based
    column: int         # 1-based

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class TemplateLexer:
    """
    Template tokenizer.

    Directive and comment tags immediately followed by a newline consume
    that newline, so a tag on its own line leaves no blank line behind.
    """

    _OPENER = re.compile(r"\$\{|\{%|\{#")

    _TAGS: Dict[str, Tuple[TokenType, str]] = {
        "${": (TokenType.PLACEHOLDER, "}"),
        "{%": (TokenType.DIRECTIVE, "%}"),
        "{#": (TokenType.COMMENT, "#}"),
    }

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while self.position < self.length:
            m = self._OPENER.search(self.text, self.position)
            if not m:
                tokens.append(self._make(TokenType.TEXT, self.text[self.position:], self.position))
                self.position = self.length
                break

            if m.start() > self.position:
                tokens.append(self._make(TokenType.TEXT, self.text[self.position:m.start()], self.position))

            tokens.append(self._read_tag(m.group(0), m.start()))

        tokens.append(self._make(TokenType.EOF, "", self.length))
        return tokens

    def _read_tag(self, opener: str, start: int) -> Token:
        token_type, closer = self._TAGS[opener]
        content_start = start + len(opener)
        end = self.text.find(closer, content_start)
        if end < 0:
            line, column = self._location(start)
            raise LexerError(f"Unterminated {opener!r} tag", line, column)

        self.position = end + len(closer)
        if token_type is not TokenType.PLACEHOLDER:
            self._skip_newline()
        return self._make(token_type, self.text[content_start:end].strip(), start)

    def _skip_newline(self) -> None:
        if self.text.startswith("\r\n", self.position):
            self.position += 2
        elif self.text.startswith("\n", self.position):
            self.position += 1

    def _make(self, token_type: TokenType, value: str, position: int) -> Token:
        line, column = self._location(position)
        return Token(token_type, value, position, line, column)

    def _location(self, position: int) -> Tuple[int, int]:
        line = self.text.count("\n", 0, position) + 1
        last_nl = self.text.rfind("\n", 0, position)
        return line, position - last_nl


def tokenize_template(text: str) -> List[Token]:
    """
    Convenience wrapper around TemplateLexer.

    Raises:
        LexerError: On an unterminated tag
    """
    return TemplateLexer(text).tokenize()


__all__ = ["TokenType", "Token", "TemplateLexer", "tokenize_template"]
