"""YamlHighlighter: regex-level syntax colouring for the text surface overlay.

This is not a YAML grammar.  Each line is classified with a
handful of regular expressions:

- a ``#`` at the start of the line or after whitespace starts a comment;
- ``- `` at the start of the (indented) line is a list marker;
- ``key:`` before the first colon is a key;
- the value after the colon (or the marker) is a quoted string, boolean,
  null, number, or "other".

Tokenisation is lossless: joining the text of a line's tokens gives back the
line exactly, so the overlay always lines up with the caret of the editable
text underneath.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from enum import StrEnum, auto

__all__ = ["Token", "TokenKind", "YamlHighlighter"]

_COMMENT = re.compile(r"(?:^|(?<=\s))#")
_INDENT = re.compile(r"^\s*")
_LIST_ITEM = re.compile(r"^-(?=\s|$)")
_KEY_VALUE = re.compile(r"^(?P<key>[^:\n]+):(?P<value>(?:\s.*)?)$")

_QUOTED = re.compile(r"""^(["']).*\1$""")
_BOOLEAN = re.compile(r"^(true|false)$", re.IGNORECASE)
_NULL = re.compile(r"^(null|~)$", re.IGNORECASE)
_NUMBER = re.compile(r"^[+-]?\d+(\.\d+)?$")


class TokenKind(StrEnum):
    """Classification of one highlighted fragment."""

    KEY = auto()
    LIST_MARK = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()
    OTHER = auto()
    COMMENT = auto()
    PLAIN = auto()

    @property
    def css_class(self) -> str | None:
        """CSS class(es) used by ``render_html``; None for plain text."""
        if self == TokenKind.PLAIN:
            return None
        if self in (TokenKind.KEY, TokenKind.LIST_MARK, TokenKind.COMMENT):
            return f"yaml-{self.value.replace('_', '-')}"
        return f"yaml-value yaml-{self.value}"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str


class YamlHighlighter:
    """Tokenises serialized text line by line.

    Example::

        YamlHighlighter().highlight_line("  port: 8080  # dev")
        # [Token(PLAIN, '  '), Token(KEY, 'port'), Token(PLAIN, ':'), Token(PLAIN, ' '),
        #  Token(NUMBER, '8080'), Token(PLAIN, '  '), Token(COMMENT, '# dev')]
    """

    def highlight(self, text: str) -> list[list[Token]]:
        """Return the tokens of every line of ``text``."""
        return [self.highlight_line(line) for line in text.split("\n")]

    def highlight_line(self, line: str) -> list[Token]:
        match = _COMMENT.search(line)
        code, comment = (line[: match.start()], line[match.start() :]) if match else (line, "")

        tokens: list[Token] = []
        indent = _INDENT.match(code).group(0)  # type: ignore[union-attr]
        rest = code[len(indent) :]
        _append(tokens, TokenKind.PLAIN, indent)

        marker = _LIST_ITEM.match(rest)
        if marker:
            _append(tokens, TokenKind.LIST_MARK, "-")
            rest = rest[1:]
            spacing = _INDENT.match(rest).group(0)  # type: ignore[union-attr]
            _append(tokens, TokenKind.PLAIN, spacing)
            rest = rest[len(spacing) :]

        pair = _KEY_VALUE.match(rest)
        if pair:
            _append(tokens, TokenKind.KEY, pair.group("key"))
            _append(tokens, TokenKind.PLAIN, ":")
            tokens.extend(self._value_tokens(pair.group("value")))
        else:
            tokens.extend(self._value_tokens(rest))

        _append(tokens, TokenKind.COMMENT, comment)
        return tokens

    def render_html(self, text: str) -> str:
        """Render ``text`` as escaped HTML with one ``<span>`` per coloured token."""
        return "\n".join(
            "".join(_token_html(token) for token in line) for line in self.highlight(text)
        )

    def classify(self, value: str) -> TokenKind:
        """Return the kind of a stripped scalar ``value``."""
        if _QUOTED.match(value):
            return TokenKind.STRING
        if _BOOLEAN.match(value):
            return TokenKind.BOOLEAN
        if _NULL.match(value):
            return TokenKind.NULL
        if _NUMBER.match(value):
            return TokenKind.NUMBER
        return TokenKind.OTHER

    def _value_tokens(self, raw: str) -> list[Token]:
        stripped = raw.strip()
        if not stripped:
            return [Token(TokenKind.PLAIN, raw)] if raw else []
        start = raw.index(stripped)
        tokens: list[Token] = []
        _append(tokens, TokenKind.PLAIN, raw[:start])
        tokens.append(Token(self.classify(stripped), stripped))
        _append(tokens, TokenKind.PLAIN, raw[start + len(stripped) :])
        return tokens


def _append(tokens: list[Token], kind: TokenKind, text: str) -> None:
    if text:
        tokens.append(Token(kind, text))


def _token_html(token: Token) -> str:
    escaped = html.escape(token.text, quote=False)
    css = token.kind.css_class
    return escaped if css is None else f'<span class="{css}">{escaped}</span>'
