"""
DSL Lexer: rule source text to tokens.

Token kinds:
- STRING: double-quoted literal. Only \\n \\t \\r \\\\ \\" are interpreted;
  any other backslash sequence is kept as written so regex escapes such
  as \\d, \\b, \\s reach the regex engine unharmed.
- NUMBER: unsigned decimal with optional fractional part (sign is the
  unary - operator, never part of the literal).
- WORD: identifier-shaped word ([A-Za-z_][A-Za-z0-9_]*). Keywords, boolean
  states, relation names and the word operators `contains` / `matches` are
  all WORD tokens; the parser decides their role by position.
- PUNCT: operator or punctuation symbol (longest match first).
- EOF: end of input.

Usage:
    tokens = tokenize('rule "r" on any { ensure: focusable report: "" }')
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .errors import ParseError


class TokenKind(Enum):
    STRING = auto()
    NUMBER = auto()
    WORD = auto()
    PUNCT = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """
    A lexed token.

    Attributes:
        kind: Token kind
        value: Decoded value (str for STRING/WORD/PUNCT, int/float for NUMBER)
        position: 0-based offset of the first character in the source
    """
    kind: TokenKind
    value: str | int | float | None
    position: int

    def is_punct(self, symbol: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.value == symbol

    def is_word(self, word: str) -> bool:
        return self.kind is TokenKind.WORD and self.value == word

    def describe(self) -> str:
        """Short form for error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.STRING:
            return f"string {self.value!r}"
        return repr(str(self.value))


# Two-character symbols are tried before one-character symbols
_PUNCT_2 = ("&&", "||", "<=", ">=", "==", "!=", "~=")
_PUNCT_1 = frozenset("<>!-+*/(){}.:")

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
}

_WHITESPACE = frozenset(" \t\r\n\f\v")


def _is_word_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_word_char(ch: str) -> bool:
    return _is_word_start(ch) or ("0" <= ch <= "9")


def _read_string(source: str, start: int) -> tuple[str, int]:
    """
    Read a string literal starting at the opening quote.

    Returns:
        (decoded value, offset just past the closing quote)
    """
    parts: list[str] = []
    i = start + 1
    n = len(source)
    while i < n:
        ch = source[i]
        if ch == '"':
            return "".join(parts), i + 1
        if ch == "\\":
            if i + 1 >= n:
                break
            nxt = source[i + 1]
            # Unknown escapes are preserved literally (backslash included)
            parts.append(_ESCAPES.get(nxt, "\\" + nxt))
            i += 2
            continue
        parts.append(ch)
        i += 1
    raise ParseError.at(source, start, "unterminated string literal")


def _read_number(source: str, start: int) -> tuple[int | float, int]:
    i = start
    n = len(source)
    while i < n and source[i].isdigit() and source[i].isascii():
        i += 1
    # Fraction only when a digit follows the dot (children.length vs 1.5)
    if i + 1 < n and source[i] == "." and source[i + 1].isascii() and source[i + 1].isdigit():
        i += 1
        while i < n and source[i].isdigit() and source[i].isascii():
            i += 1
        return float(source[start:i]), i
    return int(source[start:i]), i


def tokenize(source: str) -> list[Token]:
    """
    Split rule source text into tokens.

    Args:
        source: Rule source text.

    Returns:
        List of tokens, always terminated by an EOF token.

    Raises:
        ParseError: On an unexpected character or unterminated string.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]

        if ch in _WHITESPACE:
            i += 1
            continue

        if ch == '"':
            value, end = _read_string(source, i)
            tokens.append(Token(TokenKind.STRING, value, i))
            i = end
            continue

        if ch.isascii() and ch.isdigit():
            number, end = _read_number(source, i)
            tokens.append(Token(TokenKind.NUMBER, number, i))
            i = end
            continue

        if _is_word_start(ch):
            end = i + 1
            while end < n and _is_word_char(source[end]):
                end += 1
            tokens.append(Token(TokenKind.WORD, source[i:end], i))
            i = end
            continue

        pair = source[i:i + 2]
        if pair in _PUNCT_2:
            tokens.append(Token(TokenKind.PUNCT, pair, i))
            i += 2
            continue

        if ch in _PUNCT_1:
            tokens.append(Token(TokenKind.PUNCT, ch, i))
            i += 1
            continue

        raise ParseError.at(source, i, f"unexpected character {ch!r}")

    tokens.append(Token(TokenKind.EOF, None, n))
    return tokens


__all__ = [
    "TokenKind",
    "Token",
    "tokenize",
]
