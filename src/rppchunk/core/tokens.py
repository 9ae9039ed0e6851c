# topmark:header:start
#
#   project      : RppChunk
#   file         : tokens.py
#   file_relpath : src/rppchunk/core/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line tokenizer for RPP chunk lines.

A line is split on whitespace into ordered tokens. A token that starts with a
quote character (``"``, ``'`` or a backtick) extends to the matching quote and
may contain whitespace; its `Token.text` is the unquoted content. An
unterminated quote is not an error: the token then runs to the next whitespace
and keeps the quote character.

Tokens remember their span in the line so a single token can be rewritten
without touching the rest of the line (indentation, separators, quoting).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

QUOTE_CHARS: Final[str] = "\"'`"

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r'"[^"]*"|\'[^\']*\'|`[^`]*`|\S+')
_INT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?\d+")


@dataclass(frozen=True, slots=True)
class Token:
    """One token of a line.

    Attributes:
        text (str): Token content (without surrounding quotes).
        start (int): Offset of the first character of the raw token in the line.
        end (int): Offset just past the raw token.
        quoted (bool): Whether the raw token was quoted.
    """

    text: str
    start: int
    end: int
    quoted: bool = False


def quote_token(value: str) -> str:
    """Return ``value`` as it must be written in a chunk line.

    Values that are empty, contain whitespace or start with a quote character
    are wrapped in the first quote character they do not contain.
    """
    if value and not any(c.isspace() for c in value) and value[0] not in QUOTE_CHARS:
        return value
    for q in QUOTE_CHARS:
        if q not in value:
            return f"{q}{value}{q}"
    # No usable quote: the value cannot be represented losslessly.
    return f'"{value}"'


class LineTokens:
    """Ordered tokens of one line.

    Out-of-range lookups follow the lenient convention of chunk readers:
    `text` returns ``""`` and `int_value` returns ``0``.
    """

    __slots__ = ("line", "tokens")

    def __init__(self, line: str, tokens: tuple[Token, ...]) -> None:
        self.line = line
        self.tokens = tokens

    @classmethod
    def parse(cls, line: str) -> LineTokens:
        """Tokenize ``line`` (without its newline)."""
        out: list[Token] = []
        for m in _TOKEN_RE.finditer(line):
            raw: str = m.group(0)
            if len(raw) >= 2 and raw[0] in QUOTE_CHARS and raw[-1] == raw[0]:
                out.append(Token(raw[1:-1], m.start(), m.end(), quoted=True))
            else:
                out.append(Token(raw, m.start(), m.end()))
        return cls(line, tuple(out))

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    def __repr__(self) -> str:
        return f"LineTokens({[t.text for t in self.tokens]!r})"

    @property
    def keyword(self) -> str | None:
        """First token text, or ``None`` for a blank line."""
        return self.tokens[0].text if self.tokens else None

    def text(self, index: int) -> str:
        """Return the text of token ``index`` (``""`` when out of range)."""
        if 0 <= index < len(self.tokens):
            return self.tokens[index].text
        return ""

    def int_value(self, index: int) -> int:
        """Return token ``index`` read as a leading integer (``0`` if none)."""
        m = _INT_RE.match(self.text(index))
        return int(m.group(0)) if m else 0

    def texts(self) -> list[str]:
        """Return all token texts."""
        return [t.text for t in self.tokens]

    def splice(self, raw: str, index: int, value: str) -> str:
        """Return ``raw`` with token ``index`` replaced by ``value``.

        ``raw`` is the untruncated line these tokens were parsed from (or a
        prefix-identical extension of it); everything outside the token span is
        kept verbatim.
        """
        tok: Token = self.tokens[index]
        return f"{raw[: tok.start]}{quote_token(value)}{raw[tok.end :]}"


def tokenize(line: str) -> LineTokens:
    """Tokenize one line (convenience wrapper around `LineTokens.parse`)."""
    return LineTokens.parse(line)
