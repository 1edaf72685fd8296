"""Text form of production rules: ``"F => F + F - F - F + F"``.

The left-hand side is a single token name; the right-hand side is a
whitespace-delimited list of names. Names are matched as whole words, so
multi-character names such as ``"stem"`` work as long as they contain no
whitespace.
"""

from __future__ import annotations

from collections.abc import Callable

from .alphabet import TokenId
from .errors import ParseError, UnknownToken

SEPARATOR = "=>"

Lookup = Callable[[str], TokenId]


def parse_sequence(text: str, lookup: Lookup) -> list[TokenId]:
    """Resolve every whitespace-delimited name in ``text``.

    Raises :class:`UnknownToken` for a name ``lookup`` does not know.
    """
    return [lookup(part) for part in text.split()]


def parse_rule(text: str, lookup: Lookup) -> tuple[TokenId, list[TokenId]]:
    lhs_text, sep, rhs_text = text.partition(SEPARATOR)
    if not sep:
        raise ParseError(text, f"missing {SEPARATOR!r} separator")

    lhs_parts = lhs_text.split()
    if not lhs_parts:
        raise ParseError(text, "empty left-hand side")
    if len(lhs_parts) > 1:
        raise ParseError(text, "left-hand side must be a single token")

    try:
        lhs = lookup(lhs_parts[0])
    except UnknownToken as e:
        raise ParseError(text, f"unknown token {lhs_parts[0]!r}") from e

    rhs: list[TokenId] = []
    for part in rhs_text.split():
        try:
            rhs.append(lookup(part))
        except UnknownToken as e:
            raise ParseError(text, f"unknown token {part!r}") from e
    return lhs, rhs


def format_rule(lhs: str, rhs: list[str]) -> str:
    return f"{lhs} {SEPARATOR} {' '.join(rhs)}".rstrip()
