from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .alphabet import Alphabet, TokenId

logger = logging.getLogger(__name__)


class RuleTable:
    """Production rules keyed by token id.

    Tokens without an explicit rule rewrite to themselves. Setting a rule for
    a token that already has one replaces it.
    """

    def __init__(self, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._rules: dict[TokenId, tuple[TokenId, ...]] = {}

    def set_rule(self, token: TokenId, replacement: Iterable[TokenId]) -> None:
        (token,) = self._alphabet.validate([token])
        successor = self._alphabet.validate(replacement)
        if token in self._rules:
            logger.debug(
                "overwriting rule for %r: %r -> %r",
                self._alphabet.name_of(token),
                self._alphabet.render(self._rules[token]),
                self._alphabet.render(successor),
            )
        self._rules[token] = successor

    def replacement(self, token: TokenId) -> tuple[TokenId, ...]:
        return self._rules.get(token, (token,))

    def successors(self) -> tuple[tuple[TokenId, ...], ...]:
        """Replacement for every token of the alphabet, indexed by id."""
        return tuple(self.replacement(t) for t in range(len(self._alphabet)))

    def explicit(self) -> Mapping[TokenId, tuple[TokenId, ...]]:
        return MappingProxyType(self._rules)

    def copy(self, alphabet: Alphabet | None = None) -> RuleTable:
        table = RuleTable(self._alphabet if alphabet is None else alphabet)
        table._rules = dict(self._rules)
        return table

    def describe(self) -> str:
        name = self._alphabet.name_of
        return ", ".join(
            f"{name(lhs)} => {' '.join(name(t) for t in rhs)}".rstrip()
            for lhs, rhs in self._rules.items()
        )

    def __contains__(self, token: object) -> bool:
        return token in self._rules

    def __iter__(self) -> Iterator[TokenId]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
