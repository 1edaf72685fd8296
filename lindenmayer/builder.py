from __future__ import annotations

import logging
from collections.abc import Iterable

from .alphabet import Alphabet, TokenId
from .errors import EmptyAxiom, IncompleteConfiguration
from .rules import RuleTable
from .system import LSystem

logger = logging.getLogger(__name__)


class LSystemBuilder:
    """Collects tokens, rules and an axiom, and checks them as they arrive.

    Example::

        builder = LSystemBuilder()
        a = builder.token("A")
        b = builder.token("B")
        builder.axiom([a])
        builder.transformation_rule(a, [a, b])
        builder.transformation_rule(b, [a])
        system = builder.finish()
        system.step_by(3)
        assert system.render() == "ABAAB"
    """

    def __init__(self) -> None:
        self._alphabet = Alphabet()
        self._rules = RuleTable(self._alphabet)
        self._axiom: tuple[TokenId, ...] | None = None

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    def token(self, name: str) -> TokenId:
        return self._alphabet.register(name)

    def transformation_rule(
        self, predecessor: TokenId, successor: Iterable[TokenId]
    ) -> None:
        self._rules.set_rule(predecessor, successor)

    def axiom(self, axiom: Iterable[TokenId]) -> None:
        tokens = self._alphabet.validate(axiom)
        if not tokens:
            raise EmptyAxiom()
        self._axiom = tokens

    def finish(self) -> LSystem:
        if self._axiom is None:
            raise IncompleteConfiguration("axiom has not been defined")
        alphabet = self._alphabet.freeze()
        rules = self._rules.copy(alphabet)
        logger.debug(
            "built system: %d tokens, %d explicit rules, axiom %r",
            len(alphabet),
            len(rules),
            alphabet.render(self._axiom),
        )
        return LSystem(alphabet, self._axiom, rules)

    def __repr__(self) -> str:
        axiom = None if self._axiom is None else self._alphabet.render(self._axiom)
        return (
            f"LSystemBuilder(alphabet={self._alphabet!r}, axiom={axiom!r}, "
            f"rules=[{self._rules.describe()}])"
        )
