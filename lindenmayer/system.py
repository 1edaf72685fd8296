"""The rewrite engine.

An :class:`LSystem` holds the current generation as a list of token ids and
grows it by simultaneous substitution: every token of the current generation
is replaced by its successor, and all replacements are looked up against the
generation as it was at the start of the step.

Algae example (``A -> AB``, ``B -> A``)::

    0. A
    1. AB
    2. ABA
    3. ABAAB
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator, Mapping

from .alphabet import Alphabet, TokenId
from .rules import RuleTable

logger = logging.getLogger(__name__)


class LSystem:
    def __init__(
        self, alphabet: Alphabet, axiom: tuple[TokenId, ...], rules: RuleTable
    ) -> None:
        self._alphabet = alphabet
        self._axiom = axiom
        self._rules = rules
        # Dense ids let successor lookup be a plain index.
        self._successors = rules.successors()
        self._state: list[TokenId] = list(axiom)
        self._steps = 0

    def step(self) -> None:
        successors = self._successors
        self._state = list(
            itertools.chain.from_iterable(successors[t] for t in self._state)
        )
        self._steps += 1
        logger.debug("generation %d: %d tokens", self._steps, len(self._state))

    def step_by(self, n: int) -> None:
        if n < 0:
            raise ValueError(f"step count must be >= 0, got {n}")
        for _ in range(n):
            self.step()

    def expand(self, n: int) -> Iterator[TokenId]:
        """Yield the tokens ``n`` generations ahead without building them.

        Walks the successor table depth first with an explicit stack of
        (tokens, index, depth) frames, so taking a prefix costs only that
        prefix. The system itself is not advanced.
        """
        if n < 0:
            raise ValueError(f"step count must be >= 0, got {n}")
        successors = self._successors
        stack: list[tuple[tuple[TokenId, ...], int, int]] = [
            (tuple(self._state), 0, 0)
        ]
        while stack:
            tokens, i, depth = stack.pop()
            if i >= len(tokens):
                continue
            token = tokens[i]
            stack.append((tokens, i + 1, depth))
            if depth < n:
                # Above the continuation, so the replacement is walked first.
                stack.append((successors[token], 0, depth + 1))
            else:
                yield token

    def reset(self) -> None:
        self._state = list(self._axiom)
        self._steps = 0

    def render(self) -> str:
        return self._alphabet.render(self._state)

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def state(self) -> tuple[TokenId, ...]:
        return tuple(self._state)

    @property
    def axiom(self) -> tuple[TokenId, ...]:
        return self._axiom

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def rules(self) -> Mapping[TokenId, tuple[TokenId, ...]]:
        return self._rules.explicit()

    def __len__(self) -> int:
        return len(self._state)

    def __repr__(self) -> str:
        return (
            f"LSystem(axiom={self._alphabet.render(self._axiom)!r}, "
            f"rules=[{self._rules.describe()}], steps={self._steps})"
        )
