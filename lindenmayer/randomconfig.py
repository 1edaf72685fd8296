from __future__ import annotations

import random
from typing import Any

from .config import parse_config
from .grammar import format_rule

CHOICES = ["L", "R", "F", "X", "Y"]


def valid_rule(rule: list[str]) -> bool:
    """Accept a branching rule only if its push/pop symbols are balanced.

    ``+`` saves the turtle and ``-`` restores it. A rule must branch at least
    once, must never restore below zero depth and must not contain an empty
    branch (``+ -``).
    """
    if not rule or "+" not in rule:
        return False
    if any(a == "+" and b == "-" for a, b in zip(rule, rule[1:])):
        return False

    level = 0
    for sym in rule:
        if sym == "+":
            level += 1
        elif sym == "-":
            if level == 0:
                return False
            level -= 1
    return level == 0


def _random_rule(rng: random.Random, weights: list[tuple[str, int]]) -> list[str]:
    symbols = [s for s, _ in weights]
    counts = [w for _, w in weights]
    rule: list[str] = []
    while not valid_rule(rule):
        rule = rng.choices(symbols, weights=counts, k=rng.randint(4, 10))
    return rule


def generate_random_config(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    axiom = ["X"] + [rng.choice(CHOICES) for _ in range(rng.randint(0, 2))]

    weights = [
        ("F", rng.randint(1, 8)),
        ("X", rng.randint(2, 4)),
        ("Y", rng.randint(2, 4)),
        ("L", rng.randint(2, 6)),
        ("R", rng.randint(2, 6)),
        ("+", rng.randint(4, 8)),
        ("-", rng.randint(4, 8)),
    ]
    angle = rng.choice([15, 20, 25, 30, 36, 45, 60])

    cfg = {
        "name": "Random L-System",
        "iterations": rng.randint(3, 6),
        "rotate": 90,
        "seed": rng.randint(0, 2**32 - 1),
        "tokens": {
            "L": {"type": "rotate", "angle": angle},
            "R": {"type": "rotate", "angle": -angle},
            "F": {"type": "forward", "distance": rng.choice([5, 8, 10, 12, 15])},
            "+": {"type": "push"},
            "-": {"type": "pop"},
            "X": {"type": "nothing"},
            "Y": {"type": "nothing"},
        },
        "axiom": " ".join(axiom),
        "rules": [
            format_rule("X", _random_rule(rng, weights)),
            format_rule("Y", _random_rule(rng, weights)),
        ],
    }

    # Internal sanity check: generated config must always parse cleanly.
    parse_config(cfg)
    return cfg
