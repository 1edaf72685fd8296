"""JSON descriptions of turtle L-systems.

A document names every token with its drawing action, an axiom, the rules
in text form and how many generations to grow::

    {
      "name": "Koch curve",
      "iterations": 3,
      "tokens": {
        "F": {"type": "forward", "distance": 30},
        "+": {"type": "rotate", "angle": 90},
        "-": {"type": "rotate", "angle": -90}
      },
      "axiom": "F",
      "rules": ["F => F + F - F - F + F"]
    }
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass
from typing import Any, cast

from .distributions import Uniform
from .errors import ConfigError
from .system import LSystem
from .turtle import (
    Forward,
    Lattice,
    Move,
    Nothing,
    Pop,
    Push,
    Rotate,
    StochasticForward,
    StochasticRotate,
    TurtleAction,
    TurtleInterpreter,
    TurtleLSystemBuilder,
)

ACTION_TYPES = (
    "nothing",
    "rotate",
    "forward",
    "move",
    "push",
    "pop",
    "stochastic_rotate",
    "stochastic_forward",
)

LATTICES = {
    "grid": Lattice.grid,
    "equiangular": Lattice.equiangular,
}


# -------------------------
# Validation helpers
# -------------------------


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(f"config: {msg}")


def _kind(x: Any) -> str:
    if x is None:
        return "nothing"
    if isinstance(x, bool):
        return "a boolean"
    if isinstance(x, (dict, list)):
        return f"a JSON {'object' if isinstance(x, dict) else 'array'}"
    return f"{type(x).__name__} {x!r}"


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool),
        f"{path} must be a whole number, got {_kind(x)}",
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be text, got {_kind(x)}")
    return cast(str, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(
        isinstance(x, dict), f"{path} must be an object keyed by name, got {_kind(x)}"
    )
    return cast(dict[str, Any], x)


def _as_list(x: Any, path: str) -> list[Any]:
    _require(isinstance(x, list), f"{path} must be an array, got {_kind(x)}")
    return cast(list[Any], x)


# -------------------------
# Config model
# -------------------------


@dataclass(frozen=True)
class ActionSpec:
    type: str
    value: int = 0
    lower: int = 0
    upper: int = 0


@dataclass(frozen=True)
class SystemConfig:
    name: str
    iterations: int
    rotate: int
    seed: int | None
    # token name -> action, in registration order
    tokens: dict[str, ActionSpec]
    axiom: str
    rules: list[str]
    # key into LATTICES, None for free movement
    lattice: str | None = None


def parse_action(obj: Any, path: str) -> ActionSpec:
    obj = _as_dict(obj, path)
    atype = _as_str(obj.get("type"), f"{path}.type")
    _require(
        atype in ACTION_TYPES,
        f"{path}.type must be one of {', '.join(ACTION_TYPES)}; got {atype!r}",
    )

    if atype == "rotate":
        return ActionSpec(atype, value=_as_int(obj.get("angle"), f"{path}.angle"))

    if atype in ("forward", "move"):
        return ActionSpec(
            atype, value=_as_int(obj.get("distance"), f"{path}.distance")
        )

    if atype.startswith("stochastic_"):
        lower = _as_int(obj.get("lower"), f"{path}.lower")
        upper = _as_int(obj.get("upper"), f"{path}.upper")
        _require(lower <= upper, f"{path}.lower must be <= {path}.upper")
        return ActionSpec(atype, lower=lower, upper=upper)

    return ActionSpec(atype)


def parse_config(obj: dict[str, Any]) -> SystemConfig:
    obj = _as_dict(obj, "document")

    name = _as_str(obj.get("name", "L-System"), "name")

    iterations = _as_int(obj.get("iterations", 0), "iterations")
    _require(iterations >= 0, "iterations must be >= 0")

    rotate = _as_int(obj.get("rotate", 0), "rotate")

    lattice = obj.get("lattice")
    if lattice is not None:
        lattice = _as_str(lattice, "lattice")
        _require(
            lattice in LATTICES,
            f"lattice must be one of {', '.join(LATTICES)}; got {lattice!r}",
        )

    seed = obj.get("seed")
    if seed is not None:
        seed = _as_int(seed, "seed")

    tokens_obj = _as_dict(obj.get("tokens", {}), "tokens")
    _require(len(tokens_obj) > 0, "tokens must define at least one token")
    tokens: dict[str, ActionSpec] = {}
    for sym, action in tokens_obj.items():
        _require(
            len(sym) > 0 and not any(c.isspace() for c in sym),
            f"token name {sym!r} must be non-empty and contain no whitespace",
        )
        tokens[sym] = parse_action(action, f"tokens[{sym!r}]")

    axiom = _as_str(obj.get("axiom", ""), "axiom")
    _require(len(axiom.split()) > 0, "axiom must be non-empty")

    rules_obj = obj.get("rules", [])
    if isinstance(rules_obj, dict):
        # {"F": "F + F"} shorthand
        rules = [
            f"{lhs} => {_as_str(rhs, f'rules[{lhs!r}]')}"
            for lhs, rhs in rules_obj.items()
        ]
    else:
        rules = [
            _as_str(r, f"rules[{i}]") for i, r in enumerate(_as_list(rules_obj, "rules"))
        ]

    return SystemConfig(
        name=name,
        iterations=iterations,
        rotate=rotate,
        seed=seed,
        tokens=tokens,
        axiom=axiom,
        rules=rules,
        lattice=lattice,
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except UnicodeDecodeError as e:
            raise ConfigError(f"{path} is not UTF-8 text: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


# -------------------------
# Building
# -------------------------


def make_action(spec: ActionSpec, rng: random.Random) -> TurtleAction:
    if spec.type == "rotate":
        return Rotate(spec.value)
    if spec.type == "forward":
        return Forward(spec.value)
    if spec.type == "move":
        return Move(spec.value)
    if spec.type == "push":
        return Push()
    if spec.type == "pop":
        return Pop()
    if spec.type == "stochastic_rotate":
        return StochasticRotate(Uniform(spec.lower, spec.upper, rng.getrandbits(64)))
    if spec.type == "stochastic_forward":
        return StochasticForward(Uniform(spec.lower, spec.upper, rng.getrandbits(64)))
    return Nothing()


def build_system(cfg: SystemConfig) -> tuple[LSystem, TurtleInterpreter]:
    """Build the system and interpreter; the system is not stepped yet."""
    # One seed drives every sampler so a seeded config renders identically.
    rng = random.Random(cfg.seed)
    builder = TurtleLSystemBuilder().rotate(cfg.rotate)
    if cfg.lattice is not None:
        builder.lattice(LATTICES[cfg.lattice]())
    for sym, spec in cfg.tokens.items():
        builder.token(sym, make_action(spec, rng))
    builder.axiom(cfg.axiom)
    for rule in cfg.rules:
        builder.rule(rule)
    return builder.finish()
