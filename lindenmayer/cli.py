"""Command line front end.

Run:
  python -m lindenmayer expand config.json
  python -m lindenmayer lines config.json --iterations 5
  python -m lindenmayer validate config.json
  python -m lindenmayer random --seed 123
"""

from __future__ import annotations

import argparse
import itertools
import json
import logging
import sys

from .config import build_system, load_json, parse_config
from .errors import ConfigError, LSystemError
from .randomconfig import generate_random_config
from .system import LSystem
from .turtle import TurtleInterpreter

HELP_EPILOG = r"""
INPUT JSON SYNTAX

  name: string (optional)
  iterations: integer >= 0 (default 0)
      Generations to grow before printing.
  rotate: integer degrees (default 0)
      Starting heading of the turtle; 0 = +X, 90 = +Y.
  lattice: "grid" or "equiangular" (optional)
      Confine the turtle to lattice points. Angles then count headings
      (4 on the grid, 6 on the equiangular lattice) and distances count
      lattice steps.
  seed: integer (optional)
      Seeds the stochastic actions so output is repeatable.
  tokens: object mapping token name -> action object (required)
      Registration order follows the object order. Names must not contain
      whitespace.

      {"type": "nothing"}
      {"type": "rotate", "angle": <int degrees, positive = left>}
      {"type": "forward", "distance": <int>}
      {"type": "move", "distance": <int>}      (pen up: moves, draws nothing)
      {"type": "push"}
      {"type": "pop"}
      {"type": "stochastic_rotate", "lower": <int>, "upper": <int>}
      {"type": "stochastic_forward", "lower": <int>, "upper": <int>}

  axiom: string (required)
      Whitespace-separated token names, e.g. "F X".
  rules: array of rule strings, or object mapping name -> right-hand side
      "X => X + Y F +"   (tokens separated by whitespace)

Example (Koch curve):

    {
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


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lindenmayer",
        description="Grow L-systems and trace them with a turtle.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pe = sub.add_parser("expand", help="Print the grown state as text.")
    pe.add_argument("config", help="Path to the input JSON config.")
    pe.add_argument(
        "--iterations", type=int, default=None, help="Override config iterations."
    )

    pl = sub.add_parser(
        "lines", help="Print the turtle's line segments as JSON [x1, y1, x2, y2]."
    )
    pl.add_argument("config", help="Path to the input JSON config.")
    pl.add_argument(
        "--iterations", type=int, default=None, help="Override config iterations."
    )

    pv = sub.add_parser(
        "validate", help="Validate a JSON config and print a brief summary."
    )
    pv.add_argument("config", help="Path to the input JSON config.")

    pg = sub.add_parser("random", help="Print a random JSON config.")
    pg.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    return p


# -------------------------
# Commands
# -------------------------


def _grown(
    config_path: str, iterations: int | None
) -> tuple[LSystem, TurtleInterpreter]:
    cfg = parse_config(load_json(config_path))
    if iterations is not None and iterations < 0:
        raise ConfigError("--iterations must be >= 0")
    system, turtle = build_system(cfg)
    system.step_by(cfg.iterations if iterations is None else iterations)
    return system, turtle


def cmd_expand(config_path: str, iterations: int | None) -> None:
    system, _ = _grown(config_path, iterations)
    print(system.render())


def cmd_lines(config_path: str, iterations: int | None) -> None:
    system, turtle = _grown(config_path, iterations)
    json.dump([list(line) for line in turtle.lines(system)], sys.stdout)
    sys.stdout.write("\n")


_VALIDATE_SYMBOL_LIMIT = 10_000


def cmd_validate(config_path: str) -> None:
    cfg = parse_config(load_json(config_path))
    system, turtle = build_system(cfg)

    print(f"name: {cfg.name}")
    print(f"tokens: {len(system.alphabet)}")
    print(f"axiom length: {len(system.axiom)}")
    print(f"rules: {len(system.rules)}")
    print(f"iterations: {cfg.iterations}")
    print(f"rotate: {cfg.rotate}")
    print(f"lattice: {cfg.lattice or 'none'}")

    # Sample the leading symbols of the target generation so exponential
    # systems stay cheap to validate.
    bounded = list(
        itertools.islice(system.expand(cfg.iterations), _VALIDATE_SYMBOL_LIMIT + 1)
    )
    truncated = len(bounded) > _VALIDATE_SYMBOL_LIMIT
    del bounded[_VALIDATE_SYMBOL_LIMIT:]
    segments = turtle.segments(bounded)

    sym_label = f"{len(bounded)}+" if truncated else str(len(bounded))
    print(f"symbols (sampled): {sym_label}")
    print(f"segments: {len(segments)}")
    if truncated:
        print(
            f"warning: expansion exceeds {_VALIDATE_SYMBOL_LIMIT} symbols; "
            "geometry stats are based on the first portion only"
        )


def cmd_random(seed: int | None) -> None:
    json.dump(generate_random_config(seed), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.cmd == "expand":
            cmd_expand(args.config, args.iterations)
        elif args.cmd == "lines":
            cmd_lines(args.config, args.iterations)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "random":
            cmd_random(args.seed)
        else:
            raise AssertionError("unreachable")
    except LSystemError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
