"""Lindenmayer systems with a stack-based turtle interpreter.

Algae example::

    from lindenmayer import LSystemBuilder

    builder = LSystemBuilder()
    a = builder.token("A")
    b = builder.token("B")
    builder.axiom([a])
    builder.transformation_rule(a, [a, b])  # A -> AB
    builder.transformation_rule(b, [a])     # B -> A

    system = builder.finish()
    system.step_by(3)
    assert system.render() == "ABAAB"
"""

from .alphabet import Alphabet, Token, TokenId
from .builder import LSystemBuilder
from .distributions import Constant, Distribution, Uniform
from .errors import (
    ConfigError,
    DuplicateToken,
    EmptyAxiom,
    FrozenAlphabet,
    IncompleteConfiguration,
    InvalidToken,
    LSystemError,
    ParseError,
    StackUnderflow,
    UnknownToken,
)
from .grammar import parse_rule, parse_sequence
from .rules import RuleTable
from .system import LSystem
from .turtle import (
    ActionTable,
    Forward,
    Lattice,
    LatticeInterpreter,
    Move,
    Nothing,
    Pop,
    Push,
    Rotate,
    Segment,
    StochasticForward,
    StochasticRotate,
    TurtleAction,
    TurtleInterpreter,
    TurtleLSystemBuilder,
    TurtleState,
    bounds,
)

__version__ = "0.1.0"

__all__ = [
    "ActionTable",
    "Alphabet",
    "ConfigError",
    "Constant",
    "Distribution",
    "DuplicateToken",
    "EmptyAxiom",
    "Forward",
    "FrozenAlphabet",
    "IncompleteConfiguration",
    "InvalidToken",
    "LSystem",
    "LSystemBuilder",
    "LSystemError",
    "Lattice",
    "LatticeInterpreter",
    "Move",
    "Nothing",
    "ParseError",
    "Pop",
    "Push",
    "Rotate",
    "RuleTable",
    "Segment",
    "StackUnderflow",
    "StochasticForward",
    "StochasticRotate",
    "Token",
    "TokenId",
    "TurtleAction",
    "TurtleInterpreter",
    "TurtleLSystemBuilder",
    "TurtleState",
    "Uniform",
    "UnknownToken",
    "bounds",
    "parse_rule",
    "parse_sequence",
]
