"""Turtle interpretation of L-system states.

A token sequence is read left to right against an :class:`ActionTable`;
every forward move emits one :class:`Segment`; a :class:`Move` repositions
the turtle without drawing. Heading is kept in integer degrees, 0 pointing
along +X and positive angles turning left. :class:`LatticeInterpreter` runs the
same machine over the integer points of a :class:`Lattice`.
"""

from __future__ import annotations

import math
from collections.abc import Generator, Iterable, Iterator
from dataclasses import dataclass
from typing import Union

from .alphabet import TokenId
from .builder import LSystemBuilder
from .distributions import Distribution
from .errors import StackUnderflow
from .grammar import parse_rule, parse_sequence
from .system import LSystem

Point = tuple[float, float]


# -------------------------
# Actions
# -------------------------


@dataclass(frozen=True)
class Nothing:
    pass


@dataclass(frozen=True)
class Rotate:
    angle: int


@dataclass(frozen=True)
class Forward:
    distance: int


@dataclass(frozen=True)
class Move:
    """Forward with the pen up: the turtle moves but draws nothing."""

    distance: int


@dataclass(frozen=True)
class Push:
    pass


@dataclass(frozen=True)
class Pop:
    pass


@dataclass(frozen=True)
class StochasticRotate:
    distribution: Distribution


@dataclass(frozen=True)
class StochasticForward:
    distribution: Distribution


TurtleAction = Union[
    Nothing, Rotate, Forward, Move, Push, Pop, StochasticRotate, StochasticForward
]

_NOTHING = Nothing()


def clone_action(action: TurtleAction) -> TurtleAction:
    if isinstance(action, StochasticRotate):
        return StochasticRotate(action.distribution.clone())
    if isinstance(action, StochasticForward):
        return StochasticForward(action.distribution.clone())
    return action


class ActionTable:
    def __init__(self) -> None:
        self._actions: dict[TokenId, TurtleAction] = {}

    def bind(self, token: TokenId, action: TurtleAction) -> None:
        self._actions[token] = action

    def bind_many(self, tokens: Iterable[TokenId], action: TurtleAction) -> None:
        for token in tokens:
            self._actions[token] = action

    def action_for(self, token: TokenId) -> TurtleAction:
        return self._actions.get(token, _NOTHING)

    def clone(self) -> ActionTable:
        """Copy the table, giving stochastic actions their own samplers."""
        table = ActionTable()
        table._actions = {t: clone_action(a) for t, a in self._actions.items()}
        return table

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[TokenId]:
        return iter(self._actions)


# -------------------------
# Interpreter
# -------------------------


@dataclass(frozen=True)
class TurtleState:
    x: float
    y: float
    heading: int

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class Segment:
    start: Point
    end: Point

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (*self.start, *self.end)


def _tokens_of(source: LSystem | Iterable[TokenId]) -> Iterable[TokenId]:
    if isinstance(source, LSystem):
        return source.state
    return source


class TurtleInterpreter:
    """Stack machine turning token sequences into line segments.

    The interpreter keeps no per-run state on the instance: every call to
    :meth:`interpret` starts from the origin with an empty stack.
    """

    def __init__(self, actions: ActionTable, *, rotate: int = 0) -> None:
        self.actions = actions
        self.rotate = rotate

    def initial_state(self) -> TurtleState:
        return TurtleState(0.0, 0.0, self.rotate % 360)

    def _turn(self, heading: int, angle: int) -> int:
        return (heading + angle) % 360

    def _advance(self, x: float, y: float, heading: int, dist: int) -> Point:
        rad = math.radians(heading)
        return (x + dist * math.cos(rad), y + dist * math.sin(rad))

    def _place(self, x: float, y: float) -> Point:
        return (x, y)

    def interpret(
        self, source: LSystem | Iterable[TokenId]
    ) -> Generator[Segment, None, TurtleState]:
        """Yield segments in token order; the generator returns the final state.

        Raises :class:`StackUnderflow` on a pop with nothing saved.
        """
        start = self.initial_state()
        x, y, h = start.x, start.y, start.heading
        stack: list[TurtleState] = []

        for token in _tokens_of(source):
            action = self.actions.action_for(token)

            if isinstance(action, Nothing):
                continue

            if isinstance(action, (Rotate, StochasticRotate)):
                if isinstance(action, Rotate):
                    angle = action.angle
                else:
                    angle = action.distribution.sample()
                h = self._turn(h, angle)
                continue

            if isinstance(action, Push):
                stack.append(TurtleState(x, y, h))
                continue

            if isinstance(action, Pop):
                if not stack:
                    raise StackUnderflow(token)
                st = stack.pop()
                x, y, h = st.x, st.y, st.heading
                continue

            if isinstance(action, Move):
                x, y = self._advance(x, y, h, action.distance)
                continue

            if isinstance(action, (Forward, StochasticForward)):
                if isinstance(action, Forward):
                    dist = action.distance
                else:
                    dist = action.distribution.sample()
                nx, ny = self._advance(x, y, h, dist)
                yield Segment(self._place(x, y), self._place(nx, ny))
                x, y = nx, ny
                continue

            raise TypeError(f"unsupported turtle action {action!r} for token {token}")

        return TurtleState(x, y, h)

    def segments(self, source: LSystem | Iterable[TokenId]) -> list[Segment]:
        return list(self.interpret(source))

    def lines(
        self, source: LSystem | Iterable[TokenId]
    ) -> list[tuple[float, float, float, float]]:
        return [seg.as_tuple() for seg in self.interpret(source)]

    def final_state(self, source: LSystem | Iterable[TokenId]) -> TurtleState:
        run = self.interpret(source)
        while True:
            try:
                next(run)
            except StopIteration as stop:
                return stop.value


def bounds(segments: Iterable[Segment]) -> tuple[float, float, float, float]:
    """Return ``(min_x, min_y, max_x, max_y)`` over all segment endpoints."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for seg in segments:
        for x, y in (seg.start, seg.end):
            if x < min_x:
                min_x = x
            if x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            if y > max_y:
                max_y = y
    if min_x == math.inf:
        raise ValueError("bounds() of an empty segment sequence")
    return (min_x, min_y, max_x, max_y)


# -------------------------
# Lattice
# -------------------------

# Lattice steps for each heading, turning left one entry at a time.
GRID_HEADINGS: tuple[tuple[int, int], ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))
HEX_HEADINGS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (0, -1),
    (1, -1),
)


@dataclass(frozen=True)
class Lattice:
    """Two basis vectors spanning the plane.

    Lattice point ``(i, j)`` sits at ``i * x_direction + j * y_direction``.
    ``headings`` lists the lattice step taken by one unit of forward motion
    for each heading a :class:`LatticeInterpreter` can face.
    """

    x_direction: Point
    y_direction: Point
    headings: tuple[tuple[int, int], ...] = GRID_HEADINGS

    def point(self, i: int, j: int) -> Point:
        return (
            i * self.x_direction[0] + j * self.y_direction[0],
            i * self.x_direction[1] + j * self.y_direction[1],
        )

    @classmethod
    def grid(cls) -> Lattice:
        return cls((1.0, 0.0), (0.0, 1.0))

    @classmethod
    def by_angle(
        cls,
        angle: float,
        headings: tuple[tuple[int, int], ...] = GRID_HEADINGS,
    ) -> Lattice:
        """Unit lattice whose second axis sits ``angle`` degrees from the first."""
        rad = math.radians(angle)
        return cls((1.0, 0.0), (math.cos(rad), math.sin(rad)), headings)

    @classmethod
    def equiangular(cls) -> Lattice:
        """Triangular lattice; the six headings are 60 degrees apart."""
        return cls.by_angle(60, HEX_HEADINGS)


class LatticeInterpreter(TurtleInterpreter):
    """Turtle confined to the points of a :class:`Lattice`.

    Headings are indexes into ``lattice.headings``, so ``Rotate(1)`` turns one
    heading to the left. Forward distances count lattice steps. Positions and
    saved states stay in integer lattice coordinates; only emitted segments
    are mapped into the plane.
    """

    def __init__(
        self, actions: ActionTable, lattice: Lattice, *, rotate: int = 0
    ) -> None:
        if not lattice.headings:
            raise ValueError("lattice needs at least one heading")
        super().__init__(actions, rotate=rotate)
        self.lattice = lattice

    def initial_state(self) -> TurtleState:
        return TurtleState(0, 0, self.rotate % len(self.lattice.headings))

    def _turn(self, heading: int, angle: int) -> int:
        return (heading + angle) % len(self.lattice.headings)

    def _advance(self, x: float, y: float, heading: int, dist: int) -> Point:
        dx, dy = self.lattice.headings[heading]
        return (x + dist * dx, y + dist * dy)

    def _place(self, x: float, y: float) -> Point:
        return self.lattice.point(int(x), int(y))


# -------------------------
# Builder
# -------------------------


class TurtleLSystemBuilder:
    """Builds an :class:`LSystem` together with its turtle interpreter.

    Tokens are named once, with their drawing action, and then referred to by
    name in the axiom and in rule text::

        builder = TurtleLSystemBuilder()
        (
            builder.token("F", Forward(30))
            .token("+", Rotate(90))
            .token("-", Rotate(-90))
            .axiom("F")
            .rule("F => F + F - F - F + F")
        )
        system, turtle = builder.finish()
    """

    def __init__(self) -> None:
        self._builder = LSystemBuilder()
        self._actions = ActionTable()
        self._rotate = 0
        self._lattice: Lattice | None = None

    def _lookup(self, name: str) -> TokenId:
        return self._builder.alphabet.id_of(name)

    def token(
        self, name: str, action: TurtleAction | None = None
    ) -> TurtleLSystemBuilder:
        token = self._builder.token(name)
        self._actions.bind(token, _NOTHING if action is None else action)
        return self

    def bind(self, name: str, action: TurtleAction) -> TurtleLSystemBuilder:
        self._actions.bind(self._lookup(name), action)
        return self

    def rotate(self, angle: int) -> TurtleLSystemBuilder:
        """Set the heading the turtle starts with."""
        self._rotate = angle
        return self

    def lattice(self, lattice: Lattice | None) -> TurtleLSystemBuilder:
        """Confine the turtle to ``lattice``; ``None`` restores free movement."""
        self._lattice = lattice
        return self

    def axiom(self, text: str) -> TurtleLSystemBuilder:
        self._builder.axiom(parse_sequence(text, self._lookup))
        return self

    def rule(self, text: str) -> TurtleLSystemBuilder:
        lhs, rhs = parse_rule(text, self._lookup)
        self._builder.transformation_rule(lhs, rhs)
        return self

    def finish(self) -> tuple[LSystem, TurtleInterpreter]:
        system = self._builder.finish()
        actions = self._actions.clone()
        if self._lattice is not None:
            return system, LatticeInterpreter(
                actions, self._lattice, rotate=self._rotate
            )
        return system, TurtleInterpreter(actions, rotate=self._rotate)
