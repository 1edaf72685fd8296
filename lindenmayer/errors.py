"""Exception types raised while building and running L-systems."""

from __future__ import annotations


class LSystemError(ValueError):
    pass


class DuplicateToken(LSystemError):
    def __init__(self, name: str) -> None:
        super().__init__(f"token {name!r} is already registered")
        self.name = name


class InvalidToken(LSystemError):
    def __init__(self, name: str) -> None:
        super().__init__(f"attempted to construct invalid token {name!r}")
        self.name = name


class UnknownToken(LSystemError):
    def __init__(self, token: int | str) -> None:
        super().__init__(f"attempted to use unknown token {token!r}")
        self.token = token


class FrozenAlphabet(LSystemError):
    pass


class EmptyAxiom(LSystemError):
    def __init__(self) -> None:
        super().__init__("axiom must contain at least one token")


class IncompleteConfiguration(LSystemError):
    pass


class ParseError(LSystemError):
    def __init__(self, rule: str, reason: str) -> None:
        super().__init__(f"invalid rule {rule!r}: {reason}")
        self.rule = rule
        self.reason = reason


class StackUnderflow(LSystemError):
    def __init__(self, token: int) -> None:
        super().__init__(f"pop for token {token} encountered with empty stack")
        self.token = token


class ConfigError(LSystemError):
    pass
