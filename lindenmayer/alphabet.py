from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .errors import DuplicateToken, FrozenAlphabet, InvalidToken, UnknownToken

TokenId = int


@dataclass(frozen=True)
class Token:
    id: TokenId
    name: str

    def __str__(self) -> str:
        return self.name


class Alphabet:
    """Interns token names to dense integer ids.

    Ids are handed out in registration order starting at 0 and are never
    reused. Once frozen, no further names can be registered.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: list[str] = []
        self._ids: dict[str, TokenId] = {}
        self._frozen = False
        for name in names:
            self.register(name)

    def register(self, name: str) -> TokenId:
        if self._frozen:
            raise FrozenAlphabet(f"cannot register {name!r}: alphabet is frozen")
        if not isinstance(name, str) or not name or any(c.isspace() for c in name):
            raise InvalidToken(name)
        if name in self._ids:
            raise DuplicateToken(name)
        token = len(self._names)
        self._names.append(name)
        self._ids[name] = token
        return token

    def name_of(self, token: TokenId) -> str:
        if not self.is_valid(token):
            raise UnknownToken(token)
        return self._names[token]

    def id_of(self, name: str) -> TokenId:
        try:
            return self._ids[name]
        except KeyError:
            raise UnknownToken(name) from None

    def is_valid(self, token: TokenId) -> bool:
        return (
            isinstance(token, int)
            and not isinstance(token, bool)
            and 0 <= token < len(self._names)
        )

    def validate(self, tokens: Iterable[TokenId]) -> tuple[TokenId, ...]:
        """Return ``tokens`` as a tuple, raising on the first foreign id."""
        out = tuple(tokens)
        for token in out:
            if not self.is_valid(token):
                raise UnknownToken(token)
        return out

    def render(self, tokens: Iterable[TokenId]) -> str:
        names = self._names
        return "".join(names[t] for t in tokens)

    def freeze(self) -> Alphabet:
        """Return a frozen copy; this alphabet stays writable."""
        frozen = Alphabet(self._names)
        frozen._frozen = True
        return frozen

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def __iter__(self) -> Iterator[Token]:
        for token, name in enumerate(self._names):
            yield Token(token, name)

    def __repr__(self) -> str:
        return f"Alphabet({self._names!r})"
