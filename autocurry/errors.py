from __future__ import annotations
import builtins
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from autocurry.curried import CurriedFunction


class CurryError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class DeclarationError(CurryError, builtins.ValueError):
    """Raised when an ArityFunction is declared with a malformed parameter
    list.

    The error is local to the declaration being built; other curried
    functions are unaffected."""


class OverflowError(CurryError, builtins.TypeError):
    """More arguments were supplied than the function can absorb.

    function is the curried function that was called. surplus is the tuple of
    arguments left over after the final invocation."""

    def __init__(
        self, message: str, function: CurriedFunction, surplus: tuple
    ) -> None:
        super().__init__(message)
        self.function = function
        self.surplus = surplus

    def __repr__(self) -> str:
        return f'OverflowError({self.message!r}, surplus={self.surplus!r})'


class AliasingUnsupportedError(CurryError, builtins.TypeError):
    def __init__(self, index: int) -> None:
        super().__init__(
            f'argument {index} was not passed in a Ref, so it cannot be '
            'written back to the caller'
        )
        self.index = index


class CurryRuntimeError(RuntimeError):
    def __init__(self, filename: str) -> None:
        super().__init__(filename)
        self._filename = filename

    @property
    def filename(self) -> str:
        return self._filename

    def __str__(self) -> str:
        return 'Error while running {}: {!r}'.format(
            self._filename, self.__cause__
        )
