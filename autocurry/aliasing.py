"""Reference cells and the raw-slot view handed to bodies that ask for it.

Python has no pass-by-reference, so a caller who wants a body to write back
into its storage passes a Ref. Bodies that declare a slots parameter see the
call's arguments twice: their named parameters hold plain values, and the
RawSlots view writes through any Ref the caller supplied."""

from typing import Iterator, Sequence, overload

from autocurry.errors import AliasingUnsupportedError


class Ref[T]:
    """A mutable cell owned by the caller."""

    __slots__ = ('value',)

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f'Ref({self.value!r})'


def unwrap(value: object) -> object:
    if isinstance(value, Ref):
        return value.value
    return value


class RawSlots(Sequence[object]):
    """A fixed-length view over the arguments of one final invocation.

    Indexing reads the current value of a slot. Assigning to a slot whose
    argument was passed as a Ref updates that Ref, so the caller sees the new
    value after the call returns. Assigning to any other slot raises
    AliasingUnsupportedError."""

    def __init__(self, arguments: Sequence[object]) -> None:
        self._arguments = tuple(arguments)

    @overload
    def __getitem__(self, i: int) -> object:
        pass

    @overload
    def __getitem__(self, i: slice) -> Sequence[object]:
        pass

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [unwrap(arg) for arg in self._arguments[i]]
        return unwrap(self._arguments[i])

    def __setitem__(self, i: int, value: object) -> None:
        cell = self._arguments[i]
        if not isinstance(cell, Ref):
            raise AliasingUnsupportedError(self._normalize(i))
        cell.value = value

    def __len__(self) -> int:
        return len(self._arguments)

    def __iter__(self) -> Iterator[object]:
        return map(unwrap, self._arguments)

    def is_addressable(self, i: int) -> bool:
        return isinstance(self._arguments[i], Ref)

    def _normalize(self, i: int) -> int:
        return i + len(self._arguments) if i < 0 else i

    def __repr__(self) -> str:
        return f'RawSlots({list(self._arguments)!r})'
