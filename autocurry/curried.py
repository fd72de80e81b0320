"""The curried call contract.

A CurriedFunction holds an ArityFunction and the positional arguments bound
so far. Each call either accumulates more arguments, invokes the body once
every scalar slot is filled, or, when there are more arguments than slots and
nothing to collect them, hands the surplus to the body's result."""

import functools
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from typing_extensions import Never

import autocurry.logging
from autocurry.arity import ArityFunction
from autocurry.errors import DeclarationError, OverflowError


_logger = autocurry.logging.get_logger(__name__)


class CurriedFunction:
    """A function that binds its arguments progressively, left to right.

    Instances are never mutated. A call that does not fill every scalar slot
    returns a new instance; the body runs as soon as it does."""

    def __init__(
        self,
        target: ArityFunction,
        bound: Tuple[object, ...] = (),
        keywords: Optional[Mapping[str, object]] = None,
    ) -> None:
        if len(bound) >= target.arity:
            raise ValueError(
                f'{target.name} takes {target.arity} arguments, so it cannot '
                f'wait on {len(bound)} bound ones'
            )
        self._target = target
        self._bound = tuple(bound)
        self._keywords = MappingProxyType(dict(keywords or {}))
        # __wrapped__ lets inspect.signature see the body's parameters
        functools.update_wrapper(self, target.body, updated=())

    @property
    def target(self) -> ArityFunction:
        return self._target

    @property
    def bound(self) -> Tuple[object, ...]:
        return self._bound

    @property
    def keywords(self) -> Mapping[str, object]:
        return self._keywords

    @property
    def arity(self) -> int:
        return self._target.arity

    @property
    def remaining(self) -> int:
        return self._target.arity - len(self._bound)

    def __call__(self, *args: object, **keywords: object) -> Any:
        if not args and not keywords:
            return self
        total = self._bound + args
        merged = {**self._keywords, **keywords}
        if len(total) < self._target.arity:
            _logger.debug(
                '{!r} accumulated {} of {} arguments',
                self,
                len(total),
                self._target.arity,
            )
            return CurriedFunction(self._target, total, merged)
        return _dispatch(self, total, merged)

    def __rshift__(self, other: object) -> Any:
        if not callable(other):
            return NotImplemented
        import autocurry.composition

        return autocurry.composition.forward_compose(self, other)

    def __rrshift__(self, other: object) -> Any:
        if not callable(other):
            return NotImplemented
        import autocurry.composition

        return autocurry.composition.forward_compose(other, self)

    def __lshift__(self, other: object) -> Any:
        if not callable(other):
            return NotImplemented
        import autocurry.composition

        return autocurry.composition.backward_compose(self, other)

    def __rlshift__(self, other: object) -> Any:
        if not callable(other):
            return NotImplemented
        import autocurry.composition

        return autocurry.composition.backward_compose(other, self)

    def __ror__(self, value: object) -> Any:
        import autocurry.composition

        return autocurry.composition.pipe(value, self)

    def __repr__(self) -> str:
        arguments = [repr(arg) for arg in self._bound]
        arguments += [f'{k}={v!r}' for k, v in self._keywords.items()]
        return '<curried {}({}) remaining={}>'.format(
            self._target.name, ', '.join(arguments), self.remaining
        )


def _dispatch(
    function: CurriedFunction,
    total: Tuple[object, ...],
    keywords: Dict[str, object],
) -> Any:
    target = function.target
    surplus = total[target.arity :]
    if target.collector_slots and not target.absorbs(len(surplus)):
        _overflow(
            function,
            surplus,
            f'{target.name} collects surplus arguments as key/value '
            f'pairs, but {len(surplus)} of them were given',
        )
    slots_parameter = target.slots_parameter
    if slots_parameter is not None and (
        slots_parameter in target.claimed_keywords(total, keywords)
    ):
        _overflow(
            function,
            surplus,
            f'{target.name} passes its raw slots as {slots_parameter!r}, '
            'which was also given as an argument',
        )
    if target.collector_slots:
        return invoke(target, total, keywords)
    result = invoke(target, total[: target.arity], keywords)
    if not surplus:
        return result
    if not callable(result):
        _overflow(
            function,
            surplus,
            f'{target.name} takes {target.arity} arguments but '
            f'{len(total)} were given, and its result {result!r} is not '
            f'callable to take the remaining {len(surplus)}',
        )
    _logger.debug(
        'passing {} surplus arguments of {} on to {!r}',
        len(surplus),
        target.name,
        result,
    )
    return result(*surplus)


def _overflow(
    function: CurriedFunction, surplus: Tuple[object, ...], message: str
) -> Never:
    _logger.debug('{!r} overflowed by {} arguments', function, len(surplus))
    raise OverflowError(message, function, surplus)


def invoke(
    target: ArityFunction,
    values: Tuple[object, ...],
    keywords: Mapping[str, object],
) -> Any:
    """Run the body of target once on a complete argument list."""
    args, kwargs = target.bind(values, dict(keywords))
    _logger.debug('invoking {} with {} arguments', target.name, len(values))
    return target.body(*args, **kwargs)


def start(target: ArityFunction) -> Any:
    """Make the curried entry point for target.

    A target without scalar slots has nothing to wait for, so its body runs
    right away and the result is returned instead of a function."""
    if target.arity == 0:
        _logger.debug('{} takes no arguments, invoking it now', target.name)
        return invoke(target, (), {})
    return CurriedFunction(target)


def curry(
    fn: Optional[Callable[..., Any]] = None,
    /,
    *,
    arity: Optional[int] = None,
    slots: Optional[str] = None,
) -> Any:
    """Decorator: curry fn.

    The argument slots are read from fn's signature unless arity is given,
    which is useful for callables that cannot be inspected. slots names a
    keyword-only parameter that receives the RawSlots view of each final
    invocation. fn may also be an ArityFunction built by hand.

    Examples::

        @curry
        def three(one, two, three):
            return one + two * three

        assert three(1, 2, 3) == 7
        assert three(1)(2, 3) == 7
        assert three(1)(2)(3) == 7
    """
    if fn is None:
        return lambda fn: curry(fn, arity=arity, slots=slots)
    if isinstance(fn, CurriedFunction):
        if arity is None and slots is None:
            return fn
        if fn.bound or fn.keywords:
            raise DeclarationError(
                f'{fn!r} already has arguments bound, so it cannot be '
                'curried again with new options'
            )
        fn = fn.target.body
    if isinstance(fn, ArityFunction):
        target = fn
    elif arity is not None:
        target = ArityFunction.of_arity(fn, arity, slots)
    else:
        target = ArityFunction.from_callable(fn, slots)
    return start(target)
