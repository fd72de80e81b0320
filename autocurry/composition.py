"""Combinators for chaining curried functions.

Every composite is itself a CurriedFunction of arity 1 whose body threads its
argument through a flat tuple of stages. Each stage is called through its own
call contract, so a partially applied stage receives the piped value as its
next argument."""

from typing import Any, Callable, Iterable, Tuple

from autocurry.arity import ArityFunction, Parameter
from autocurry.curried import CurriedFunction, curry


class Pipeline:
    __slots__ = ('_stages',)

    def __init__(self, stages: Iterable[Callable[..., Any]]) -> None:
        stages = tuple(stages)
        for stage in stages:
            if not callable(stage):
                raise TypeError(
                    f'cannot compose {stage!r}, it is not callable'
                )
        self._stages = stages

    @property
    def stages(self) -> Tuple[Callable[..., Any], ...]:
        return self._stages

    def __call__(self, value: object) -> Any:
        for stage in self._stages:
            value = stage(value)
        return value

    def __repr__(self) -> str:
        return 'compose({})'.format(', '.join(map(_stage_name, self._stages)))


def _stage_name(stage: Callable[..., Any]) -> str:
    if isinstance(stage, CurriedFunction):
        return repr(stage)
    return getattr(stage, '__qualname__', None) or repr(stage)


def _stages_of(f: Callable[..., Any]) -> Tuple[Callable[..., Any], ...]:
    if isinstance(f, CurriedFunction) and isinstance(f.target.body, Pipeline):
        return f.target.body.stages
    return (f,)


def _composite(stages: Iterable[Callable[..., Any]]) -> CurriedFunction:
    target = ArityFunction(Pipeline(stages), (Parameter('value'),))
    return CurriedFunction(target)


def forward_compose(
    f: Callable[..., Any], g: Callable[..., Any]
) -> CurriedFunction:
    """h(x) == g(f(x))"""
    return _composite(_stages_of(f) + _stages_of(g))


def backward_compose(
    f: Callable[..., Any], g: Callable[..., Any]
) -> CurriedFunction:
    """h(x) == f(g(x))"""
    return forward_compose(g, f)


def compose(*functions: Callable[..., Any]) -> CurriedFunction:
    """Forward composition of any number of functions.

    compose(f, g, h)(x) == h(g(f(x))), and compose() is identity."""
    if not functions:
        return identity
    stages: Tuple[Callable[..., Any], ...] = ()
    for f in functions:
        stages += _stages_of(f)
    return _composite(stages)


def pipe(value: object, f: Callable[..., Any]) -> Any:
    """Apply f to value now. The result is a CurriedFunction when f still
    needs more than one argument."""
    if not callable(f):
        raise TypeError(
            f'cannot pipe {value!r} into {f!r}, it is not callable'
        )
    return f(value)


@curry
def identity(value: object) -> object:
    return value
