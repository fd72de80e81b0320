"""Automatic currying, partial application and function composition."""

from autocurry.aliasing import RawSlots, Ref
from autocurry.arity import ArityFunction, Parameter, ParameterKind
from autocurry.composition import (
    backward_compose,
    compose,
    forward_compose,
    identity,
    pipe,
)
from autocurry.curried import CurriedFunction, curry
from autocurry.errors import (
    AliasingUnsupportedError,
    CurryError,
    DeclarationError,
    OverflowError,
)

version = '0.1.0'

__all__ = [
    'AliasingUnsupportedError',
    'ArityFunction',
    'CurriedFunction',
    'CurryError',
    'DeclarationError',
    'OverflowError',
    'Parameter',
    'ParameterKind',
    'RawSlots',
    'Ref',
    'backward_compose',
    'compose',
    'curry',
    'forward_compose',
    'identity',
    'pipe',
    'version',
]
