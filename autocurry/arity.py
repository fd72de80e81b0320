"""Descriptors pairing a callable body with its argument slots."""

from enum import Enum
import inspect
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from autocurry.aliasing import RawSlots, unwrap
from autocurry.errors import DeclarationError


class ParameterKind(Enum):
    SCALAR = 'scalar'
    # *args
    POSITIONAL_COLLECTOR = 'positional collector'
    # **kwargs
    MAPPING_COLLECTOR = 'mapping collector'


class Parameter:
    __slots__ = ('_name', '_kind')

    def __init__(
        self, name: str, kind: ParameterKind = ParameterKind.SCALAR
    ) -> None:
        if not name.isidentifier():
            raise DeclarationError(
                f'{name!r} is not a valid parameter name'
            )
        self._name = name
        self._kind = kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> ParameterKind:
        return self._kind

    @property
    def is_collector(self) -> bool:
        return self._kind is not ParameterKind.SCALAR

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self._name, self._kind) == (other._name, other._kind)

    def __hash__(self) -> int:
        return hash((self._name, self._kind))

    def __repr__(self) -> str:
        if self._kind is ParameterKind.SCALAR:
            return f'Parameter({self._name!r})'
        return f'Parameter({self._name!r}, {self._kind})'

    def __str__(self) -> str:
        prefix = {
            ParameterKind.SCALAR: '',
            ParameterKind.POSITIONAL_COLLECTOR: '*',
            ParameterKind.MAPPING_COLLECTOR: '**',
        }[self._kind]
        return prefix + self._name


class ArityFunction:
    """A body together with the argument slots it needs before it can run.

    arity counts the scalar parameters only. A collector never blocks
    invocation: once every scalar slot has a value the body runs, and any
    further values are shaped into the collectors by bind().

    When slots_parameter is set, the body is also passed a RawSlots view of
    the full argument list as a keyword argument of that name, and Ref
    arguments are unwrapped for the named parameters."""

    __slots__ = (
        '_body',
        '_parameters',
        '_arity',
        '_collector_slots',
        '_defaults',
        '_slots_parameter',
    )

    def __init__(
        self,
        body: Callable[..., Any],
        parameters: Iterable[Parameter],
        slots_parameter: Optional[str] = None,
        defaults: Iterable[object] = (),
    ) -> None:
        if not callable(body):
            raise DeclarationError(f'{body!r} is not callable')
        parameters = tuple(parameters)
        _check_parameters(parameters)
        if slots_parameter is not None:
            if not slots_parameter.isidentifier():
                raise DeclarationError(
                    f'{slots_parameter!r} is not a valid parameter name'
                )
            if any(p.name == slots_parameter for p in parameters):
                raise DeclarationError(
                    f'slots parameter {slots_parameter!r} is also declared '
                    'as an argument slot'
                )
        self._body = body
        self._parameters = parameters
        self._arity = sum(not p.is_collector for p in parameters)
        self._collector_slots = frozenset(
            i for i, p in enumerate(parameters) if p.is_collector
        )
        self._defaults = tuple(defaults)
        self._slots_parameter = slots_parameter

    @classmethod
    def of_arity(
        cls,
        body: Callable[..., Any],
        arity: int,
        slots_parameter: Optional[str] = None,
    ) -> 'ArityFunction':
        if arity < 0:
            raise DeclarationError(f'arity must be non-negative, got {arity}')
        return cls(
            body, (Parameter(f'_{i}') for i in range(arity)), slots_parameter
        )

    @classmethod
    def from_callable(
        cls, fn: Callable[..., Any], slots_parameter: Optional[str] = None
    ) -> 'ArityFunction':
        """Read the argument slots off fn's signature.

        Positional parameters without defaults become scalar slots. Positional
        parameters with defaults are left to their defaults. *args and
        **kwargs become collectors. Keyword-only parameters need a default
        unless they are the slots parameter."""
        try:
            signature = inspect.signature(fn)
        except (TypeError, ValueError) as e:
            raise DeclarationError(
                f'cannot read the signature of {fn!r}'
            ) from e
        parameters = []
        defaults = []
        for p in signature.parameters.values():
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
                if p.default is p.empty:
                    parameters.append(Parameter(p.name))
                else:
                    defaults.append(p.default)
            elif p.kind is p.VAR_POSITIONAL:
                parameters.append(
                    Parameter(p.name, ParameterKind.POSITIONAL_COLLECTOR)
                )
            elif p.kind is p.VAR_KEYWORD:
                parameters.append(
                    Parameter(p.name, ParameterKind.MAPPING_COLLECTOR)
                )
            elif p.name != slots_parameter and p.default is p.empty:
                raise DeclarationError(
                    f'keyword-only parameter {p.name!r} of {fn!r} has no '
                    'default, so it can never be filled by currying'
                )
        if (
            slots_parameter is not None
            and slots_parameter not in signature.parameters
            and not any(
                p.kind is ParameterKind.MAPPING_COLLECTOR for p in parameters
            )
        ):
            raise DeclarationError(
                f'{fn!r} has no parameter named {slots_parameter!r} to '
                'receive the raw slots'
            )
        return cls(fn, parameters, slots_parameter, defaults)

    @property
    def body(self) -> Callable[..., Any]:
        return self._body

    @property
    def parameters(self) -> Tuple[Parameter, ...]:
        return self._parameters

    @property
    def arity(self) -> int:
        return self._arity

    @property
    def collector_slots(self) -> FrozenSet[int]:
        return self._collector_slots

    @property
    def defaults(self) -> Tuple[object, ...]:
        """Defaults of the positional parameters between the scalar slots
        and the positional collector. They are passed ahead of the collected
        values so the collector never swallows their places."""
        return self._defaults

    @property
    def slots_parameter(self) -> Optional[str]:
        return self._slots_parameter

    @property
    def positional_collector(self) -> Optional[Parameter]:
        return self._collector(ParameterKind.POSITIONAL_COLLECTOR)

    @property
    def mapping_collector(self) -> Optional[Parameter]:
        return self._collector(ParameterKind.MAPPING_COLLECTOR)

    @property
    def name(self) -> str:
        return getattr(self._body, '__qualname__', None) or repr(self._body)

    def _collector(self, kind: ParameterKind) -> Optional[Parameter]:
        for i in self._collector_slots:
            if self._parameters[i].kind is kind:
                return self._parameters[i]
        return None

    def absorbs(self, surplus: int) -> bool:
        """Whether the collectors can take surplus values beyond arity."""
        if surplus == 0 or self.positional_collector is not None:
            return True
        return self.mapping_collector is not None and surplus % 2 == 0

    def claimed_keywords(
        self, values: Sequence[object], keywords: Mapping[str, object]
    ) -> FrozenSet[object]:
        """Names a complete argument list hands to the body as keywords:
        the call keywords, plus the keys of surplus pairs when a mapping
        collector reads them."""
        names = set(keywords)
        if (
            self.mapping_collector is not None
            and self.positional_collector is None
        ):
            names.update(unwrap(key) for key in values[self._arity :: 2])
        return frozenset(names)

    def bind(
        self, values: Sequence[object], keywords: Dict[str, object]
    ) -> Tuple[Tuple[object, ...], Dict[str, object]]:
        """Shape a complete argument list into the positional and keyword
        arguments of the body call.

        values holds at least arity items. Surplus items are only accepted
        when there is a collector to take them. Mapping collectors without a
        positional collector read surplus items as alternating key/value
        pairs."""
        if len(values) < self._arity:
            raise ValueError(
                f'{self.name} needs {self._arity} arguments to be bound, '
                f'got {len(values)}'
            )
        raw = values
        if self._slots_parameter is not None:
            values = [unwrap(value) for value in values]
            keywords = {k: unwrap(v) for k, v in keywords.items()}
        if self._slots_parameter is not None and (
            self._slots_parameter in self.claimed_keywords(values, keywords)
        ):
            raise ValueError(
                f'{self.name} passes its raw slots as '
                f'{self._slots_parameter!r}, which was also given as an '
                'argument'
            )
        args = tuple(values[: self._arity])
        surplus = values[self._arity :]
        kwargs: Dict[str, object] = {}
        if self.positional_collector is not None:
            args += self._defaults + tuple(surplus)
        elif self.mapping_collector is not None:
            if len(surplus) % 2:
                raise ValueError(
                    f'{self.name} collects surplus arguments as key/value '
                    f'pairs, but got an odd number ({len(surplus)}) of them'
                )
            for key, value in zip(surplus[::2], surplus[1::2]):
                kwargs[key] = value  # type: ignore
        elif surplus:
            raise ValueError(
                f'{self.name} has no collector for {len(surplus)} surplus '
                'arguments'
            )
        kwargs.update(keywords)
        if self._slots_parameter is not None:
            kwargs[self._slots_parameter] = RawSlots(raw)
        return args, kwargs

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, '_slots_parameter'):
            raise AttributeError(
                f'{type(self).__name__} objects are immutable'
            )
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        parameters = ', '.join(map(str, self._parameters))
        return f'<ArityFunction {self.name}({parameters}) arity={self._arity}>'


def _check_parameters(parameters: Sequence[Parameter]) -> None:
    names = set()
    seen_positional_collector = False
    seen_mapping_collector = False
    for p in parameters:
        if p.name in names:
            raise DeclarationError(f'duplicate parameter name {p.name!r}')
        names.add(p.name)
        if seen_mapping_collector:
            if p.kind is ParameterKind.MAPPING_COLLECTOR:
                raise DeclarationError(
                    f'more than one mapping collector ({p})'
                )
            raise DeclarationError(
                f'parameter {p} is declared after the mapping collector'
            )
        if p.kind is ParameterKind.SCALAR:
            if seen_positional_collector:
                raise DeclarationError(
                    f'scalar parameter {p} is declared after the positional '
                    'collector'
                )
        elif p.kind is ParameterKind.POSITIONAL_COLLECTOR:
            if seen_positional_collector:
                raise DeclarationError(
                    f'more than one positional collector ({p})'
                )
            seen_positional_collector = True
        else:
            seen_mapping_collector = True
