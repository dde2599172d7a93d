"""Table-driven status transition engine shared by every lifecycle-tracked entity.

A machine is built once from a declarative ``{status: {transition: result}}``
table and never changes afterwards. Lookups are pure: an undefined
transition yields ``False`` / ``None`` rather than an exception, and callers
decide how to surface the rejection.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from lessonmarket.core.exceptions import ConfigurationError, ValidationError

S = TypeVar("S", bound=enum.Enum)
T = TypeVar("T", bound=enum.Enum)

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


class StatusStateMachine(Generic[S, T]):
    """Immutable finite state machine over a status enum and a transition enum."""

    def __init__(
        self,
        status_enum: type[S],
        transition_enum: type[T],
        transitions: Mapping[S, Mapping[T, S]],
        initial_status: S,
    ) -> None:
        if not isinstance(initial_status, status_enum):
            raise ConfigurationError(f"Initial status {initial_status!r} is not a {status_enum.__name__}.")
        self.status_enum = status_enum
        self.transition_enum = transition_enum
        self.initial_status = initial_status
        self._transitions = _freeze_table(status_enum, transition_enum, transitions)

    @property
    def transitions(self) -> Mapping[S, Mapping[T, S]]:
        return self._transitions

    def get_resulting_status(self, current: S | str, transition: T | str) -> S | None:
        """Return the status ``transition`` leads to from ``current``, or None if undefined."""
        action = _coerce(self.transition_enum, transition)
        if action is None:
            return None
        return self._outgoing(current).get(action)

    def is_valid_transition(self, current: S | str, transition: T | str) -> bool:
        return self.get_resulting_status(current, transition) is not None

    def valid_transitions(self, current: S | str) -> tuple[T, ...]:
        """Transitions allowed from ``current``, in table declaration order."""
        return tuple(self._outgoing(current))

    def transition_to(self, current: S | str, target: S | str) -> T | None:
        """Find the transition that moves ``current`` to ``target``."""
        wanted = _coerce(self.status_enum, target)
        for transition, result in self._outgoing(current).items():
            if result is wanted:
                return transition
        return None

    def is_terminal(self, status: S | str) -> bool:
        return not self._outgoing(status)

    @property
    def terminal_statuses(self) -> tuple[S, ...]:
        return tuple(status for status, possible in self._transitions.items() if not possible)

    def parse_status(self, value: Any) -> S:
        """Coerce a raw value into a status member or raise ValidationError."""
        return _parse_member(self.status_enum, value, "status")

    def parse_transition(self, value: Any) -> T:
        return _parse_member(self.transition_enum, value, "transition")

    def _outgoing(self, current: S | str) -> Mapping[T, S]:
        status = _coerce(self.status_enum, current)
        if status is None:
            return _EMPTY
        return self._transitions[status]

    def __repr__(self) -> str:
        return f"StatusStateMachine({self.status_enum.__name__}, {self.transition_enum.__name__})"


def _coerce(enum_cls: type[enum.Enum], value: Any) -> Any:
    # Members of a different enum never match, even when their values coincide.
    if isinstance(value, enum.Enum):
        return value if isinstance(value, enum_cls) else None
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def _parse_member(enum_cls: type[enum.Enum], value: Any, label: str) -> Any:
    member = _coerce(enum_cls, value)
    if member is None:
        raise ValidationError(f"Invalid {label} value for {enum_cls.__name__}: {value!r}")
    return member


def _freeze_table(
    status_enum: type[S],
    transition_enum: type[T],
    transitions: Mapping[S, Mapping[T, S]],
) -> Mapping[S, Mapping[T, S]]:
    for status in transitions:
        if not isinstance(status, status_enum):
            raise ConfigurationError(f"Table key {status!r} is not a {status_enum.__name__}.")

    frozen: dict[S, Mapping[T, S]] = {}
    for status in status_enum:
        outgoing: dict[T, S] = {}
        for transition, result in transitions.get(status, {}).items():
            if not isinstance(transition, transition_enum):
                raise ConfigurationError(
                    f"Transition {transition!r} from {status.value} is not a {transition_enum.__name__}."
                )
            if not isinstance(result, status_enum):
                raise ConfigurationError(
                    f"Result {result!r} of {status.value} --{transition.value}--> is not a {status_enum.__name__}."
                )
            outgoing[transition] = result
        frozen[status] = MappingProxyType(outgoing)
    return MappingProxyType(frozen)
