# nestfsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Any, FrozenSet, Generic, Iterable, Tuple, TypeVar, Union

from nestfsm.core.errors import StateNotFoundError, ValidationError
from nestfsm.core.guards import _GuardList, evaluate_guards
from nestfsm.core.states import ANY, MISSING, MachineState, ParameterizedState, SimpleState, WildcardState
from nestfsm.interfaces.types import Guard

if TYPE_CHECKING:
    from nestfsm.core.machine import Machine

D = TypeVar("D")

Sources = Union[WildcardState, MachineState, Iterable[MachineState]]


class TriggerResult(Enum):
    """
    Outcome of a single transition attempt. Only APPLIED changes state.
    """

    APPLIED = auto()
    QUEUED = auto()
    DISCARDED = auto()
    INAPPLICABLE = auto()
    GUARD_REJECTED = auto()


class Transition:
    """
    A named edge from a set of source states (or ANY) to one target state.
    Calling the transition asks the owning machine to perform it.

    Transitions are created through Machine.transition / Machine.ptransition.
    """

    def __init__(self, name: str, sources: Sources, target: MachineState, machine: "Machine") -> None:
        """
        :param name: Name of the transition.
        :param sources: ANY, a single state, or an iterable of states of machine.
        :param target: Destination state, owned by machine.
        :param machine: The owning machine.
        :raises StateNotFoundError: If a source or the target is not owned by machine.
        """
        self._name = name
        self._machine = machine
        self._sources = self._resolve_sources(sources, machine)
        if not machine.owns(target):
            raise StateNotFoundError(f'The "to" state {target} of {machine.name}.{name} must be known.')
        self._target = target
        self._guards = _GuardList()

    @staticmethod
    def _resolve_sources(sources: Sources, machine: "Machine") -> Union[WildcardState, FrozenSet[MachineState]]:
        if sources is ANY:
            return ANY
        if isinstance(sources, MachineState):
            sources = (sources,)
        resolved = frozenset(sources)
        if resolved == {ANY}:
            return ANY
        for state in resolved:
            if not machine.owns(state):
                raise StateNotFoundError(f'All "from" states must be known to {machine.name}, got {state}.')
        return resolved

    @property
    def name(self) -> str:
        return self._name

    @property
    def sources(self) -> Union[WildcardState, FrozenSet[MachineState]]:
        """ANY, or the frozen set of states this transition may leave."""
        return self._sources

    @property
    def target(self) -> MachineState:
        return self._target

    @property
    def machine(self) -> "Machine":
        return self._machine

    @property
    def guards(self) -> Tuple[Guard, ...]:
        return self._guards.snapshot()

    def guard(self, predicate: Guard) -> Guard:
        """
        Require predicate to pass for this transition to apply. Affects
        future attempts only. Returns the predicate for decorator use.
        """
        return self._guards.add(predicate)

    def applies_to(self, state: Any) -> bool:
        """Whether this transition may leave state."""
        return self._sources is ANY or state in self._sources

    def __str__(self) -> str:
        return f"{self._machine.name}.{self._name}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, machine={self._machine.name!r})"

    def _check_guards(self, data: Any) -> bool:
        """Transition guards first, then the target's guards."""
        if not evaluate_guards(self._guards.snapshot(), *self._target._payload_args(data)):
            return False
        return self._target._check_guards(data)


class SimpleTransition(Transition):
    """A transition into a SimpleState. Takes no payload."""

    def __init__(self, name: str, sources: Sources, target: SimpleState, machine: "Machine") -> None:
        if not isinstance(target, SimpleState):
            raise ValidationError(f"Simple transition {name} requires a simple target state, got {target!r}.")
        super().__init__(name, sources, target, machine)

    def attempt(self) -> TriggerResult:
        """
        Attempt this transition and report what happened. If the machine is
        not running, the attempt is queued or discarded depending on its
        queue setting.
        """
        return self._machine._trigger(self, MISSING)

    def __call__(self) -> bool:
        """
        Attempt this transition.

        :return: True if the state changed, False otherwise.
        """
        return self.attempt() is TriggerResult.APPLIED


class ParameterizedTransition(Transition, Generic[D]):
    """A transition into a ParameterizedState. Requires a payload."""

    def __init__(self, name: str, sources: Sources, target: ParameterizedState[D], machine: "Machine") -> None:
        if not isinstance(target, ParameterizedState):
            raise ValidationError(
                f"Parameterized transition {name} requires a parameterized target state, got {target!r}."
            )
        super().__init__(name, sources, target, machine)

    def attempt(self, data: D) -> TriggerResult:
        """
        Attempt this transition with data and report what happened.

        :raises ValidationError: If data does not match the target's payload type.
        """
        if not self._target.accepts(data):
            expected = getattr(self._target.payload_type, "__name__", "any type")
            raise ValidationError(f"{self} expects a payload of {expected}, got {data!r}.")
        return self._machine._trigger(self, data)

    def __call__(self, data: D) -> bool:
        """
        Attempt this transition with data.

        :return: True if the state changed, False otherwise.
        """
        return self.attempt(data) is TriggerResult.APPLIED
