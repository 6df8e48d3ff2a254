# nestfsm/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Optional, Set, Tuple, Type, TypeVar, Union

from nestfsm.core.errors import StateNotFoundError, ValidationError
from nestfsm.core.events import Channel
from nestfsm.core.states import (
    MISSING,
    NONE,
    MachineState,
    ParameterizedState,
    SimpleState,
    TerminalState,
)
from nestfsm.core.transitions import (
    ParameterizedTransition,
    SimpleTransition,
    Sources,
    Transition,
    TriggerResult,
)

logger = logging.getLogger(__name__)

D = TypeVar("D")

CurrentState = Union[MachineState, TerminalState]


class Machine:
    """
    A nestable finite state machine.

    A machine owns the states and transitions created through its factory
    methods. It must be initialized with one of its states before it can be
    started. While it is not running its current state is NONE.

    Machines are not thread-safe: all calls on a machine, its states, its
    transitions and its nested machines must come from one thread at a time.
    """

    def __init__(self, name: str, queue: bool = False) -> None:
        """
        :param name: Name of the machine, used for diagnostics only.
        :param queue: If True, transitions attempted before start() are
            buffered and replayed when the machine starts. Otherwise they
            are discarded.
        """
        self._name = name
        self._queue = queue
        self._states: List[MachineState] = []
        self._owned: Set[MachineState] = set()
        self._initial: Optional[MachineState] = None
        self._initial_data: Any = MISSING
        self._current: CurrentState = NONE
        self._pending: List[Tuple[Transition, Any]] = []
        self._changed = Channel(f"{name}.changed")
        self._disposed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def queue(self) -> bool:
        """Whether transitions attempted while stopped are buffered."""
        return self._queue

    @property
    def current(self) -> CurrentState:
        """The current state, NONE while the machine is not running."""
        return self._current

    @property
    def initial(self) -> Optional[MachineState]:
        return self._initial

    @property
    def states(self) -> FrozenSet[MachineState]:
        """Every state created by this machine."""
        return frozenset(self._states)

    @property
    def pending(self) -> Tuple[Tuple[Transition, Any], ...]:
        """Transition attempts waiting for start(), oldest first."""
        return tuple(self._pending)

    @property
    def changed(self) -> Channel:
        """Channel emitting every new current state, including NONE on stop."""
        return self._changed

    @property
    def is_initialized(self) -> bool:
        return self._initial is not None

    @property
    def is_running(self) -> bool:
        return self._current is not NONE

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def owns(self, state: Any) -> bool:
        """Whether state was created by this machine."""
        return state in self._owned

    def state(self, name: str) -> SimpleState:
        """
        Create a simple (payload-free) state. Transitions into it are made
        with transition().
        """
        state = SimpleState(name, self)
        self._states.append(state)
        self._owned.add(state)
        return state

    def pstate(self, name: str, payload_type: Optional[Type[D]] = None) -> ParameterizedState[D]:
        """
        Create a parameterized state. Transitions into it are made with
        ptransition().

        :param name: Name of the state.
        :param payload_type: Optional type payloads must be instances of.
        """
        state = ParameterizedState(name, self, payload_type)
        self._states.append(state)
        self._owned.add(state)
        return state

    def transition(self, name: str, sources: Sources, target: SimpleState) -> SimpleTransition:
        """
        Create a transition from sources (ANY, a state or a set of states)
        into the simple state target.
        """
        return SimpleTransition(name, sources, target, self)

    def ptransition(self, name: str, sources: Sources, target: ParameterizedState[D]) -> ParameterizedTransition[D]:
        """
        Create a transition from sources into the parameterized state target.
        """
        return ParameterizedTransition(name, sources, target, self)

    def initialize(self, state: MachineState, data: Any = MISSING) -> None:
        """
        Set the state (and payload, for parameterized states) entered by
        start(). Calling it again replaces the previous choice for the next
        start().

        :param state: One of this machine's states.
        :param data: Payload, required for parameterized states.
        :raises StateNotFoundError: If state does not belong to this machine.
        :raises ValidationError: If a parameterized state is given no or a
            mismatched payload.
        """
        if not self.owns(state):
            raise StateNotFoundError(f"Initial state {state} must be a known state of {self._name}.")
        if isinstance(state, ParameterizedState):
            if data is MISSING:
                raise ValidationError(f"Parameterized initial state {state} requires data.")
            if not state.accepts(data):
                raise ValidationError(f"Initial data {data!r} does not match the payload type of {state}.")
        self._initial = state
        self._initial_data = data

    def start(self, clear: bool = False) -> None:
        """
        Enter the initial state, then replay any queued transitions in the
        order they were attempted.

        :param clear: Drop queued transitions instead of replaying them.
        :raises ValidationError: If initialize() has not been called, or the
            machine has been disposed.
        """
        if self._disposed:
            raise ValidationError(f"Machine {self._name} has been disposed and cannot start.")
        if self._initial is None:
            raise ValidationError(f"You must supply an initial state to {self._name} with initialize() first.")

        logger.debug("Starting machine %s in %s", self._name, self._initial)
        self._change_state(self._initial, self._initial_data)

        pending, self._pending = self._pending, []
        if clear:
            if pending:
                logger.debug("Dropping %d queued transition(s) of %s", len(pending), self._name)
            return
        for transition, data in pending:
            self._trigger(transition, data)

    def stop(self) -> None:
        """
        Exit the current state, stopping its nested machines, and leave the
        machine in NONE. Does nothing if the machine is not running.
        """
        if not self.is_running:
            return
        logger.debug("Stopping machine %s in %s", self._name, self._current)
        self._change_state(NONE, MISSING)

    def dispose(self) -> None:
        """
        Stop the machine and release it: its channel is closed and every
        state it owns is disposed, along with their nested machines.
        """
        if self._disposed:
            return
        self.stop()
        self._disposed = True
        self._pending.clear()
        self._changed.close()
        for state in self._states:
            state.dispose()
        logger.debug("Disposed machine %s", self._name)

    def __str__(self) -> str:
        machines = self._current.submachines
        if machines:
            return f"{self._current} -> {','.join(str(m) for m in machines)}"
        return str(self._current)

    def __repr__(self) -> str:
        return f"Machine({self._name!r}, current={self._current.name!r})"

    def _trigger(self, transition: Transition, data: Any) -> TriggerResult:
        if not self.is_running:
            if self._queue and not self._disposed:
                self._pending.append((transition, data))
                logger.debug("Queued %s until %s starts", transition, self._name)
                return TriggerResult.QUEUED
            logger.debug("Discarded %s, %s is not running", transition, self._name)
            return TriggerResult.DISCARDED

        if not transition.applies_to(self._current):
            logger.debug("Rejected %s, not applicable from %s", transition, self._current)
            return TriggerResult.INAPPLICABLE

        if not transition._check_guards(data):
            logger.debug("Rejected %s, guard returned false", transition)
            return TriggerResult.GUARD_REJECTED

        self._change_state(transition.target, data)
        return TriggerResult.APPLIED

    def _change_state(self, next_state: CurrentState, data: Any) -> None:
        previous = self._current
        if isinstance(previous, MachineState):
            previous._on_exit()
        self._current = next_state
        logger.debug("%s: %s -> %s", self._name, previous, next_state)
        self._changed.emit(next_state)
        if isinstance(next_state, MachineState):
            next_state._on_enter(data)
