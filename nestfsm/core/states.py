# nestfsm/core/states.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, List, Optional, Tuple, Type, TypeVar

from nestfsm.core.errors import InactiveStateError, ValidationError
from nestfsm.core.events import Channel, Subscription
from nestfsm.core.guards import _GuardList, evaluate_guards
from nestfsm.interfaces.types import Guard

if TYPE_CHECKING:
    from nestfsm.core.machine import Machine

D = TypeVar("D")

RESERVED_NAMES = frozenset({"__any__", "__none__"})


class _Missing:
    """Marker for "no payload supplied", so that None stays a valid payload."""

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class _SentinelState:
    """
    Unowned marker state reserved by the runtime. Never a member of any
    machine's states and never the target of a declared transition.
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def submachines(self) -> Tuple["Machine", ...]:
        return ()

    def __call__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class WildcardState(_SentinelState):
    """Transition source matching whatever state is current."""


class TerminalState(_SentinelState):
    """Current state of a machine that is not running."""


ANY = WildcardState("__any__")
NONE = TerminalState("__none__")


class MachineState:
    """
    A named node owned by exactly one machine. It may hold nested machines,
    which are started when the state is entered and stopped when it is exited.

    States are created through Machine.state / Machine.pstate, never directly.
    """

    def __init__(self, name: str, machine: "Machine") -> None:
        """
        :param name: Name of the state. Not required to be unique.
        :param machine: The owning machine.
        :raises ValidationError: If the name is reserved.
        """
        if name in RESERVED_NAMES:
            raise ValidationError(f'"{name}" is a reserved state name.')
        self._name = name
        self._machine = machine
        self._submachines: List["Machine"] = []
        self._guards = _GuardList()
        self._entered = Channel(f"{name}.entered")
        self._exited = Channel(f"{name}.exited")

    @property
    def name(self) -> str:
        return self._name

    @property
    def machine(self) -> "Machine":
        """The machine that owns this state."""
        return self._machine

    @property
    def submachines(self) -> Tuple["Machine", ...]:
        """Machines nested inside this state, in creation order."""
        return tuple(self._submachines)

    @property
    def guards(self) -> Tuple[Guard, ...]:
        return self._guards.snapshot()

    @property
    def entered(self) -> Channel:
        """Channel emitting on every entry into this state."""
        return self._entered

    @property
    def exited(self) -> Channel:
        """Channel emitting, with no arguments, on every exit from this state."""
        return self._exited

    @property
    def is_active(self) -> bool:
        return self()

    def __call__(self) -> bool:
        """Return True if this state is its machine's current state."""
        return self._machine.current is self

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, machine={self._machine.name!r})"

    def nest(self, name: str, queue: bool = False) -> "Machine":
        """
        Create a machine nested inside this state. The caller still has to
        declare its states and initialize it; it is started and stopped
        together with this state.

        :param name: Name of the nested machine.
        :param queue: Whether the nested machine buffers transitions
            attempted while it is not running.
        """
        from nestfsm.core.machine import Machine

        machine = Machine(name, queue=queue)
        self._submachines.append(machine)
        return machine

    def guard(self, predicate: Guard) -> Guard:
        """
        Require predicate to pass for any transition into this state.
        Returns the predicate, so this can be used as a decorator.
        """
        return self._guards.add(predicate)

    def on(self, enter: Optional[Callable[..., None]] = None, exit: Optional[Callable[[], None]] = None) -> List[Subscription]:
        """Subscribe to entry and/or exit of this state."""
        subscriptions = []
        if enter is not None:
            subscriptions.append(self._entered.subscribe(enter))
        if exit is not None:
            subscriptions.append(self._exited.subscribe(exit))
        return subscriptions

    def dispose(self) -> None:
        """Close both channels and dispose every nested machine."""
        self._entered.close()
        self._exited.close()
        for machine in self._submachines:
            machine.dispose()

    def _payload_args(self, data: Any) -> tuple:
        """Arguments handed to guards and entry listeners."""
        return ()

    def _check_guards(self, data: Any) -> bool:
        return evaluate_guards(self._guards.snapshot(), *self._payload_args(data))

    def _on_enter(self, data: Any) -> None:
        self._entered.emit(*self._payload_args(data))
        # A listener may already have moved the machine on.
        if not self():
            return
        for machine in list(self._submachines):
            if not machine.is_running:
                machine.start()

    def _on_exit(self) -> None:
        for machine in list(self._submachines):
            machine.stop()
        self._exited.emit()


class SimpleState(MachineState):
    """A state without a payload. Guards and entry listeners take no arguments."""


class ParameterizedState(MachineState, Generic[D]):
    """
    A state carrying a payload while it is current. The payload is set from
    the transition (or initial data) that entered the state and cleared once
    the state has been exited.
    """

    def __init__(self, name: str, machine: "Machine", payload_type: Optional[Type[D]] = None) -> None:
        """
        :param name: Name of the state.
        :param machine: The owning machine.
        :param payload_type: Optional type every payload must be an instance of.
        """
        super().__init__(name, machine)
        self._payload_type = payload_type
        self._data: Any = MISSING

    @property
    def payload_type(self) -> Optional[Type[D]]:
        return self._payload_type

    @property
    def data(self) -> D:
        """
        The payload this state was entered with.

        :raises InactiveStateError: If the state is not current.
        """
        if not self() or self._data is MISSING:
            raise InactiveStateError(f"State {self._name} is not active and has no data.")
        return self._data

    def accepts(self, value: Any) -> bool:
        """Check value against the declared payload type, if any."""
        if value is MISSING:
            return False
        return self._payload_type is None or isinstance(value, self._payload_type)

    def _payload_args(self, data: Any) -> tuple:
        return (data,)

    def _on_enter(self, data: Any) -> None:
        self._data = data
        super()._on_enter(data)

    def _on_exit(self) -> None:
        super()._on_exit()
        self._data = MISSING
