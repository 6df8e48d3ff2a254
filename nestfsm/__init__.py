# nestfsm/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""nestfsm: nestable finite state machines

Declare states and guarded transitions on a Machine, nest independent
machines inside states, and observe entry, exit and current-state changes
through synchronous channels.

    switch = Machine("switch")
    on = switch.state("on")
    off = switch.state("off")
    turn_on = switch.transition("turn on", {off}, on)
    switch.initialize(off)
    switch.start()
    turn_on()  # True

Machines are single-threaded; callers serialize access across threads.
"""

from nestfsm.core import (
    ANY,
    NONE,
    Channel,
    ChannelClosedError,
    FSMError,
    InactiveStateError,
    Machine,
    MachineState,
    ParameterizedState,
    ParameterizedTransition,
    SimpleState,
    SimpleTransition,
    StateNotFoundError,
    Subscription,
    Transition,
    TriggerResult,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ANY",
    "NONE",
    "Channel",
    "ChannelClosedError",
    "FSMError",
    "InactiveStateError",
    "Machine",
    "MachineState",
    "ParameterizedState",
    "ParameterizedTransition",
    "SimpleState",
    "SimpleTransition",
    "StateNotFoundError",
    "Subscription",
    "Transition",
    "TriggerResult",
    "ValidationError",
]
