# nestfsm/core/__init__.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Core runtime: machines, states, transitions, guards and notification channels.
"""

from .errors import ChannelClosedError, FSMError, InactiveStateError, StateNotFoundError, ValidationError
from .events import Channel, Subscription
from .guards import evaluate_guards
from .states import ANY, NONE, MachineState, ParameterizedState, SimpleState, TerminalState, WildcardState
from .transitions import ParameterizedTransition, SimpleTransition, Transition, TriggerResult
from .machine import Machine

__all__ = [
    # Errors
    "FSMError",
    "ValidationError",
    "StateNotFoundError",
    "InactiveStateError",
    "ChannelClosedError",
    # Notification
    "Channel",
    "Subscription",
    "evaluate_guards",
    # States
    "ANY",
    "NONE",
    "MachineState",
    "SimpleState",
    "ParameterizedState",
    "WildcardState",
    "TerminalState",
    # Transitions
    "Transition",
    "SimpleTransition",
    "ParameterizedTransition",
    "TriggerResult",
    "Machine",
]
