# nestfsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details


class FSMError(Exception):
    """
    Base exception class for errors within the nested state machine library.
    """


class ValidationError(FSMError):
    """
    Raised when a machine is wired or driven in a way that violates its
    preconditions (starting before initializing, unknown states, bad payloads).
    """


class StateNotFoundError(ValidationError):
    """
    Raised when a state is not owned by the machine it is used with.
    """


class InactiveStateError(FSMError):
    """
    Raised when reading the payload of a parameterized state that is not current.
    """


class ChannelClosedError(FSMError):
    """
    Raised when subscribing to or emitting on a channel that has been closed.
    """
