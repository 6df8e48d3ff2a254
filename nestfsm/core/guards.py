# nestfsm/core/guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Iterable

from nestfsm.interfaces.types import Guard


def evaluate_guards(guards: Iterable[Guard], *args) -> bool:
    """
    Check guards in declaration order. Return True if all pass, False as soon
    as one fails. An empty guard list always passes.

    :param guards: Guard callables.
    :param args: Arguments forwarded to every guard (the payload for
        parameterized states and transitions, nothing for simple ones).
    """
    for g in guards:
        if not g(*args):
            return False
    return True


class _GuardList:
    """
    Internal append-only list of guards shared by states and transitions.
    """

    def __init__(self) -> None:
        self._guards = []

    def add(self, guard: Guard) -> Guard:
        if not callable(guard):
            raise TypeError("Guards must be callable")
        self._guards.append(guard)
        return guard

    def snapshot(self) -> tuple:
        return tuple(self._guards)

    def __len__(self) -> int:
        return len(self._guards)
