# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from nestfsm import Machine


class SwitchMachine(Machine):
    """A two-state light switch, initialized to off."""

    def __init__(self, queue: bool = False) -> None:
        super().__init__("switch", queue=queue)
        self.is_on = self.state("on")
        self.is_off = self.state("off")
        self.turn_on = self.transition("turn on", {self.is_off}, self.is_on)
        self.turn_off = self.transition("turn off", {self.is_on}, self.is_off)
        self.initialize(self.is_off)


@pytest.fixture
def switch():
    """A switch machine that has not been started."""
    return SwitchMachine()


@pytest.fixture
def queued_switch():
    """A switch machine that buffers transitions attempted before start()."""
    return SwitchMachine(queue=True)


@pytest.fixture
def started_switch(switch):
    switch.start()
    return switch


@pytest.fixture
def machine():
    """An empty machine for building ad hoc graphs."""
    return Machine("test")


@pytest.fixture
def listener():
    """A mock callback for channel subscriptions."""
    return MagicMock()


@pytest.fixture
def colored_switch(switch):
    """A switch whose "on" state nests a color machine (blue -> red)."""
    color = switch.is_on.nest("color")
    blue = color.state("blue")
    red = color.state("red")
    to_red = color.transition("to red", {blue}, red)
    to_blue = color.transition("to blue", {red}, blue)
    color.initialize(blue)
    return switch, color, blue, red, to_red, to_blue
