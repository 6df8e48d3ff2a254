# tests/unit/core/test_events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock, call

import pytest

from nestfsm.core.errors import ChannelClosedError
from nestfsm.core.events import Channel


@pytest.fixture
def channel():
    return Channel("test.changed")


def test_emit_reaches_every_listener_in_order(channel):
    order = []
    channel.subscribe(lambda value: order.append(("first", value)))
    channel.subscribe(lambda value: order.append(("second", value)))

    channel.emit(1)
    channel.emit(2)

    assert order == [("first", 1), ("second", 1), ("first", 2), ("second", 2)]


def test_emit_without_arguments(channel, listener):
    channel.subscribe(listener)
    channel.emit()
    listener.assert_called_once_with()


def test_emit_with_no_listeners(channel):
    channel.emit("ignored")
    assert len(channel) == 0


def test_cancel_stops_delivery(channel, listener):
    subscription = channel.subscribe(listener)
    channel.emit("a")
    subscription.cancel()
    channel.emit("b")

    listener.assert_called_once_with("a")
    assert not subscription.active
    assert len(channel) == 0


def test_cancel_twice_is_harmless(channel, listener):
    subscription = channel.subscribe(listener)
    subscription.cancel()
    subscription.cancel()
    assert len(channel) == 0


def test_subscribe_during_emit_applies_to_later_emissions(channel):
    late = MagicMock()

    def early(value):
        channel.subscribe(late)

    channel.subscribe(early)
    channel.emit(1)
    late.assert_not_called()

    channel.emit(2)
    late.assert_called_once_with(2)


def test_cancel_during_emit_applies_to_later_emissions(channel):
    second = MagicMock()
    holder = {}

    def first(value):
        holder["second"].cancel()

    channel.subscribe(first)
    holder["second"] = channel.subscribe(second)

    channel.emit(1)
    second.assert_called_once_with(1)

    channel.emit(2)
    assert second.call_args_list == [call(1)]


def test_listener_errors_propagate(channel):
    after = MagicMock()

    def broken(value):
        raise RuntimeError("listener failed")

    channel.subscribe(broken)
    channel.subscribe(after)

    with pytest.raises(RuntimeError, match="listener failed"):
        channel.emit(1)
    after.assert_not_called()


def test_close_drops_listeners(channel, listener):
    subscription = channel.subscribe(listener)
    channel.close()

    assert channel.closed
    assert len(channel) == 0
    assert not subscription.active


def test_closed_channel_rejects_subscribe_and_emit(channel, listener):
    channel.close()
    channel.close()

    with pytest.raises(ChannelClosedError):
        channel.subscribe(listener)
    with pytest.raises(ChannelClosedError):
        channel.emit()


def test_subscribe_requires_callable(channel):
    with pytest.raises(TypeError):
        channel.subscribe(42)


def test_repr_mentions_name(channel):
    assert "test.changed" in repr(channel)
