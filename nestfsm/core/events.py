# nestfsm/core/events.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import List, Optional

from nestfsm.core.errors import ChannelClosedError
from nestfsm.interfaces.types import Listener


class Subscription:
    """
    Handle returned by Channel.subscribe. Cancelling it removes the listener
    from its channel; cancelling twice does nothing.
    """

    def __init__(self, channel: "Channel", listener: Listener) -> None:
        self._channel: Optional[Channel] = channel
        self._listener = listener

    @property
    def listener(self) -> Listener:
        """The callback this subscription delivers to."""
        return self._listener

    @property
    def active(self) -> bool:
        """Whether the listener still receives emissions."""
        return self._channel is not None

    def cancel(self) -> None:
        """Stop delivering emissions to the listener."""
        if self._channel is not None:
            self._channel._remove(self)
            self._channel = None


class Channel:
    """
    A synchronous broadcast channel. Every emission is delivered, in
    subscription order, to the listeners registered when emit() is called,
    and each listener runs to completion before emit() returns.
    """

    def __init__(self, name: str) -> None:
        """
        :param name: Diagnostic name, e.g. "switch.changed" or "on.entered".
        """
        self._name = name
        self._subscriptions: List[Subscription] = []
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __repr__(self) -> str:
        return f"Channel({self._name!r}, listeners={len(self._subscriptions)}, closed={self._closed})"

    def subscribe(self, listener: Listener) -> Subscription:
        """
        Register a listener for future emissions.

        :param listener: Callable invoked with the emitted arguments.
        :return: A Subscription that can be cancelled.
        :raises ChannelClosedError: If the channel has been closed.
        """
        if self._closed:
            raise ChannelClosedError(f"Cannot subscribe to closed channel {self._name}")
        if not callable(listener):
            raise TypeError("Channel listeners must be callable")
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def emit(self, *args) -> None:
        """
        Deliver args to every current listener. Listeners added or cancelled
        during delivery only affect later emissions.

        :raises ChannelClosedError: If the channel has been closed.
        """
        if self._closed:
            raise ChannelClosedError(f"Cannot emit on closed channel {self._name}")
        for subscription in list(self._subscriptions):
            subscription.listener(*args)

    def close(self) -> None:
        """Drop every listener. Later subscribe/emit calls raise."""
        if self._closed:
            return
        for subscription in self._subscriptions:
            subscription._channel = None
        self._subscriptions.clear()
        self._closed = True

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
