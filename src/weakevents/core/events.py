from __future__ import annotations

import functools
import logging
import threading

from types import TracebackType
from typing import Any, Callable, MutableMapping, Optional, Tuple, TypeVar

from ..abstractions.base import BaseWeakEvent
from ..internal.factory import create_subscription
from ..internal.subscription import EventHandler, WeakEventSubscription
from .errors import InvalidCallbackError
from .utils import CallbackKey, callback_key, describe_callback

__all__ = ["WeakEvent"]

_LOG = logging.getLogger(__name__)

TArgs = TypeVar("TArgs")


class WeakEvent(BaseWeakEvent[TArgs]):
    """Thread-safe event whose subscribers are held by weak reference.

    • Only bound methods can subscribe; the event never keeps their instance
      alive, and a collected subscriber drops out on the next `invoke()`.
    • Synchronous: `invoke()` blocks until all callbacks return, in
      subscription order.
    • Exceptions raised by callbacks **propagate** to the publisher and the
      rest of that pass is skipped; subscribers should catch their own errors.
    • Callbacks run with the lock released, so they may subscribe or
      unsubscribe on the same event.

    Hand subscribers the event typed as :class:`BaseWeakEvent` to keep
    `invoke()` to the publisher.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self._lock = threading.RLock()
        self._subscriptions: MutableMapping[CallbackKey, WeakEventSubscription[TArgs]] = {}
        self._handlers: Tuple[EventHandler, ...] = ()

    # ------------------------------------------------------------------ subscription
    def subscribe(self, callback: Callable[[Any, TArgs], Any]) -> Callable[[], None]:
        """Register the bound method *callback*.

        Subscribing the same ``obj.method`` twice is a no-op.  Returns a
        zero-argument function that **unsubscribes** this callback; it holds
        no reference to ``obj``.
        """
        if callback is None:
            raise InvalidCallbackError("callback must not be None")

        key = callback_key(callback)
        with self._lock:
            existing = self._subscriptions.get(key)
            if existing is not None and existing.target is callback.__self__:
                _LOG.debug("%r: %s already subscribed", self, existing.name)
                return functools.partial(self._discard, key, existing.handler)
            if existing is not None:
                # id() of a collected subscriber was reused by a new object
                _LOG.debug("%r: replacing stale subscription %s", self, existing.name)
                self._remove_locked(key, existing.handler)

            subscription = create_subscription(
                callback, functools.partial(self._discard, key)
            )
            self._subscriptions[key] = subscription
            self._handlers = self._handlers + (subscription.handler,)

        _LOG.debug("%r: subscribed %s", self, subscription.name)
        return functools.partial(self._discard, key, subscription.handler)

    def unsubscribe(self, callback: Callable[[Any, TArgs], Any]) -> None:
        """Remove *callback*; unknown callbacks are ignored."""
        if callback is None:
            raise InvalidCallbackError("callback must not be None")

        key = callback_key(callback)
        with self._lock:
            subscription = self._subscriptions.get(key)
            if subscription is None:
                return
            self._remove_locked(key, subscription.handler)

        _LOG.debug("%r: unsubscribed %s", self, describe_callback(callback))

    # ------------------------------------------------------------------ publishing
    def invoke(self, sender: Any, args: TArgs) -> None:
        """Call every live subscriber with ``(sender, args)``."""
        with self._lock:
            handlers = self._handlers
        for handler in handlers:
            handler(sender, args)

    def to_event_handler(self) -> Optional[Callable[[Any, TArgs], None]]:
        """Combined handler over the current subscribers, or ``None`` if there are none.

        Later subscribe / unsubscribe calls do not change the returned handler.
        """
        with self._lock:
            handlers = self._handlers
        if not handlers:
            return None

        def _combined(sender: Any, args: TArgs) -> None:
            for handler in handlers:
                handler(sender, args)

        return _combined

    # ------------------------------------------------------------------ housekeeping
    def __enter__(self) -> "WeakEvent[TArgs]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.reset()
        return False

    def reset(self) -> None:
        """Remove **all** subscriptions."""
        with self._lock:
            self._subscriptions.clear()
            self._handlers = ()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def __contains__(self, callback: object) -> bool:
        if callback is None or not callable(callback):
            return False
        with self._lock:
            return callback_key(callback) in self._subscriptions

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<WeakEvent{label} subscribers={len(self)}>"

    # ------------------------------------------------------------------ private
    def _discard(self, key: CallbackKey, handler: EventHandler) -> None:
        """Remove the subscription stored under *key* if it is still *handler*'s."""
        with self._lock:
            removed = self._remove_locked(key, handler)
        if removed:
            _LOG.debug("%r: removed subscription", self)

    def _remove_locked(self, key: CallbackKey, handler: EventHandler) -> bool:
        subscription = self._subscriptions.get(key)
        if subscription is None or subscription.handler is not handler:
            return False
        del self._subscriptions[key]
        self._handlers = tuple(h for h in self._handlers if h is not handler)
        return True
