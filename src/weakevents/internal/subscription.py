from __future__ import annotations

"""weakevents.internal.subscription
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
A subscription that behaves like a bound-method callback but only keeps a
**weak** reference to the method's instance.

The bound method is split in two:

* *which instance*  – held through :class:`weakref.ref`;
* *which function*  – ``method.__func__``, a plain function that carries no
  reference to the instance.

At dispatch time the instance is resolved and passed explicitly as the first
argument, so the subscription never keeps its subscriber alive.
"""

import logging
import threading
import weakref

from typing import Any, Callable, Generic, Optional, TypeVar

from ..core.errors import (
    InvalidCallbackError,
    SubscriptionConstructionError,
    UnsupportedCallbackError,
)
from ..core.utils import describe_callback, is_instance_method

__all__ = ["EventHandler", "UnsubscribeAction", "WeakEventSubscription"]

_LOG = logging.getLogger(__name__)

TArgs = TypeVar("TArgs")

EventHandler = Callable[[Any, TArgs], Any]
UnsubscribeAction = Callable[[EventHandler], None]


class WeakEventSubscription(Generic[TArgs]):
    """Weakly referenced event subscription for one bound method.

    ``handler`` is the forwarding invoker the event stores.  Calling it with
    ``(sender, args)``:

    • forwards to the original method if the instance is still alive;
    • otherwise runs *unsubscribe_action* (once, ever) with ``handler``;
    • otherwise does nothing.
    """

    def __init__(
        self,
        callback: Callable[[Any, TArgs], Any],
        unsubscribe_action: Optional[UnsubscribeAction] = None,
        *,
        owner_type: type | None = None,
    ) -> None:
        if callback is None:
            raise InvalidCallbackError("callback must not be None")
        if not is_instance_method(callback):
            raise UnsupportedCallbackError(
                f"{describe_callback(callback)} is not bound to an instance; "
                "only instance methods can be weakly subscribed"
            )

        owner = callback.__self__
        self.owner_type: type = owner_type if owner_type is not None else type(owner)
        if not isinstance(owner, self.owner_type):
            raise SubscriptionConstructionError(
                f"{type(owner).__name__} instance is not a {self.owner_type.__name__}"
            )

        try:
            self._target_ref: weakref.ref[Any] = weakref.ref(owner)
        except TypeError as exc:
            raise SubscriptionConstructionError(
                f"cannot weakly reference {self.owner_type.__name__} instances "
                "(add '__weakref__' to __slots__?)"
            ) from exc

        self.function: Callable[..., Any] = callback.__func__
        self.name = describe_callback(callback)

        self._action_lock = threading.Lock()
        self._unsubscribe_action = unsubscribe_action

        # Created once so the event can find it again by identity.
        self.handler: EventHandler = self._invoke

    # ------------------------------------------------------------------ public
    @property
    def target(self) -> Any | None:
        """The subscriber instance, or ``None`` once it has been collected."""
        return self._target_ref()

    @property
    def is_alive(self) -> bool:
        return self._target_ref() is not None

    def __call__(self, sender: Any, args: TArgs) -> Any:
        return self.handler(sender, args)

    def __repr__(self) -> str:
        state = "alive" if self.is_alive else "dead"
        return f"<WeakEventSubscription {self.name} ({state})>"

    # ------------------------------------------------------------------ dispatch
    def _invoke(self, sender: Any, args: TArgs) -> Any:
        instance = self._target_ref()
        if instance is not None:
            return self.function(instance, sender, args)

        with self._action_lock:
            action, self._unsubscribe_action = self._unsubscribe_action, None
        if action is not None:
            _LOG.debug("Subscriber of %s was collected; unsubscribing", self.name)
            action(self.handler)
        return None
