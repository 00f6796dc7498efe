from __future__ import annotations

from typing import Any, Callable, Optional

from ..core.errors import (
    InvalidCallbackError,
    SubscriptionConstructionError,
    UnsupportedCallbackError,
    WeakEventError,
)
from ..core.utils import describe_callback, is_instance_method
from .subscription import UnsubscribeAction, WeakEventSubscription


def create_subscription(
    callback: Callable[..., Any],
    unsubscribe_action: Optional[UnsubscribeAction] = None,
) -> WeakEventSubscription[Any]:
    """Wrap *callback* in a :class:`WeakEventSubscription` typed for its owner.

    The event only knows its argument type; the owner's type is read here,
    once, from the bound method and captured by the subscription.
    """
    if callback is None:
        raise InvalidCallbackError("callback must not be None")
    if not is_instance_method(callback):
        raise UnsupportedCallbackError(
            f"A weak subscription can be created on instance methods only, "
            f"got {describe_callback(callback)}"
        )

    owner_type = type(callback.__self__)
    try:
        return WeakEventSubscription(callback, unsubscribe_action, owner_type=owner_type)
    except WeakEventError:
        raise
    except Exception as exc:
        raise SubscriptionConstructionError(
            f"could not build a subscription for {owner_type.__name__}"
        ) from exc
