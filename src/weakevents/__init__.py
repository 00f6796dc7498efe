from .abstractions.base import BaseWeakEvent
from .core.errors import (
    InvalidCallbackError,
    SubscriptionConstructionError,
    UnsupportedCallbackError,
    WeakEventError,
)
from .core.events import WeakEvent
from .internal.factory import create_subscription
from .internal.subscription import WeakEventSubscription

__all__: list[str] = [
    "BaseWeakEvent",
    "WeakEvent",
    "WeakEventSubscription",
    "create_subscription",
    "WeakEventError",
    "InvalidCallbackError",
    "UnsupportedCallbackError",
    "SubscriptionConstructionError",
]
