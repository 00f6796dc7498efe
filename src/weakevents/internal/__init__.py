from .factory import create_subscription
from .subscription import EventHandler, UnsubscribeAction, WeakEventSubscription

__all__ = [
    "create_subscription",
    "EventHandler",
    "UnsubscribeAction",
    "WeakEventSubscription",
]
