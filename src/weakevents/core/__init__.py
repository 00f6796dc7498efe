from .errors import (
    InvalidCallbackError,
    SubscriptionConstructionError,
    UnsupportedCallbackError,
    WeakEventError,
)
from .events import WeakEvent

__all__ = [
    "WeakEvent",
    "WeakEventError",
    "InvalidCallbackError",
    "UnsupportedCallbackError",
    "SubscriptionConstructionError",
]
