class WeakEventError(Exception):
    """Base class for every error raised by :mod:`weakevents`."""


class InvalidCallbackError(WeakEventError, ValueError):
    """*callback* is ``None`` (or otherwise unusable as an event handler)."""


class UnsupportedCallbackError(InvalidCallbackError):
    """*callback* is not bound to an instance, so there is nothing to weakly reference."""


class SubscriptionConstructionError(WeakEventError, TypeError):
    """A weak subscription could not be built for the callback's owner type."""
