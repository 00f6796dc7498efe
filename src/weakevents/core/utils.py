from __future__ import annotations

import inspect

from typing import Any, Callable, Hashable, Tuple

CallbackKey = Tuple[Hashable, Any]


def is_instance_method(callback: Any) -> bool:
    """True for a method bound to an *instance* (not a class, not a free function)."""
    return inspect.ismethod(callback) and not isinstance(callback.__self__, type)


def callback_key(callback: Callable[..., Any]) -> CallbackKey:
    """Identity of *callback* used to deduplicate and remove subscriptions.

    Bound methods map to ``(id(owner), function)`` so that two lookups of
    ``obj.method`` (which yield two distinct method objects) agree.  Any other
    callable maps to ``(None, callback)``.

    ``id()`` is only unique among *live* objects; callers that keep keys
    around longer than the owner must check the owner is still the same one.
    """
    if inspect.ismethod(callback):
        return id(callback.__self__), callback.__func__
    return None, callback


def describe_callback(callback: Any) -> str:
    """Short ``Owner.method`` label for log records and reprs."""
    if inspect.ismethod(callback):
        owner = callback.__self__
        owner_name = owner.__name__ if isinstance(owner, type) else type(owner).__name__
        return f"{owner_name}.{callback.__func__.__name__}"
    return getattr(callback, "__qualname__", None) or repr(callback)
