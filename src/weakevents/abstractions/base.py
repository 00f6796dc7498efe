import abc

from typing import Any, Callable, Generic, TypeVar

TArgs = TypeVar("TArgs")


class BaseWeakEvent(abc.ABC, Generic[TArgs]):
    """What subscribers get to see: *subscribe* / *unsubscribe* only."""

    @abc.abstractmethod
    def subscribe(self, callback: Callable[[Any, TArgs], Any]) -> Callable[[], None]: ...

    @abc.abstractmethod
    def unsubscribe(self, callback: Callable[[Any, TArgs], Any]) -> None: ...
