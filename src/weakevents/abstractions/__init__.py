from .base import BaseWeakEvent

__all__ = ["BaseWeakEvent"]
