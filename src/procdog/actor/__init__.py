"""Actor base classes."""

from .base import Actor, ActorHandle

__all__ = [
    "Actor",
    "ActorHandle",
]
