"""The actor that owns the watched child process."""

from .base import ProcessSupervisor

__all__ = [
    "ProcessSupervisor",
]
