"""Core messaging primitives: PIDs, mailboxes and patterns."""

from .pid import PID
from .mailbox import Mailbox, ReceiveTimeout
from .pattern import ANY, IGNORE, match

__all__ = [
    "PID",
    "Mailbox",
    "ReceiveTimeout",
    "ANY",
    "IGNORE",
    "match",
]
