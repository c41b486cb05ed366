"""Process identifiers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .mailbox import Mailbox


@dataclass(frozen=True)
class PID:
    """
    Address of an actor.

    Only the id takes part in equality and hashing; the mailbox is the
    delivery target used by [`send()`](src/procdog/messaging.py:1).
    """
    _id: uuid.UUID
    _mailbox: "Mailbox" = field(compare=False, hash=False, repr=False)

    def __str__(self) -> str:
        return f"<{str(self._id)[:8]}>"
