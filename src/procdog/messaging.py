"""Message passing between actors."""

from typing import Any

from .primitives.pid import PID


async def send(pid: PID, message: Any) -> None:
    """Deliver `message` to the mailbox behind `pid`. Never blocks on the receiver."""
    await pid._mailbox.put(message)
