"""Testing helpers: monitor mailboxes and polling utilities."""

import uuid
from typing import Any, Callable

import anyio

from ..events import Event
from ..primitives.mailbox import Mailbox, ReceiveTimeout
from ..primitives.pattern import ANY
from ..primitives.pid import PID
from ..protocol import EVENT


def make_monitor() -> tuple[PID, Mailbox]:
    """Create a PID+Mailbox pair usable as a message sink for tests."""
    mb = Mailbox()
    pid = PID(_id=uuid.uuid4(), _mailbox=mb)
    return pid, mb


async def recv_event(mb: Mailbox, event: Event, *, timeout: float = 1.0) -> dict[str, Any]:
    """Wait for `event` on a monitor mailbox and return its detail dict."""
    return await mb.receive(
        ((EVENT, event, dict), lambda detail: detail),
        timeout=timeout,
    )


async def drain_events(mb: Mailbox) -> list[tuple[Event, dict[str, Any]]]:
    """Take every event already queued on `mb`, in arrival order."""
    events: list[tuple[Event, dict[str, Any]]] = []
    while True:
        try:
            events.append(await mb.receive(
                ((EVENT, Event, dict), lambda event, detail: (event, detail)),
                timeout=0,
            ))
        except ReceiveTimeout:
            return events


async def drain(mb: Mailbox) -> list[Any]:
    """Take every message already queued on `mb`, in arrival order."""
    messages: list[Any] = []
    while True:
        try:
            messages.append(await mb.receive((ANY, lambda m: m), timeout=0))
        except ReceiveTimeout:
            return messages


async def wait_for(
    condition: Callable[[], bool],
    *,
    timeout: float = 1.0,
    interval: float = 0.01,
) -> None:
    """Poll `condition` until it holds; raises TimeoutError after `timeout`."""
    with anyio.fail_after(timeout):
        while not condition():
            await anyio.sleep(interval)
