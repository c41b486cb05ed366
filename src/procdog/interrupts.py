"""Translate operator interrupts into a single message for the Coordinator."""

import logging
import signal
from typing import Sequence

import anyio
from anyio.abc import TaskStatus

from .messaging import send
from .primitives.pid import PID
from .protocol import INTERRUPT

log = logging.getLogger(__name__)

INTERRUPT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


async def forward_interrupts(
    coordinator: PID,
    signals: Sequence[signal.Signals] = INTERRUPT_SIGNALS,
    *,
    task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED,
) -> None:
    """
    Post (INTERRUPT, signum) to `coordinator` for the first signal received.

    Use with `TaskGroup.start()`: once it returns, the handlers are in place.
    After the first signal the handlers are removed again, so a second one
    gets the default behaviour.
    """
    with anyio.open_signal_receiver(*signals) as received:
        task_status.started()
        async for signum in received:
            log.debug("Received %s", signal.Signals(signum).name)
            await send(coordinator, (INTERRUPT, int(signum)))
            return
