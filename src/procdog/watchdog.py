"""
Wire the Coordinator, the interrupt source and the ProcessSupervisor together.

The actors share one task group. Whichever actor exits first decides how the
whole watchdog ends; the others are cancelled with it.
"""

import logging
import signal
from typing import Sequence

import anyio

from .config import WatchdogConfig
from .coordinator import EXIT_INTERRUPTED, EXIT_NORMAL, Coordinator
from .errors import WatchdogCrashed
from .interrupts import INTERRUPT_SIGNALS, forward_interrupts
from .primitives.pid import PID
from .supervisor.base import ProcessSupervisor

log = logging.getLogger(__name__)

EXIT_CODES: dict[str, int] = {
    EXIT_NORMAL: 0,
    EXIT_INTERRUPTED: 130,
}


async def run_watchdog(
    config: WatchdogConfig,
    *,
    monitor: PID | None = None,
    signals: Sequence[signal.Signals] = INTERRUPT_SIGNALS,
) -> int:
    """
    Run `config.command` under the watchdog until it is done.

    Returns the process exit code (0 or 130). Raises WatchdogCrashed when
    an actor hit a fatal error.

    `monitor`, if given, receives every informational event as
    (EVENT, Event, detail). Pass `signals=()` to leave signal handling alone.
    """
    exits: list[tuple[str, str]] = []

    async with anyio.create_task_group() as tg:

        def on_exit_of(name: str):
            async def _on_exit(pid: PID, reason: str) -> None:
                log.debug("%s %s exited: %s", name, pid, reason)
                exits.append((name, reason))
                tg.cancel_scope.cancel()
            return _on_exit

        coordinator = await Coordinator.start_link(
            config,
            monitor=monitor,
            task_group=tg,
            on_exit=on_exit_of("Coordinator"),
        )
        if signals:
            await tg.start(forward_interrupts, coordinator.pid, signals)
        await ProcessSupervisor.start_link(
            config.command,
            coordinator.pid,
            kill_after=config.kill_after,
            monitor=monitor,
            task_group=tg,
            on_exit=on_exit_of("ProcessSupervisor"),
        )

    name, reason = exits[0]
    if name == "Coordinator" and reason in EXIT_CODES:
        return EXIT_CODES[reason]
    raise WatchdogCrashed(name, reason)
