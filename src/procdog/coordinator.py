"""
Coordinator - timeout and restart policy for the watched command.

It holds the only outbound endpoint to the ProcessSupervisor and wakes up
at a fixed cadence (the bounded wait on its own mailbox) to either poll the
child or, once the deadline has passed, kill it. Every decision about
starting, restarting and exiting is taken here.

Exit reasons:
  - "normal": the command finished (or was killed) and restart is off
  - "interrupted": the operator interrupted the watchdog
"""

import logging
import signal
from typing import Any

import anyio
from typing_extensions import override

from .actor.base import Actor
from .config import WatchdogConfig
from .errors import ProtocolViolation
from .events import Event, TRACE, report
from .messaging import send
from .primitives.mailbox import ReceiveTimeout
from .primitives.pattern import ANY
from .primitives.pid import PID
from .protocol import ENDPOINT, FINISHED, INTERRUPT, KILL, KILLED, POLL, RUNNING, START

log = logging.getLogger(__name__)

EXIT_NORMAL = "normal"
EXIT_INTERRUPTED = "interrupted"


class Coordinator(Actor):
    """Drives the ProcessSupervisor through start/poll/kill commands."""

    def __init__(self, config: WatchdogConfig, *, monitor: PID | None = None):
        super().__init__()
        self._config = config
        self._monitor = monitor

    @override
    async def init(self) -> dict[str, Any]:
        return {
            "endpoint": None,
            "deadline": None,
            "started_at": None,
            "next_tick": anyio.current_time() + self._config.poll_interval,
            "killing": False,
            "runs": 0,
        }

    @override
    async def run(self, state: dict[str, Any]) -> dict[str, Any]:
        """Wait for a message until the next tick is due, then tick."""
        wait = max(0.0, state["next_tick"] - anyio.current_time())
        try:
            return await self.receive(
                ((ENDPOINT, PID), lambda endpoint: self._on_endpoint(endpoint, state)),
                ((RUNNING, int), lambda pid: self._on_running(pid, state)),
                ((FINISHED, int), lambda returncode: self._on_finished(returncode, state)),
                ((KILLED, ANY), lambda returncode: self._on_killed(returncode, state)),
                ((INTERRUPT, int), lambda signum: self._on_interrupt(signum, state)),
                (ANY, lambda message: self._unexpected(message)),
                timeout=wait,
            )
        except ReceiveTimeout:
            return await self._on_tick(state)

    # --- Commands to the supervisor ---

    async def _command(self, state: dict[str, Any], command: str) -> None:
        endpoint: PID | None = state["endpoint"]
        if endpoint is None:
            raise ProtocolViolation(f"cannot send {command!r}: no supervisor endpoint yet")
        await send(endpoint, (command,))

    async def _start_run(self, state: dict[str, Any]) -> dict[str, Any]:
        """Start the command and give it a fresh deadline."""
        await self._command(state, START)
        now = anyio.current_time()
        return {
            **state,
            "deadline": now + self._config.timeout,
            "started_at": now,
            "killing": False,
            "runs": state["runs"] + 1,
        }

    # --- Wake-ups ---

    async def _on_tick(self, state: dict[str, Any]) -> dict[str, Any]:
        now = anyio.current_time()
        state = {**state, "next_tick": now + self._config.poll_interval}

        if state["endpoint"] is None:
            log.debug("No supervisor endpoint yet, skipping poll")
            return state

        if not state["killing"] and now >= state["deadline"]:
            await report(
                Event.TIMEOUT_REACHED, "Timeout reached after %.1fs, killing command...",
                now - state["started_at"],
                monitor=self._monitor, elapsed=now - state["started_at"],
            )
            await self._command(state, KILL)
            # The next deadline counts from the kill, not from the original start.
            return {**state, "deadline": now + self._config.timeout, "killing": True}

        log.log(TRACE, "Polling command")
        await self._command(state, POLL)
        return state

    async def _on_endpoint(self, endpoint: PID, state: dict[str, Any]) -> dict[str, Any]:
        if state["endpoint"] is not None:
            raise ProtocolViolation(f"duplicate supervisor endpoint {endpoint}")
        log.log(TRACE, "Supervisor endpoint %s received", endpoint)
        return await self._start_run({**state, "endpoint": endpoint})

    async def _on_running(self, pid: int, state: dict[str, Any]) -> dict[str, Any]:
        log.log(TRACE, "Command still running (pid %d)", pid)
        return state

    async def _on_finished(self, returncode: int, state: dict[str, Any]) -> dict[str, Any]:
        if state["killing"]:
            # The child exited on its own just before our kill reached it;
            # the KILLED reply that follows decides what happens next.
            log.debug("Command finished (status %d) while a kill is pending", returncode)
            return state

        await report(
            Event.COMMAND_FINISHED_BEFORE_TIMEOUT,
            "Command finished before timeout with status %d", returncode,
            monitor=self._monitor, returncode=returncode,
        )
        if self._config.restart:
            return await self._restart(state)

        await report(
            Event.EXITING,
            "Not restarting; if you want to restart it next time, add --restart. Exiting...",
            monitor=self._monitor, reason="finished",
        )
        self.stop(EXIT_NORMAL)
        return state

    async def _on_killed(self, returncode: int | None, state: dict[str, Any]) -> dict[str, Any]:
        if not state["killing"]:
            raise ProtocolViolation(f"kill confirmation (status {returncode}) without a pending kill")

        log.debug("Command killed because of the timeout")
        if self._config.restart:
            return await self._restart(state)

        await report(
            Event.EXITING, "Command killed, not restarting. Exiting...",
            monitor=self._monitor, reason="killed",
        )
        self.stop(EXIT_NORMAL)
        return state

    async def _restart(self, state: dict[str, Any]) -> dict[str, Any]:
        await report(
            Event.RESTARTING, "Restarting (run %d)...", state["runs"] + 1,
            monitor=self._monitor, run=state["runs"] + 1,
        )
        return await self._start_run(state)

    async def _on_interrupt(self, signum: int, state: dict[str, Any]) -> dict[str, Any]:
        """Best-effort kill, bounded by the grace period, then exit."""
        await report(
            Event.EXITING, "Interrupted by %s, exiting...", signal.Signals(signum).name,
            monitor=self._monitor, reason="interrupted", signum=signum,
        )
        if state["endpoint"] is not None:
            await self._command(state, KILL)
            try:
                await self.receive(
                    ((KILLED, ANY), lambda returncode: returncode),
                    timeout=self._config.interrupt_grace,
                )
            except ReceiveTimeout:
                log.warning(
                    "Command not killed within %ss grace period, exiting anyway",
                    self._config.interrupt_grace,
                )

        self.stop(EXIT_INTERRUPTED)
        return state

    async def _unexpected(self, message: Any) -> dict[str, Any]:
        raise ProtocolViolation(f"Coordinator received unexpected message {message!r}")
