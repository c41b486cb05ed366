"""
ProcessSupervisor - sole owner of the watched child process.

Commands (from the Coordinator):
  - start: spawn the command; a start while a child is owned is fatal
  - poll: non-blocking liveness check; replies running/finished
  - kill: SIGTERM, escalate to SIGKILL after `kill_after`, reap; replies killed

Poll and kill with no child owned are benign races: poll does nothing,
kill still replies (KILLED, None) so the Coordinator is never left waiting.
"""

import logging
from typing import Any, Sequence

import anyio
from anyio.abc import Process
from typing_extensions import override

from ..actor.base import Actor
from ..errors import ProcessControlError, ProtocolViolation, SpawnError
from ..events import Event, TRACE, report
from ..messaging import send
from ..primitives.pattern import ANY
from ..primitives.pid import PID
from ..protocol import ENDPOINT, FINISHED, KILL, KILLED, POLL, RUNNING, START

log = logging.getLogger(__name__)

# Upper bound on reaping a SIGKILLed child while the watchdog shuts down.
SHUTDOWN_REAP_TIMEOUT = 1.0


class ProcessSupervisor(Actor):
    """
    Purely reactive: it never acts without a command, except for the
    startup handshake that hands its PID to the Coordinator.
    """

    def __init__(
        self,
        command: Sequence[str],
        coordinator: PID,
        *,
        kill_after: float = 5.0,
        monitor: PID | None = None,
    ):
        super().__init__()
        self._command = tuple(command)
        self._coordinator = coordinator
        self._kill_after = kill_after
        self._monitor = monitor

    @override
    async def init(self) -> dict[str, Any]:
        await send(self._coordinator, (ENDPOINT, self.pid))
        return {"process": None}

    @override
    async def run(self, state: dict[str, Any]) -> dict[str, Any]:
        """Main loop - one lifecycle command per step, in arrival order."""
        return await self.receive(
            ((START,), lambda: self._start(state)),
            ((POLL,), lambda: self._poll(state)),
            ((KILL,), lambda: self._kill(state)),
            (ANY, lambda message: self._unexpected(message)),
        )

    async def _start(self, state: dict[str, Any]) -> dict[str, Any]:
        """Spawn the command; the child shares our stdio."""
        current: Process | None = state["process"]
        if current is not None:
            raise ProtocolViolation(
                f"start received while process {current.pid} is still owned"
            )

        try:
            process = await anyio.open_process(
                self._command, stdin=None, stdout=None, stderr=None
            )
        except OSError as e:
            raise SpawnError(f"failed to spawn {list(self._command)}: {e}") from e

        await report(
            Event.COMMAND_STARTED,
            "The process %s started OK (pid %d)", list(self._command), process.pid,
            monitor=self._monitor, pid=process.pid,
        )
        return {**state, "process": process}

    async def _poll(self, state: dict[str, Any]) -> dict[str, Any]:
        """Check whether the child is still alive without waiting on it."""
        process: Process | None = state["process"]
        if process is None:
            # A kill or an earlier poll already disposed of the child.
            log.log(TRACE, "Poll with no process owned, ignoring")
            return state

        if process.returncode is None:
            await send(self._coordinator, (RUNNING, process.pid))
            await report(
                Event.COMMAND_STILL_RUNNING, "Command still running (pid %d)", process.pid,
                monitor=self._monitor, pid=process.pid,
            )
            return state

        # returncode is only set after the event loop reaped the child,
        # so aclose() returns at once.
        await process.aclose()
        returncode = process.returncode
        log.debug("Command %s exited with status %s", list(self._command), returncode)
        await send(self._coordinator, (FINISHED, returncode))
        return {**state, "process": None}

    async def _kill(self, state: dict[str, Any]) -> dict[str, Any]:
        """Terminate the child and block until it is reaped."""
        process: Process | None = state["process"]
        if process is None:
            log.debug("Kill with no process owned, nothing to do")
            await send(self._coordinator, (KILLED, None))
            return state

        self._signal(process, "terminate")
        with anyio.move_on_after(self._kill_after):
            await process.wait()

        if process.returncode is None:
            log.warning(
                "Process %d ignored SIGTERM for %ss, sending SIGKILL",
                process.pid, self._kill_after,
            )
            self._signal(process, "kill")
            await process.wait()

        await process.aclose()
        returncode = process.returncode
        await report(
            Event.COMMAND_KILLED, "Command %s killed (status %s)", list(self._command), returncode,
            monitor=self._monitor, pid=process.pid, returncode=returncode,
        )
        await send(self._coordinator, (KILLED, returncode))
        return {**state, "process": None}

    def _signal(self, process: Process, how: str) -> None:
        try:
            getattr(process, how)()
        except ProcessLookupError:
            # Exited between the last poll and now; wait() still reaps it.
            log.debug("Process %d already gone before %s", process.pid, how)
        except OSError as e:
            raise ProcessControlError(f"failed to {how} process {process.pid}: {e}") from e

    async def _unexpected(self, message: Any) -> dict[str, Any]:
        raise ProtocolViolation(f"ProcessSupervisor received unexpected message {message!r}")

    @override
    async def terminate(self, reason: str, state: Any) -> None:
        """Never leave the child running behind a stopped watchdog."""
        process: Process | None = state["process"] if state else None
        if process is None or process.returncode is not None:
            return

        log.debug("Supervisor stopping (%s), killing process %d", reason, process.pid)
        try:
            process.kill()
        except ProcessLookupError:
            pass
        except OSError:
            log.exception("Failed to kill process %d while stopping", process.pid)
            return
        with anyio.move_on_after(SHUTDOWN_REAP_TIMEOUT):
            await process.wait()
