"""
Actor - a task with a private mailbox and a state loop.

Lifecycle:
  init() -> state
  run(state) -> state      (repeated until stop() or an exception)
  terminate(reason, state) (always, shielded from cancellation)

Exit reasons passed to `on_exit`:
  - whatever was given to stop(), "normal" by default
  - "error: <ExcType>: <message>" when init/run raised
  - "shutdown" when the actor was cancelled
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import uuid
from typing import Any, Awaitable, Callable

import anyio
from anyio.abc import TaskGroup

from ..primitives.mailbox import Handler, Mailbox
from ..primitives.pid import PID

log = logging.getLogger(__name__)

OnExit = Callable[[PID, str], Awaitable[None]]


@dataclass(frozen=True)
class ActorHandle:
    pid: PID
    cancel_scope: anyio.CancelScope


class Actor:
    """
    Base actor. Subclass and implement init() and run().
    """

    def __init__(self):
        self._pid: PID | None = None
        self._mailbox: Mailbox | None = None
        self._state: Any = None
        self._stop_reason: str | None = None

    @property
    def pid(self) -> PID:
        if self._pid is None:
            raise RuntimeError("Actor not started")
        return self._pid

    # --- Override these ---

    async def init(self) -> Any:
        """Return the initial state."""
        return None

    async def run(self, state: Any) -> Any:
        """Handle one step (usually one message) and return the new state."""
        raise NotImplementedError(f"{self.__class__.__name__}.run/1 not implemented")

    async def terminate(self, reason: str, state: Any) -> None:
        """Called once when the actor exits, whatever the reason."""
        pass

    # --- Runtime ---

    def stop(self, reason: str = "normal") -> None:
        """Leave the run loop after the current step."""
        self._stop_reason = reason

    async def receive(self, *patterns: tuple[Any, Handler], timeout: float | None = None) -> Any:
        if self._mailbox is None:
            raise RuntimeError("Actor not started")
        return await self._mailbox.receive(*patterns, timeout=timeout)

    @classmethod
    async def start(cls, *args: Any, task_group: TaskGroup, **kwargs: Any) -> PID:
        """Start an actor in `task_group` and return its PID."""
        handle = await cls.start_link(*args, task_group=task_group, **kwargs)
        return handle.pid

    @classmethod
    async def start_link(
        cls,
        *args: Any,
        task_group: TaskGroup,
        on_exit: OnExit | None = None,
        **kwargs: Any,
    ) -> ActorHandle:
        """Start an actor and get notified through `on_exit` when it stops."""
        actor = cls(*args, **kwargs)
        mailbox = Mailbox()
        actor._mailbox = mailbox
        actor._pid = PID(_id=uuid.uuid4(), _mailbox=mailbox)

        cancel_scope = anyio.CancelScope()
        task_group.start_soon(actor._main, cancel_scope, on_exit)
        return ActorHandle(pid=actor._pid, cancel_scope=cancel_scope)

    async def _main(self, cancel_scope: anyio.CancelScope, on_exit: OnExit | None) -> None:
        reason = "shutdown"
        try:
            with cancel_scope:
                try:
                    self._state = await self.init()
                    while self._stop_reason is None:
                        self._state = await self.run(self._state)
                    reason = self._stop_reason
                except Exception as e:
                    log.debug("%s %s crashed", self.__class__.__name__, self.pid, exc_info=True)
                    reason = f"error: {type(e).__name__}: {e}"
        finally:
            with anyio.CancelScope(shield=True):
                await self.terminate(reason, self._state)
                if on_exit is not None:
                    await on_exit(self.pid, reason)
