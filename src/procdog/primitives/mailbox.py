"""Actor mailbox with selective receive."""

from collections import deque
import inspect
from typing import Any, Callable

import anyio

from .pattern import match


Handler = Callable[..., Any]


class ReceiveTimeout(Exception):
    """Raised when no matching message arrives within the timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"No matching message within {timeout}s")
        self.timeout = timeout


class Mailbox:
    """
    Unbounded FIFO of messages owned by a single consumer.

    `receive()` takes the oldest message matching any of the given
    (pattern, handler) pairs; non-matching messages stay queued in order.
    """

    def __init__(self):
        self._messages: deque[Any] = deque()
        self._arrived = anyio.Event()

    def __len__(self) -> int:
        return len(self._messages)

    async def put(self, message: Any) -> None:
        self._messages.append(message)
        self._arrived.set()

    async def receive(
        self,
        *patterns: tuple[Any, Handler],
        timeout: float | None = None,
    ) -> Any:
        deadline = None if timeout is None else anyio.current_time() + timeout

        while True:
            for index, message in enumerate(self._messages):
                for pattern, handler in patterns:
                    captures = match(pattern, message)
                    if captures is None:
                        continue
                    del self._messages[index]
                    result = handler(*captures)
                    if inspect.isawaitable(result):
                        result = await result
                    return result

            # Nothing matched; sleep until the next put() or the deadline.
            self._arrived = anyio.Event()
            if deadline is None:
                await self._arrived.wait()
                continue

            remaining = deadline - anyio.current_time()
            if remaining <= 0:
                raise ReceiveTimeout(timeout)  # type: ignore[arg-type]
            with anyio.move_on_after(remaining):
                await self._arrived.wait()
