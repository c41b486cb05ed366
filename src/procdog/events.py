"""
Informational events surfaced to the operator.

Each event has a verbosity tier: tier 0 is shown by default, tier 1 with -v,
tier 2 with -vv. Events are logged and, when a monitor PID is given, also
sent to it as (EVENT, Event, detail).
"""

from enum import Enum
import logging
from typing import Any

from .messaging import send
from .primitives.pid import PID
from .protocol import EVENT

log = logging.getLogger(__name__)

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


class Event(Enum):
    COMMAND_STARTED = "command_started"
    COMMAND_STILL_RUNNING = "command_still_running"
    COMMAND_FINISHED_BEFORE_TIMEOUT = "command_finished_before_timeout"
    TIMEOUT_REACHED = "timeout_reached"
    COMMAND_KILLED = "command_killed"
    RESTARTING = "restarting"
    EXITING = "exiting"


TIERS: dict[Event, int] = {
    Event.COMMAND_STARTED: 1,
    Event.COMMAND_STILL_RUNNING: 2,
    Event.COMMAND_FINISHED_BEFORE_TIMEOUT: 0,
    Event.TIMEOUT_REACHED: 1,
    Event.COMMAND_KILLED: 1,
    Event.RESTARTING: 1,
    Event.EXITING: 0,
}

TIER_LEVELS: dict[int, int] = {
    0: logging.INFO,
    1: logging.DEBUG,
    2: TRACE,
}


async def report(
    event: Event,
    message: str,
    *args: Any,
    monitor: PID | None = None,
    **detail: Any,
) -> None:
    """Log `event` at its tier and mirror it to `monitor` if there is one."""
    log.log(TIER_LEVELS[TIERS[event]], message, *args)
    if monitor is not None:
        await send(monitor, (EVENT, event, detail))
