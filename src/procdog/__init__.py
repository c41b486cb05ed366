"""Process watchdog: run a command under a time limit, kill it and optionally restart it."""

from .primitives.pid import PID
from .primitives.mailbox import Mailbox, ReceiveTimeout
from .primitives.pattern import ANY, IGNORE
from .actor.base import Actor, ActorHandle
from .messaging import send
from .config import WatchdogConfig
from .events import Event
from .errors import (
    ProcessControlError,
    ProtocolViolation,
    SpawnError,
    WatchdogCrashed,
    WatchdogError,
)
from .supervisor.base import ProcessSupervisor
from .coordinator import Coordinator
from .interrupts import forward_interrupts
from .watchdog import run_watchdog

__all__ = [
    # Core primitives
    "PID",
    "Mailbox",
    "ReceiveTimeout",
    "ANY",
    "IGNORE",
    # Actors
    "Actor",
    "ActorHandle",
    "send",
    # Watchdog
    "WatchdogConfig",
    "Event",
    "ProcessSupervisor",
    "Coordinator",
    "forward_interrupts",
    "run_watchdog",
    # Errors
    "WatchdogError",
    "SpawnError",
    "ProcessControlError",
    "ProtocolViolation",
    "WatchdogCrashed",
]
