"""Watchdog settings."""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class WatchdogConfig:
    """
    Settings for one watchdog run.

    Attributes:
        command: Executable followed by its arguments
        timeout: Seconds a single run may last before it is killed
        restart: Start the command again after it finishes or is killed
        poll_interval: Seconds between liveness/deadline checks
        interrupt_grace: Seconds to wait for the kill after an interrupt
        kill_after: Seconds between SIGTERM and SIGKILL when killing
    """
    command: Sequence[str]
    timeout: float = 5
    restart: bool = False
    poll_interval: float = 1.0
    interrupt_grace: float = 0.5
    kill_after: float = 5.0

    def __post_init__(self):
        """Validate and freeze the settings."""
        object.__setattr__(self, "command", tuple(self.command))
        if not self.command:
            raise ValueError("command cannot be empty")
        if not all(isinstance(arg, str) for arg in self.command):
            raise ValueError("command arguments must be strings")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.interrupt_grace < 0:
            raise ValueError(f"interrupt_grace cannot be negative, got {self.interrupt_grace}")
        if self.kill_after < 0:
            raise ValueError(f"kill_after cannot be negative, got {self.kill_after}")
