"""Fatal error types. None of these are retried."""


class WatchdogError(Exception):
    """Base class for every fatal watchdog failure."""
    pass


class SpawnError(WatchdogError):
    """The command could not be started (missing executable, permissions...)."""
    pass


class ProcessControlError(WatchdogError):
    """Signalling or reaping the child failed for a reason other than it being gone."""
    pass


class ProtocolViolation(WatchdogError):
    """An actor received a message it must never receive in its current state."""
    pass


class WatchdogCrashed(WatchdogError):
    """Raised by run_watchdog() when one of its actors exits abnormally."""

    def __init__(self, actor: str, reason: str):
        super().__init__(f"{actor} exited: {reason}")
        self.actor = actor
        self.reason = reason
