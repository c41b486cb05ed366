"""
Message vocabulary between the Coordinator and the ProcessSupervisor.

Supervisor -> Coordinator:
  (ENDPOINT, PID)               once, at startup
  (RUNNING, os_pid)             poll found the child alive
  (FINISHED, returncode)        poll found the child exited (and reaped it)
  (KILLED, returncode | None)   kill completed; None when nothing was running

Coordinator -> Supervisor:
  (START,) (POLL,) (KILL,)

Interrupt source -> Coordinator:
  (INTERRUPT, signum)
"""

ENDPOINT = "endpoint"
START = "start"
POLL = "poll"
KILL = "kill"
RUNNING = "running"
FINISHED = "finished"
KILLED = "killed"
INTERRUPT = "interrupt"

EVENT = "event"
