"""Command line entry point."""

import argparse
import logging
from typing import Sequence

import anyio

from .config import WatchdogConfig
from .errors import WatchdogError
from .events import TRACE
from .log import configure_logging
from .coordinator import EXIT_INTERRUPTED
from .watchdog import EXIT_CODES, run_watchdog

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procdog",
        description="Run a command, kill it when it runs too long, and optionally restart it.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More output; repeat for even more")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only report warnings and errors")
    parser.add_argument("-t", "--time", type=int, default=5, metavar="SECONDS",
                        help="Maximum running time of the command (default: 5)")
    parser.add_argument("-r", "--restart", action="store_true",
                        help="Restart the command after it finishes or is killed")
    parser.add_argument("--poll-interval", type=float, default=1.0, metavar="SECONDS",
                        help="Seconds between liveness checks (default: 1.0)")
    parser.add_argument("--grace", type=float, default=0.5, metavar="SECONDS",
                        help="Seconds to wait for the kill after an interrupt (default: 0.5)")
    parser.add_argument("--kill-after", type=float, default=5.0, metavar="SECONDS",
                        help="Seconds between SIGTERM and SIGKILL (default: 5.0)")
    parser.add_argument("command", nargs=argparse.REMAINDER, metavar="COMMAND",
                        help="Command to run, with its arguments")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> tuple[argparse.Namespace, WatchdogConfig]:
    parser = build_parser()
    args = parser.parse_args(argv)

    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        parser.error("the following arguments are required: COMMAND")

    try:
        config = WatchdogConfig(
            command=command,
            timeout=args.time,
            restart=args.restart,
            poll_interval=args.poll_interval,
            interrupt_grace=args.grace,
            kill_after=args.kill_after,
        )
    except ValueError as e:
        parser.error(str(e))
    return args, config


def main(argv: Sequence[str] | None = None) -> int:
    args, config = parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    log.log(TRACE, "Command: %s", list(config.command))
    log.log(TRACE, "Verbose: %d", args.verbose)
    log.log(TRACE, "Time: %s", config.timeout)
    log.log(TRACE, "Restart: %s", config.restart)

    try:
        return anyio.run(run_watchdog, config)
    except WatchdogError as e:
        log.critical("Fatal: %s", e)
        return 1
    except KeyboardInterrupt:
        # Interrupted before the signal handlers were installed.
        return EXIT_CODES[EXIT_INTERRUPTED]
