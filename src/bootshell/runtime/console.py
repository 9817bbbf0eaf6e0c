"""Console presentation helpers for session output."""

import logging
import os
import traceback
from typing import TextIO

from bootshell.constants import PRINT_STACK_TRACES_KEY, RED, RESET
from bootshell.errors import CommandNotFoundError

log = logging.getLogger(__name__)


def supports_color(stream: TextIO) -> bool:
    """Return whether ANSI color output should be used on `stream`."""
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("TERM", "").lower() == "dumb":
        return False
    return hasattr(stream, "isatty") and stream.isatty()


def _styled(stream: TextIO, text: str, style: str) -> str:
    if supports_color(stream):
        return f"{style}{text}{RESET}"
    return text


def log_exception(session, exc: BaseException) -> None:
    """Report a command failure on the session's error stream.

    Tracebacks are printed when the session's stack-trace policy is ``always``,
    or ``execution`` for anything other than an unknown command.
    """
    not_found = isinstance(exc, CommandNotFoundError)
    if not_found:
        log.debug("unknown command entered: %s", exc)
    else:
        log.error("exception caught while executing command: %s", exc)

    err = session.err
    policy = session.get(PRINT_STACK_TRACES_KEY)
    if policy == "always" or (policy == "execution" and not not_found):
        text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        err.write(_styled(err, text, RED))
    elif not_found:
        err.write(_styled(err, f"Command not found: {exc.command}", RED))
    else:
        err.write(_styled(err, f"Error executing command: {exc}", RED))
    err.write("\n")
    err.flush()
