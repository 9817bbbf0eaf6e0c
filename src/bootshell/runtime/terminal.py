"""Terminal handle owned by a shell run."""

import logging
import shutil
import sys
import termios
from typing import TextIO

log = logging.getLogger(__name__)

DUMB_TERMINAL = "dumb"


class Terminal:
    """The terminal a session renders to."""

    def __init__(self, term: str | None, tty: bool) -> None:
        self.type = term or DUMB_TERMINAL
        self.tty = tty

    @property
    def width(self) -> int:
        return shutil.get_terminal_size(fallback=(80, 24)).columns

    @property
    def height(self) -> int:
        return shutil.get_terminal_size(fallback=(80, 24)).lines

    def is_ansi_supported(self) -> bool:
        return self.tty and self.type != DUMB_TERMINAL


class TerminalFactory:
    """Build the terminal for `stream` and restore its tty state on destroy."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._terminal: Terminal | None = None
        self._fd: int | None = None
        self._saved_attrs: list | None = None
        self.destroyed = False

    def get_terminal(self, term: str | None = None) -> Terminal:
        if self.destroyed:
            raise RuntimeError("terminal factory has been destroyed")
        if self._terminal is None:
            tty = hasattr(self._stream, "isatty") and self._stream.isatty()
            if tty:
                self._fd = self._stream.fileno()
                self._saved_attrs = termios.tcgetattr(self._fd)
            self._terminal = Terminal(term, tty)
            log.debug("terminal type=%s tty=%s", self._terminal.type, tty)
        return self._terminal

    def destroy(self) -> None:
        """Release the terminal. Only the first call has any effect."""
        if self.destroyed:
            return
        self.destroyed = True
        if self._saved_attrs is not None:
            try:
                termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved_attrs)
            except termios.error as e:
                log.warning("unable to restore terminal attributes: %s", e)
