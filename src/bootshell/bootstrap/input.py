"""Resolve the command text a run should execute."""

import logging
from pathlib import Path
from typing import TextIO

from bootshell.errors import InputError
from bootshell.models import BootstrapConfig

log = logging.getLogger(__name__)


def read_command_file(path: Path) -> str:
    """Return the file contents exactly as stored, line endings included."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Unable to read command file {path}: {e}") from e


def resolve_command_text(config: BootstrapConfig, stdin: TextIO) -> str:
    """Return the command to execute; an empty string means interactive mode.

    A command file wins over batch mode, and both replace any inline tokens.
    """
    if config.file is not None:
        log.debug("reading commands from %s", config.file)
        return read_command_file(config.file)
    if config.batch:
        log.debug("reading commands from stdin")
        try:
            return stdin.read()
        except OSError as e:
            raise InputError(f"Unable to read commands from stdin: {e}") from e
    return config.inline_command
