"""Single-pass parser for the bootshell command line."""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from bootshell.errors import UsageError
from bootshell.models import BootstrapConfig

log = logging.getLogger(__name__)

USAGE = "usage: bootshell [-c|--classpath <dir>] [-b|--batch] [-f|--file <path>] [command ...]"

CLASSPATH_FLAGS = ("--classpath", "-c")
FILE_FLAGS = ("--file", "-f")
BATCH_FLAGS = ("--batch", "-b")


def _inline_value(arg: str, flags: tuple[str, ...]) -> str | None:
    """Return the value of a `--flag=value` token, or None if it is not one."""
    for flag in flags:
        prefix = f"{flag}="
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def _next_value(flag: str, args: Iterator[str]) -> str:
    value = next(args, None)
    if value is None:
        raise UsageError(f"option {flag} requires a value")
    return value


def parse_args(argv: Sequence[str]) -> BootstrapConfig:
    """Parse raw arguments left to right; unknown tokens become the inline command."""
    classpath: str | None = None
    batch = False
    file: str | None = None
    tokens: list[str] = []

    args = iter(argv)
    for arg in args:
        inline_classpath = _inline_value(arg, CLASSPATH_FLAGS)
        inline_file = _inline_value(arg, FILE_FLAGS)
        if inline_classpath is not None:
            classpath = inline_classpath
        elif arg in CLASSPATH_FLAGS:
            classpath = _next_value(arg, args)
        elif arg in BATCH_FLAGS:
            batch = True
        elif inline_file is not None:
            file = inline_file
        elif arg in FILE_FLAGS:
            file = _next_value(arg, args)
        else:
            tokens.append(arg)

    config = BootstrapConfig(
        classpath=Path(classpath) if classpath is not None else None,
        batch=batch,
        file=Path(file) if file is not None else None,
        inline_tokens=tuple(tokens),
    )
    log.debug("parsed arguments: %s", config)
    return config
