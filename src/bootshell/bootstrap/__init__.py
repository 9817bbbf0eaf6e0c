"""Turn process arguments and input streams into the command to run."""

from bootshell.bootstrap.args import USAGE, parse_args
from bootshell.bootstrap.input import resolve_command_text

__all__ = [
    "USAGE",
    "parse_args",
    "resolve_command_text",
]
