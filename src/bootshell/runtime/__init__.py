"""Shell runtime the bootstrap configures: sessions, registries and terminals."""

from bootshell.runtime.action import ActionCommand, CommandInfo, command, command_info
from bootshell.runtime.console import log_exception, supports_color
from bootshell.runtime.manager import Manager
from bootshell.runtime.registry import Registry
from bootshell.runtime.session import Session, SessionFactory
from bootshell.runtime.terminal import Terminal, TerminalFactory

__all__ = [
    "ActionCommand",
    "CommandInfo",
    "Manager",
    "Registry",
    "Session",
    "SessionFactory",
    "Terminal",
    "TerminalFactory",
    "command",
    "command_info",
    "log_exception",
    "supports_color",
]
