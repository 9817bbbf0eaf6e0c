"""Bootstrap a shell session from process arguments and standard streams."""

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from bootshell.bootstrap import parse_args, resolve_command_text
from bootshell.constants import APPLICATION_KEY, DISCOVERY_RESOURCE, USER_KEY
from bootshell.discovery import discover_commands
from bootshell.dispatcher import dispatch
from bootshell.loader import LoadingContext, build_loading_context
from bootshell.models import ShellConfig
from bootshell.runtime import Manager, Session, SessionFactory, Terminal, TerminalFactory

log = logging.getLogger(__name__)


class Main:
    """Run a standalone shell: one batch command or an interactive session.

    Subclasses can change the session wiring, the discovery resource and the
    scoping mode by overriding the hook methods.
    """

    def __init__(self, config: ShellConfig | None = None) -> None:
        self.config = config if config is not None else ShellConfig()

    @property
    def application(self) -> str:
        return self.config.application

    @property
    def user(self) -> str:
        return self.config.user

    def run(
        self,
        argv: Sequence[str],
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        stdin = sys.stdin if stdin is None else stdin
        stdout = sys.stdout if stdout is None else stdout
        stderr = sys.stderr if stderr is None else stderr

        boot = parse_args(argv)
        command = resolve_command_text(boot, stdin)
        context = build_loading_context(boot.classpath)
        try:
            factory = self.create_session_factory()
            self.run_session(factory, command, stdin, stdout, stderr, context)
        finally:
            context.close()

    def run_session(
        self,
        factory: SessionFactory,
        command: str,
        stdin: TextIO,
        stdout: TextIO,
        stderr: TextIO,
        context: LoadingContext,
    ) -> None:
        terminal_factory = TerminalFactory(stdin)
        try:
            terminal = terminal_factory.get_terminal(self.config.term)
            # A batch run executes directly and never reads from stdin.
            session = self.create_session(
                factory, None if command else stdin, stdout, stderr, terminal
            )
            try:
                session.put(USER_KEY, self.user)
                session.put(APPLICATION_KEY, self.application)
                self.discover_commands(session, context, self.discovery_resource())
                dispatch(session, command, self.multi_scope_mode())
            finally:
                session.close()
        finally:
            terminal_factory.destroy()

    def create_session_factory(self) -> SessionFactory:
        factory = SessionFactory()
        factory.register(Manager(factory.registry, factory.registry))
        return factory

    def create_session(
        self,
        factory: SessionFactory,
        stdin: TextIO | None,
        stdout: TextIO,
        stderr: TextIO,
        terminal: Terminal,
    ) -> Session:
        return factory.create(stdin, stdout, stderr, terminal)

    def discovery_resource(self) -> str:
        """Resource listing the command classes to register."""
        return DISCOVERY_RESOURCE

    def multi_scope_mode(self) -> bool:
        """Whether commands are addressed as `scope:name` rather than bare names."""
        return self.config.multi_scope_mode

    def discover_commands(
        self, session: Session, context: LoadingContext, resource: str
    ) -> list[type]:
        fail_fast = self.config.discovery_policy == "fail-fast"
        return discover_commands(session, context, resource, fail_fast=fail_fast)
