"""Shell sessions and the factory that creates them."""

import logging
import shlex
from typing import TextIO

from bootshell.constants import (
    APPLICATION_KEY,
    DEFAULT_SCOPE_PATH,
    MULTI_SCOPE_MODE_KEY,
    SCOPE_KEY,
    USER_KEY,
)
from bootshell.errors import CommandNotFoundError, ShellError
from bootshell.runtime.action import ActionCommand
from bootshell.runtime.console import log_exception
from bootshell.runtime.manager import Manager
from bootshell.runtime.registry import Registry
from bootshell.runtime.terminal import Terminal

log = logging.getLogger(__name__)


class Session:
    """A live shell: I/O streams, terminal, registry and variables."""

    def __init__(
        self,
        factory: "SessionFactory",
        input: TextIO | None,
        out: TextIO,
        err: TextIO,
        terminal: Terminal | None,
        registry: Registry,
    ) -> None:
        self.factory = factory
        self.input = input
        self.out = out
        self.err = err
        self.terminal = terminal
        self.registry = registry
        self.variables: dict[str, object] = {}
        self.closed = False

    def put(self, key: str, value: object) -> None:
        self.variables[key] = value

    def get(self, key: str, default: object = None) -> object:
        return self.variables.get(key, default)

    def _multi_scope(self) -> bool:
        return str(self.get(MULTI_SCOPE_MODE_KEY, "true")).lower() != "false"

    def resolve_command(self, name: str) -> ActionCommand:
        """Find the command for `scope:name` or a bare name along the SCOPE path."""
        multi_scope = self._multi_scope()
        entry = None
        if ":" in name:
            if multi_scope:
                entry = self.registry.get_command(name)
        else:
            candidates = [c for c in self.registry.commands() if c.name == name]
            if not multi_scope:
                entry = candidates[0] if candidates else None
            else:
                for scope in str(self.get(SCOPE_KEY, DEFAULT_SCOPE_PATH)).split(":"):
                    entry = next((c for c in candidates if scope in ("*", c.scope)), None)
                    if entry is not None:
                        break
        if entry is None:
            raise CommandNotFoundError(name)
        return entry

    def execute(self, text: str) -> object:
        """Run each line of `text` as a command and return the last result.

        Blank lines and lines starting with ``#`` are skipped.
        """
        if self.closed:
            raise ShellError("session is closed")
        result = None
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if self.closed:
                break
            tokens = shlex.split(line)
            entry = self.resolve_command(tokens[0])
            log.debug("executing %s %s", entry.key, tokens[1:])
            result = entry.execute(self, tokens[1:])
        return result

    def prompt(self) -> str:
        return f"{self.get(USER_KEY, '')}@{self.get(APPLICATION_KEY, '')}> "

    def run(self) -> None:
        """Read-eval loop until end of input or the session is closed."""
        if self.input is None:
            raise ShellError("session has no input stream")
        while not self.closed:
            self.out.write(self.prompt())
            self.out.flush()
            line = self.input.readline()
            if not line:
                break
            try:
                result = self.execute(line)
            except Exception as e:
                log_exception(self, e)
                continue
            if result is not None:
                print(result, file=self.out)
        self.close()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.factory.session_closed(self)


class SessionFactory:
    """Create sessions whose registries fall back to the factory registry."""

    def __init__(self) -> None:
        self.registry = Registry()
        self.sessions: list[Session] = []

    def register(self, service: object) -> None:
        self.registry.register(service)

    def unregister(self, service: object) -> None:
        self.registry.unregister(service)

    def create(
        self,
        input: TextIO | None,
        out: TextIO,
        err: TextIO,
        terminal: Terminal | None = None,
    ) -> Session:
        registry = Registry(parent=self.registry)
        session = Session(self, input, out, err, terminal, registry)
        registry.register(Manager(registry, self.registry))
        self.sessions.append(session)
        return session

    def session_closed(self, session: Session) -> None:
        if session in self.sessions:
            self.sessions.remove(session)
