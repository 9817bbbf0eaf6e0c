"""Command action declarations and their registry entries."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandInfo:
    """Scope, name and help text declared by a command action class."""

    scope: str
    name: str
    description: str = ""


def command(scope: str, name: str, description: str = ""):
    """Mark a class as a shell command addressed as `scope:name`.

    The class is instantiated once per invocation and must provide
    ``execute(session, args)``.
    """

    def decorate(cls: type) -> type:
        cls.__command__ = CommandInfo(scope, name, description)
        return cls

    return decorate


def command_info(cls: type) -> CommandInfo | None:
    return getattr(cls, "__command__", None)


class ActionCommand:
    """A registered command backed by an action class."""

    def __init__(self, action_class: type, info: CommandInfo, discovered: bool = False) -> None:
        self.action_class = action_class
        self.info = info
        self.discovered = discovered

    @property
    def scope(self) -> str:
        return self.info.scope

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def description(self) -> str:
        return self.info.description

    @property
    def key(self) -> str:
        return f"{self.scope}:{self.name}"

    def execute(self, session, args: list[str]):
        action = self.action_class()
        return action.execute(session, args)

    def __repr__(self) -> str:
        return f"ActionCommand({self.key!r}, {self.action_class.__qualname__})"
