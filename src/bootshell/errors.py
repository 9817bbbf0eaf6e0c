"""Exception types raised by bootshell."""


class BootstrapError(Exception):
    """A failure that aborts the bootstrap before or during session setup."""


class UsageError(BootstrapError):
    """Malformed command line arguments."""


class InputError(BootstrapError):
    """The command input could not be read."""


class ConfigurationError(BootstrapError):
    """Invalid configuration or an unlistable classpath root."""


class ResolutionError(BootstrapError):
    """A command class name could not be resolved in the loading context."""


class ShellError(Exception):
    """A failure raised while the shell runtime executes commands."""


class CommandNotFoundError(ShellError):
    def __init__(self, command: str) -> None:
        super().__init__(f"Command not found: {command}")
        self.command = command
