"""Commands shipped with bootshell."""

from bootshell.constants import BOLD, RESET
from bootshell.runtime import command, supports_color


@command("shell", "echo", "Print the arguments")
class EchoCommand:
    def execute(self, session, args):
        print(" ".join(args), file=session.out)


@command("shell", "help", "List available commands")
class HelpCommand:
    def execute(self, session, args):
        color = supports_color(session.out)
        for entry in sorted(session.registry.commands(), key=lambda c: c.key):
            name = f"{BOLD}{entry.key}{RESET}" if color else entry.key
            print(f"  {name}  {entry.description}".rstrip(), file=session.out)


@command("shell", "exit", "Close the session")
class ExitCommand:
    def execute(self, session, args):
        session.close()
