"""Shared constants for bootshell."""

BOLD = "\033[1m"
RED = "\033[31m"
RESET = "\033[0m"

# Resource listing command classes, one fully-qualified name per line.
DISCOVERY_RESOURCE = "bootshell/commands.txt"

# Files collected from a classpath root as importable code locations.
ARCHIVE_SUFFIXES = (".zip", ".whl", ".pyz")

# Session variables.
USER_KEY = "USER"
APPLICATION_KEY = "APPLICATION"
SCOPE_KEY = "SCOPE"
MULTI_SCOPE_MODE_KEY = "MULTI_SCOPE_MODE"
PRINT_STACK_TRACES_KEY = "PRINT_STACK_TRACES"

DEFAULT_SCOPE_PATH = "shell:*"
