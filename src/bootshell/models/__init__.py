"""Model package for bootshell."""

from bootshell.models.bootstrap_config import BootstrapConfig
from bootshell.models.shell_config import DEFAULT_APPLICATION, DEFAULT_USER, ShellConfig

__all__ = [
    "BootstrapConfig",
    "DEFAULT_APPLICATION",
    "DEFAULT_USER",
    "ShellConfig",
]
