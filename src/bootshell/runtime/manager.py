"""Lifecycle manager that turns classes into registry entries."""

import logging

from bootshell.runtime.action import ActionCommand, command_info
from bootshell.runtime.registry import Registry

log = logging.getLogger(__name__)


class Manager:
    """Register command classes into `registrations`.

    `dependencies` is handed to custom services that define ``bind``. A manager
    created for discovery (`discovered=True`) also accepts classes that are not
    commands and registers an instance of them as a service.
    """

    def __init__(
        self, dependencies: Registry, registrations: Registry, discovered: bool = False
    ) -> None:
        self.dependencies = dependencies
        self.registrations = registrations
        self.discovered = discovered
        self._registered: dict[type, object] = {}

    def register(self, cls: type) -> object:
        info = command_info(cls)
        if info is not None:
            entry: object = ActionCommand(cls, info, discovered=self.discovered)
        elif self.discovered:
            entry = cls()
            bind = getattr(entry, "bind", None)
            if callable(bind):
                bind(self.dependencies)
        else:
            raise TypeError(f"{cls.__module__}.{cls.__qualname__} is not a command")

        previous = self._registered.get(cls)
        if previous is not None:
            self.registrations.unregister(previous)
        self.registrations.register(entry)
        self._registered[cls] = entry
        log.debug("registered %r (discovered=%s)", entry, self.discovered)
        return entry

    def unregister(self, cls: type) -> None:
        entry = self._registered.pop(cls, None)
        if entry is None:
            return
        self.registrations.unregister(entry)
        unbind = getattr(entry, "unbind", None)
        if callable(unbind):
            unbind()
