"""Service and command registry with parent fallback."""

from bootshell.runtime.action import ActionCommand


class Registry:
    """Holds commands keyed by `scope:name` plus arbitrary service objects."""

    def __init__(self, parent: "Registry | None" = None) -> None:
        self.parent = parent
        self._commands: dict[str, ActionCommand] = {}
        self._services: list[object] = []

    def register(self, service: object) -> None:
        # Commands with the same key replace each other, services of the same type too.
        if isinstance(service, ActionCommand):
            self._commands[service.key] = service
            return
        self._services = [s for s in self._services if type(s) is not type(service)]
        self._services.append(service)

    def unregister(self, service: object) -> None:
        if isinstance(service, ActionCommand):
            if self._commands.get(service.key) is service:
                del self._commands[service.key]
        elif service in self._services:
            self._services.remove(service)

    def get_command(self, key: str) -> ActionCommand | None:
        entry = self._commands.get(key)
        if entry is None and self.parent is not None:
            return self.parent.get_command(key)
        return entry

    def commands(self) -> list[ActionCommand]:
        """Return visible commands; local entries shadow the parent's."""
        merged = {}
        if self.parent is not None:
            merged.update((entry.key, entry) for entry in self.parent.commands())
        merged.update(self._commands)
        return list(merged.values())

    def get_services(self, kind: type) -> list:
        found = [service for service in self._services if isinstance(service, kind)]
        if self.parent is not None:
            found.extend(self.parent.get_services(kind))
        return found

    def get_service(self, kind: type):
        services = self.get_services(kind)
        return services[0] if services else None

    def has_service(self, kind: type) -> bool:
        return bool(self.get_services(kind))
