"""Register command classes listed in discovery resources."""

import logging
from collections.abc import Iterable, Iterator

from bootshell.constants import DISCOVERY_RESOURCE
from bootshell.errors import ResolutionError
from bootshell.loader import LoadingContext
from bootshell.runtime import Manager, Session

log = logging.getLogger(__name__)


def iter_command_names(lines: Iterable[str]) -> Iterator[str]:
    """Yield class names from resource lines, skipping blanks and `#` comments."""
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        yield line


def discover_commands(
    session: Session,
    context: LoadingContext,
    resource: str = DISCOVERY_RESOURCE,
    *,
    fail_fast: bool = True,
) -> list[type]:
    """Register every class listed in every `resource` visible through `context`.

    With `fail_fast` an unresolvable name aborts discovery with ResolutionError;
    otherwise it is logged and skipped. Returns the registered classes in order.
    """
    manager = Manager(session.registry, session.factory.registry, discovered=True)
    registered: list[type] = []
    for found in context.get_resources(resource):
        log.debug("reading command list %s from %s", found.name, found.location)
        with found.open() as stream:
            for name in iter_command_names(stream):
                try:
                    action_class = context.load_class(name)
                except ResolutionError as e:
                    if fail_fast:
                        raise
                    log.warning("skipping command %s: %s", name, e)
                    continue
                manager.register(action_class)
                registered.append(action_class)
    log.debug("discovered %d command class(es)", len(registered))
    return registered
