"""Run the resolved command text once, or hand over to the interactive loop."""

import logging

from bootshell.constants import MULTI_SCOPE_MODE_KEY, PRINT_STACK_TRACES_KEY
from bootshell.runtime import Session, log_exception

log = logging.getLogger(__name__)


def dispatch(session: Session, command: str, multi_scope_mode: bool = True) -> object:
    """Execute `command` in batch mode, or run the session loop when it is empty.

    Failures of a batch command are reported through the session and never raised.
    """
    if not command:
        log.debug("entering interactive mode")
        session.run()
        return None

    session.put(MULTI_SCOPE_MODE_KEY, str(multi_scope_mode).lower())
    session.put(PRINT_STACK_TRACES_KEY, "execution")
    try:
        return session.execute(command)
    except Exception as e:
        log_exception(session, e)
        return None
