"""Command-line interface for bootshell."""

import logging
import sys

from bootshell.bootstrap import USAGE
from bootshell.config import load_config
from bootshell.errors import BootstrapError, UsageError
from bootshell.main import Main

log = logging.getLogger("bootshell")


def main(argv: list[str] | None = None) -> int:
    """Bootstrap and run the shell; return the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config()
    except BootstrapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        Main(config).run(args)
    except UsageError as e:
        print(f"Error: {e}\n{USAGE}", file=sys.stderr)
        return 2
    except BootstrapError as e:
        log.debug("bootstrap failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
