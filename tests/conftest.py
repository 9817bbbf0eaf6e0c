import sys
import zipfile
from pathlib import Path

import pytest

from bootshell.loader import ArchiveFinder

FIXTURE_PREFIX = "bsfixture"


@pytest.fixture
def make_archive():
    """Return a helper that writes a zip archive with the given members."""

    def _make(path: Path, files: dict[str, str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as archive:
            for name, content in files.items():
                archive.writestr(name, content)
        return path

    return _make


@pytest.fixture(autouse=True)
def clean_fixture_modules():
    """Drop modules and finders left behind by test archives."""
    yield
    sys.meta_path[:] = [f for f in sys.meta_path if not isinstance(f, ArchiveFinder)]
    for name in [n for n in sys.modules if n.startswith(FIXTURE_PREFIX)]:
        del sys.modules[name]
