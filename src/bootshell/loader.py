"""Layered code-loading contexts used to resolve discovered command classes.

The process context resolves names through the normal import system and finds
resources on ``sys.path``. A classpath root adds an ``ArchiveContext`` on top of
it: modules and resources inside the collected archives are looked up first and
anything they do not provide falls through to the parent.
"""

import importlib
import importlib.util
import io
import logging
import os
import sys
import zipfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from importlib.abc import MetaPathFinder
from importlib.machinery import ModuleSpec, PathFinder
from pathlib import Path
from types import ModuleType
from typing import TextIO

from bootshell.constants import ARCHIVE_SUFFIXES
from bootshell.errors import ConfigurationError, ResolutionError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    """A named resource inside a directory or a zip archive."""

    location: Path
    name: str

    @contextmanager
    def open(self) -> Iterator[TextIO]:
        if self.location.is_dir():
            with open(self.location / self.name, encoding="utf-8") as f:
                yield f
            return
        with zipfile.ZipFile(self.location) as archive:
            with io.TextIOWrapper(archive.open(self.name), encoding="utf-8") as f:
                yield f


def _find_resource(location: Path, name: str) -> Resource | None:
    if location.is_dir():
        return Resource(location, name) if (location / name).is_file() else None
    if not zipfile.is_zipfile(location):
        return None
    with zipfile.ZipFile(location) as archive:
        try:
            archive.getinfo(name)
        except KeyError:
            return None
    return Resource(location, name)


class LoadingContext:
    """The process's own import system."""

    parent: "LoadingContext | None" = None

    def import_module(self, name: str) -> ModuleType:
        return importlib.import_module(name)

    def resource_locations(self) -> list[Path]:
        return [Path(entry or os.curdir) for entry in sys.path]

    def close(self) -> None:
        """Release import hooks installed by this context."""

    def get_resources(self, name: str) -> list[Resource]:
        """Return every resource called `name`, own locations before the parent's."""
        resources: list[Resource] = []
        seen: set[str] = set()
        context: LoadingContext | None = self
        while context is not None:
            for location in context.resource_locations():
                key = os.path.realpath(location)
                if key in seen:
                    continue
                seen.add(key)
                resource = _find_resource(location, name)
                if resource is not None:
                    resources.append(resource)
            context = context.parent
        return resources

    def load_class(self, name: str) -> type:
        """Resolve a fully-qualified `package.module.Class` name to the class."""
        module_name, _, attr = name.rpartition(".")
        if not module_name or not attr:
            raise ResolutionError(f"Not a fully-qualified class name: {name!r}")
        try:
            module = self.import_module(module_name)
        except Exception as e:
            raise ResolutionError(f"Unable to load {name}: {e}") from e
        value = getattr(module, attr, None)
        if not isinstance(value, type):
            raise ResolutionError(f"Unable to load {name}: no class {attr} in {module_name}")
        return value


class ArchiveFinder(MetaPathFinder):
    """Find top-level modules in archive locations ahead of ``sys.path``.

    Installed while an ``ArchiveContext`` is open so that imports made by
    archive code see every archive on the classpath.
    """

    def __init__(self, locations: Sequence[Path]) -> None:
        self.search = [os.fspath(location) for location in locations]

    def find_spec(self, fullname, path=None, target=None) -> ModuleSpec | None:
        # Submodules resolve through their package's __path__.
        if path is not None:
            return None
        spec = PathFinder.find_spec(fullname, self.search)
        # Namespace portions have no origin and must not shadow real packages.
        if spec is None or spec.origin is None:
            return None
        return spec

    def owns(self, module: ModuleType) -> bool:
        origin = getattr(getattr(module, "__spec__", None), "origin", None)
        if origin is None:
            return False
        return any(origin.startswith(location + os.sep) for location in self.search)


class ArchiveContext(LoadingContext):
    """Archives searched before falling back to a parent context."""

    def __init__(self, locations: Sequence[Path], parent: LoadingContext) -> None:
        self.locations = tuple(locations)
        self.parent = parent
        self._modules: dict[str, ModuleType] = {}
        self._finder = ArchiveFinder(self.locations)

    def resource_locations(self) -> list[Path]:
        return list(self.locations)

    def close(self) -> None:
        if self._finder in sys.meta_path:
            sys.meta_path.remove(self._finder)

    def import_module(self, name: str) -> ModuleType:
        module = self._modules.get(name)
        if module is not None:
            return module
        # Already imported from one of our archives by other archive code.
        module = sys.modules.get(name)
        if module is not None and self._finder.owns(module):
            self._modules[name] = module
            return module

        spec = self._find_spec(name)
        if spec is None:
            return self.parent.import_module(name)

        if self._finder not in sys.meta_path:
            sys.meta_path.insert(0, self._finder)
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(name, None)
            raise
        package_name, _, child = name.rpartition(".")
        if package_name:
            setattr(self._modules[package_name], child, module)
        self._modules[name] = module
        log.debug("loaded %s from %s", name, spec.origin)
        return module

    def _find_spec(self, name: str) -> ModuleSpec | None:
        package_name, _, _ = name.rpartition(".")
        if not package_name:
            return self._finder.find_spec(name)
        self.import_module(package_name)
        package = self._modules.get(package_name)
        if package is None:
            # Submodules of a parent-owned package stay with the parent.
            return None
        spec = PathFinder.find_spec(name, list(getattr(package, "__path__", [])))
        if spec is None or spec.origin is None:
            return None
        return spec


PROCESS_CONTEXT = LoadingContext()


def collect_archives(root: Path) -> list[Path]:
    """Walk `root` depth-first and return every archive file below it."""
    archives: list[Path] = []
    _collect_archives(root, archives, set())
    return archives


def _collect_archives(directory: Path, archives: list[Path], visited: set[str]) -> None:
    # Symlinked directories may point back up the tree.
    real = os.path.realpath(directory)
    if real in visited:
        return
    visited.add(real)
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise ConfigurationError(f"Unable to list classpath directory {directory}: {e}") from e
    for entry in entries:
        if entry.is_dir():
            _collect_archives(entry, archives, visited)
        elif entry.is_file() and entry.name.endswith(ARCHIVE_SUFFIXES):
            archives.append(entry)


def build_loading_context(
    classpath: Path | None, parent: LoadingContext = PROCESS_CONTEXT
) -> LoadingContext:
    """Return `parent` unchanged, or a new archive layer over it for `classpath`."""
    if classpath is None:
        return parent
    archives = collect_archives(classpath)
    log.debug("classpath %s: %d archive(s) %s", classpath, len(archives), archives)
    return ArchiveContext(archives, parent)
