"""Unit tests for bootshell.loader."""

import os
import sys

import pytest

from bootshell.builtins import EchoCommand, HelpCommand
from bootshell.errors import ConfigurationError, ResolutionError
from bootshell.loader import (
    PROCESS_CONTEXT,
    ArchiveContext,
    ArchiveFinder,
    build_loading_context,
    collect_archives,
)

COMMANDS_MODULE = "class Hello:\n    source = 'archive'\n\nNOT_A_CLASS = 1\n"


# ---------------------------------------------------------------------------
# building the context
# ---------------------------------------------------------------------------


class TestBuildLoadingContext:
    def test_no_classpath_reuses_process_context(self):
        assert build_loading_context(None) is PROCESS_CONTEXT

    def test_classpath_layers_archives_over_parent(self, tmp_path, make_archive):
        archive = make_archive(tmp_path / "lib" / "cmds.zip", {"a.txt": "x"})

        context = build_loading_context(tmp_path)

        assert isinstance(context, ArchiveContext)
        assert context.parent is PROCESS_CONTEXT
        assert context.locations == (archive,)

    def test_missing_root_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError, match="missing"):
            build_loading_context(tmp_path / "missing")

    def test_file_root_is_configuration_error(self, tmp_path):
        path = tmp_path / "plain.zip"
        path.write_text("not a directory")
        with pytest.raises(ConfigurationError):
            build_loading_context(path)


class TestCollectArchives:
    def test_walks_depth_first_and_filters_suffixes(self, tmp_path, make_archive):
        nested = make_archive(tmp_path / "a" / "b" / "y.whl", {})
        inner = make_archive(tmp_path / "a" / "x.zip", {})
        top = make_archive(tmp_path / "c.pyz", {})
        (tmp_path / "notes.txt").write_text("skip me")
        (tmp_path / "a" / "lib.jar").write_text("skip me")

        assert collect_archives(tmp_path) == [nested, inner, top]

    def test_empty_directory(self, tmp_path):
        assert collect_archives(tmp_path) == []

    def test_symlink_loop_is_walked_once(self, tmp_path, make_archive):
        archive = make_archive(tmp_path / "a" / "x.zip", {})
        os.symlink(tmp_path, tmp_path / "a" / "loop")

        assert collect_archives(tmp_path) == [archive]


# ---------------------------------------------------------------------------
# class resolution
# ---------------------------------------------------------------------------


class TestLoadClass:
    def test_loads_class_from_archive_package(self, tmp_path, make_archive):
        make_archive(
            tmp_path / "cmds.zip",
            {"bsfixture_pkg/__init__.py": "", "bsfixture_pkg/cmds.py": COMMANDS_MODULE},
        )
        context = build_loading_context(tmp_path)

        cls = context.load_class("bsfixture_pkg.cmds.Hello")

        assert cls.__name__ == "Hello"
        assert cls.source == "archive"

    def test_archive_shadows_parent(self, tmp_path, make_archive, monkeypatch):
        parent_dir = tmp_path / "parent"
        parent_dir.mkdir()
        (parent_dir / "bsfixture_shadow.py").write_text("class Hello:\n    source = 'parent'\n")
        monkeypatch.syspath_prepend(str(parent_dir))
        make_archive(tmp_path / "lib" / "cmds.zip", {"bsfixture_shadow.py": COMMANDS_MODULE})

        context = build_loading_context(tmp_path / "lib")

        assert context.load_class("bsfixture_shadow.Hello").source == "archive"

    def test_falls_back_to_parent(self, tmp_path, make_archive, monkeypatch):
        parent_dir = tmp_path / "parent"
        parent_dir.mkdir()
        (parent_dir / "bsfixture_parentonly.py").write_text("class Hello:\n    source = 'parent'\n")
        monkeypatch.syspath_prepend(str(parent_dir))
        make_archive(tmp_path / "lib" / "cmds.zip", {"bsfixture_other.py": ""})

        context = build_loading_context(tmp_path / "lib")

        assert context.load_class("bsfixture_parentonly.Hello").source == "parent"

    def test_resource_directory_does_not_shadow_installed_package(self, tmp_path, make_archive):
        make_archive(tmp_path / "cmds.zip", {"bootshell/commands.txt": "x.Y\n"})
        context = build_loading_context(tmp_path)

        assert context.load_class("bootshell.builtins.EchoCommand") is EchoCommand

    def test_process_context_uses_import_system(self):
        assert PROCESS_CONTEXT.load_class("bootshell.builtins.HelpCommand") is HelpCommand

    @pytest.mark.parametrize(
        "name",
        [
            "bsfixture_nowhere.Hello",
            "bsfixture_pkg.cmds.Missing",
            "bsfixture_pkg.cmds.NOT_A_CLASS",
            "Hello",
        ],
    )
    def test_unresolvable_names_raise_resolution_error(self, tmp_path, make_archive, name):
        make_archive(
            tmp_path / "cmds.zip",
            {"bsfixture_pkg/__init__.py": "", "bsfixture_pkg/cmds.py": COMMANDS_MODULE},
        )
        context = build_loading_context(tmp_path)

        with pytest.raises(ResolutionError):
            context.load_class(name)

    def test_archive_code_imports_from_another_archive(self, tmp_path, make_archive):
        make_archive(tmp_path / "lib.zip", {"bsfixture_lib.py": "GREETING = 'hi'\n"})
        make_archive(
            tmp_path / "plugin.zip",
            {
                "bsfixture_plug.py": (
                    "import bsfixture_lib\n\n"
                    "class X:\n"
                    "    greeting = bsfixture_lib.GREETING\n"
                )
            },
        )
        context = build_loading_context(tmp_path)

        assert context.load_class("bsfixture_plug.X").greeting == "hi"
        # The library was loaded once and is shared with later lookups.
        assert context.import_module("bsfixture_lib") is sys.modules["bsfixture_lib"]

    def test_package_imports_its_own_submodules(self, tmp_path, make_archive):
        make_archive(
            tmp_path / "cmds.zip",
            {
                "bsfixture_pkg/__init__.py": "",
                "bsfixture_pkg/util.py": "VALUE = 7\n",
                "bsfixture_pkg/cmds.py": (
                    "from bsfixture_pkg.util import VALUE\n\nclass Hello:\n    value = VALUE\n"
                ),
            },
        )

        assert build_loading_context(tmp_path).load_class("bsfixture_pkg.cmds.Hello").value == 7

    @pytest.mark.parametrize(
        "body",
        [
            "raise RuntimeError('broken plugin')\n",
            "undefined_name\n",
            "def broken(:\n",
        ],
    )
    def test_import_time_failure_is_resolution_error(self, tmp_path, make_archive, body):
        make_archive(tmp_path / "cmds.zip", {"bsfixture_bad.py": body})
        context = build_loading_context(tmp_path)

        with pytest.raises(ResolutionError, match="bsfixture_bad.Cmd"):
            context.load_class("bsfixture_bad.Cmd")
        assert "bsfixture_bad" not in sys.modules

    def test_close_removes_import_hook(self, tmp_path, make_archive):
        make_archive(tmp_path / "lib.zip", {"bsfixture_lib.py": "class Y:\n    pass\n"})
        context = build_loading_context(tmp_path)
        context.load_class("bsfixture_lib.Y")
        assert any(isinstance(f, ArchiveFinder) for f in sys.meta_path)

        context.close()

        assert not any(isinstance(f, ArchiveFinder) for f in sys.meta_path)


# ---------------------------------------------------------------------------
# resources
# ---------------------------------------------------------------------------


class TestGetResources:
    def test_archive_resources_come_before_parent(self, tmp_path, make_archive, monkeypatch):
        parent_dir = tmp_path / "parent"
        (parent_dir / "bsfixture").mkdir(parents=True)
        (parent_dir / "bsfixture" / "commands.txt").write_text("parent.Command\n")
        monkeypatch.syspath_prepend(str(parent_dir))
        archive = make_archive(
            tmp_path / "lib" / "cmds.zip", {"bsfixture/commands.txt": "child.Command\n"}
        )

        resources = build_loading_context(tmp_path / "lib").get_resources("bsfixture/commands.txt")

        assert [r.location for r in resources] == [archive, parent_dir]
        with resources[0].open() as stream:
            assert stream.read() == "child.Command\n"
        with resources[1].open() as stream:
            assert stream.read() == "parent.Command\n"

    def test_each_archive_contributes_its_own_copy(self, tmp_path, make_archive):
        first = make_archive(tmp_path / "a.zip", {"bsfixture/commands.txt": "a.A\n"})
        second = make_archive(tmp_path / "b.zip", {"bsfixture/commands.txt": "b.B\n"})
        make_archive(tmp_path / "c.zip", {"other.txt": ""})

        resources = build_loading_context(tmp_path).get_resources("bsfixture/commands.txt")

        assert [r.location for r in resources] == [first, second]

    def test_no_matches(self, tmp_path):
        assert build_loading_context(tmp_path).get_resources("bsfixture/none.txt") == []

    def test_duplicate_sys_path_entries_are_listed_once(self, tmp_path, monkeypatch):
        (tmp_path / "bsfixture").mkdir()
        (tmp_path / "bsfixture" / "commands.txt").write_text("")
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.syspath_prepend(str(tmp_path))

        assert len(PROCESS_CONTEXT.get_resources("bsfixture/commands.txt")) == 1
