"""
Tests for the Eclipse workspace service — known projects and ordering.
"""

from pathlib import Path

import pytest

from bndx.core.errors import WorkspaceError
from bndx.core.services.eclipse import (
    PROJECTS_METADATA,
    eclipse_sort_key,
    known_modules,
    projects_metadata_dir,
)


class TestKnownModules:
    def test_lists_project_directories(self, make_eclipse):
        ws = make_eclipse(["core", "api"])
        assert known_modules(ws) == frozenset({"core", "api"})

    def test_ignores_files(self, make_eclipse):
        ws = make_eclipse(["core"])
        (ws / PROJECTS_METADATA / "stray.txt").write_text("")
        assert known_modules(ws) == frozenset({"core"})

    def test_empty_workspace(self, make_eclipse):
        assert known_modules(make_eclipse([])) == frozenset()

    def test_missing_workspace(self, tmp_path: Path):
        with pytest.raises(WorkspaceError, match="Could not locate eclipse workspace"):
            known_modules(tmp_path / "nope")

    def test_missing_metadata(self, tmp_path: Path):
        with pytest.raises(WorkspaceError, match=r"Could not locate \.projects dir"):
            known_modules(tmp_path)

    def test_metadata_dir(self, make_eclipse):
        ws = make_eclipse([])
        assert projects_metadata_dir(ws) == ws / PROJECTS_METADATA


class TestEclipseOrdering:
    def test_dotted_names_sort_first(self):
        ordered = sorted(["ab", "a", "a.c", "a.b"], key=eclipse_sort_key)
        assert ordered == ["a.b", "a.c", "a", "ab"]

    def test_accepts_paths(self):
        assert eclipse_sort_key(Path("x.y")) == "x\0y\1"

    def test_plain_names_sort_lexically(self):
        assert sorted(["util", "api", "core"], key=eclipse_sort_key) == ["api", "core", "util"]
