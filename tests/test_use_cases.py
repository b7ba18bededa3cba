"""
Tests for use cases — deps, gaps, known, list, roots, uses.
"""

from pathlib import Path

import pytest

from bndx.core.models.config import ExplorerConfig
from bndx.core.use_cases.deps import run_deps, run_gaps
from bndx.core.use_cases.graph import run_roots, run_uses
from bndx.core.use_cases.listing import run_known, run_list


@pytest.fixture
def config(sample_workspace, make_eclipse) -> ExplorerConfig:
    return ExplorerConfig(
        bnd_workspace=sample_workspace,
        eclipse_workspace=make_eclipse(["core"]),
    )


def entry_names(result) -> list[str]:
    return [e.name for e in result.entries]


class TestDeps:
    def test_hides_known(self, config):
        result = run_deps(["api"], config)
        assert result.error is None
        assert entry_names(result) == ["util", "api"]

    def test_show_all(self, config):
        result = run_deps(["api"], config, show_all=True)
        assert entry_names(result) == ["core", "util", "api"]
        assert [e.known for e in result.entries] == [True, False, False]

    def test_show_all_from_config(self, config):
        result = run_deps(["api"], config.model_copy(update={"show_all": True}))
        assert entry_names(result) == ["core", "util", "api"]

    def test_by_published_id(self, config):
        assert entry_names(run_deps(["com.example.api"], config)) == ["util", "api"]

    def test_paths_are_resolved(self, config, sample_workspace: Path):
        result = run_deps(["util"], config)
        assert [e.path for e in result.entries] == [str((sample_workspace / "util").resolve())]

    def test_eclipse_ordering(self, make_workspace, make_eclipse):
        ws = make_workspace({
            "com.ibm.ws": "",
            "com.ibm.ws.kernel": "-buildpath: com.ibm.ws\n",
            "com.ibm.wsx": "-buildpath: com.ibm.ws.kernel\n",
        })
        config = ExplorerConfig(bnd_workspace=ws, eclipse_workspace=make_eclipse([]))
        result = run_deps(["com.ibm.wsx"], config, print_names=True, eclipse_ordering=True)
        assert entry_names(result) == ["com.ibm.ws.kernel", "com.ibm.ws", "com.ibm.wsx"]

    def test_missing_module(self, config):
        result = run_deps(["ghost"], config)
        assert "does not exist" in result.error
        assert result.to_dict() == {"error": result.error}

    def test_missing_eclipse_workspace(self, sample_workspace: Path, tmp_path: Path):
        config = ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=tmp_path / "none")
        result = run_deps(["api"], config)
        assert "Could not locate eclipse workspace" in result.error

    def test_show_all_tolerates_missing_eclipse(self, sample_workspace: Path, tmp_path: Path):
        config = ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=tmp_path / "none")
        result = run_deps(["api"], config, show_all=True)
        assert result.error is None
        assert entry_names(result) == ["core", "util", "api"]

    def test_undecodable_descriptor(self, make_workspace):
        ws = make_workspace({"core": ""})
        (ws / "core" / "bnd.bnd").write_bytes(b"Bundle-Name: Caf\xe9\n")
        result = run_deps(["core"], ExplorerConfig(bnd_workspace=ws), show_all=True)
        assert "Cannot read descriptor" in result.error

    def test_cycles_reported(self, make_workspace, make_eclipse):
        ws = make_workspace({"a": "-buildpath: b\n", "b": "-buildpath: a\n"})
        config = ExplorerConfig(bnd_workspace=ws, eclipse_workspace=make_eclipse([]))
        result = run_deps(["a"], config)
        assert entry_names(result) == ["b", "a"]
        assert result.to_dict()["cycles"] == [["b", "a"]]

    def test_to_dict(self, config):
        data = run_deps(["api"], config).to_dict()
        assert data["requested"] == ["api"]
        assert [m["name"] for m in data["modules"]] == ["util", "api"]


class TestGaps:
    def test_missing_from_eclipse(self, sample_workspace: Path, make_eclipse):
        config = ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=make_eclipse(["api"]))
        result = run_gaps(config)
        assert entry_names(result) == ["core", "util"]

    def test_known_outside_bnd_workspace_ignored(self, sample_workspace: Path, make_eclipse):
        ws = make_eclipse(["util", "RemoteSystemsTempFiles"])
        result = run_gaps(ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=ws))
        assert result.error is None
        assert entry_names(result) == ["core"]

    def test_nothing_missing(self, config):
        assert run_gaps(config).entries == []


class TestListing:
    def test_list_all(self, config):
        assert run_list(config).names == ["api", "core", "util"]

    def test_list_patterns(self, config):
        assert run_list(config, ["c*"]).names == ["core"]

    def test_list_bad_workspace(self, tmp_path: Path):
        result = run_list(ExplorerConfig(bnd_workspace=tmp_path / "none"))
        assert "Could not locate bnd workspace" in result.error

    def test_known(self, sample_workspace: Path, make_eclipse):
        config = ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=make_eclipse(["b", "a"]))
        result = run_known(config)
        assert result.names == ["a", "b"]
        assert result.to_dict() == {"total": 2, "modules": ["a", "b"]}


class TestGraph:
    def test_roots(self, sample_workspace: Path, make_eclipse):
        config = ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=make_eclipse(["core", "util"]))
        assert run_roots(config).names == ["util"]

    def test_roots_independent_modules(self, sample_workspace: Path, make_eclipse):
        config = ExplorerConfig(bnd_workspace=sample_workspace, eclipse_workspace=make_eclipse(["api", "core"]))
        assert run_roots(config).names == ["api"]

    def test_uses(self, config):
        result = run_uses(["core"], config)
        assert result.dependents == ["api", "util"]
        assert result.to_dict() == {"requested": ["core"], "dependents": ["api", "util"]}

    def test_uses_missing(self, config):
        assert "does not exist" in run_uses(["ghost"], config).error
