"""
Shared test fixtures — throwaway bnd and Eclipse workspaces.
"""

import textwrap
from pathlib import Path

import pytest

from bndx.core.services.eclipse import PROJECTS_METADATA


@pytest.fixture
def make_workspace(tmp_path: Path):
    """Factory: build a bnd workspace from {module name: bnd.bnd text}.

    A value of None creates the directory without a descriptor.
    """

    def _make(modules: dict[str, str | None]) -> Path:
        root = tmp_path / "bnd"
        root.mkdir(exist_ok=True)
        for name, descriptor in modules.items():
            module_dir = root / name
            module_dir.mkdir(exist_ok=True)
            if descriptor is not None:
                (module_dir / "bnd.bnd").write_text(textwrap.dedent(descriptor))
        return root

    return _make


@pytest.fixture
def sample_workspace(make_workspace) -> Path:
    """core <- util <- api, with api published as com.example.api."""
    return make_workspace({
        "core": "Bundle-SymbolicName: core\n",
        "util": "-buildpath: core\n",
        "api": """\
            Bundle-SymbolicName: com.example.api
            -buildpath: core,\\
                util
        """,
    })


@pytest.fixture
def make_eclipse(tmp_path: Path):
    """Factory: build an Eclipse workspace that knows the given projects."""

    def _make(names: list[str]) -> Path:
        ws = tmp_path / "eclipse"
        projects = ws / PROJECTS_METADATA
        projects.mkdir(parents=True, exist_ok=True)
        for name in names:
            (projects / name).mkdir()
        return ws

    return _make
