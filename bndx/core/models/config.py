"""
Explorer configuration model — loaded from bndx.yml.

Every field has a default, so an absent config file is the same as an
empty one. CLI flags override whatever the file says.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class ExplorerConfig(BaseModel):
    """Where the workspaces live and how descriptors are named."""

    # ── Locations ────────────────────────────────────────────────
    bnd_workspace: Path = Path(".")
    eclipse_workspace: Path = Path("../../eclipse")

    # ── Descriptor conventions ───────────────────────────────────
    descriptor_file: str = "bnd.bnd"
    overrides_file: str = "bnd.overrides"
    identity_key: str = "Bundle-SymbolicName"
    build_path_key: str = "-buildpath"
    test_path_key: str = "-testpath"

    # ── Display ──────────────────────────────────────────────────
    show_all: bool = False

    def anchored(self, base: Path) -> ExplorerConfig:
        """Return a copy with relative workspace paths resolved against ``base``."""
        return self.model_copy(
            update={
                "bnd_workspace": _anchor(self.bnd_workspace, base),
                "eclipse_workspace": _anchor(self.eclipse_workspace, base),
            }
        )


def _anchor(path: Path, base: Path) -> Path:
    return path if path.is_absolute() else base / path
