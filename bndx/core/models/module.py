"""
Module model — one bnd project directory and its descriptor.

A module is identified by its directory name. It may also carry a
published identity (``Bundle-SymbolicName``) that other descriptors use
to refer to it. Modules referenced by name but lacking a descriptor are
placeholders: they contribute no dependency edges.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class CookState(StrEnum):
    """Resolution status of a module's dependency list."""

    UNCOOKED = "uncooked"
    COOKING = "cooking"  # in progress: revisits return immediately
    COOKED = "cooked"


class ModuleDescriptor(BaseModel):
    """A workspace module, real or placeholder.

    ``dependencies`` holds arena indices into the owning catalog. It is
    meaningful only once ``state`` has left ``UNCOOKED``; the list object
    is assigned once and only appended to afterwards.
    """

    # ── Identity ─────────────────────────────────────────────────
    index: int
    name: str
    root: Path | None = None
    published_id: str = ""

    # ── Declared (from the descriptor) ───────────────────────────
    is_real: bool = False
    properties: dict[str, str] = Field(default_factory=dict)
    build_refs: list[str] = Field(default_factory=list)
    test_refs: list[str] = Field(default_factory=list)

    # ── Resolved (by the catalog) ────────────────────────────────
    state: CookState = CookState.UNCOOKED
    dependencies: list[int] = Field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return not self.is_real

    @property
    def is_cooked(self) -> bool:
        return self.state is CookState.COOKED

    @property
    def refs(self) -> list[str]:
        """Build references followed by test references, in declaration order."""
        return [*self.build_refs, *self.test_refs]

    def symbolic_name_differs_from_name(self) -> bool:
        """Whether the published id is a second, distinct identity."""
        return bool(self.published_id) and self.published_id != self.name

    def real_root(self) -> Path | None:
        """The root with symlinks resolved, or the plain root if that fails."""
        if self.root is None:
            return None
        try:
            return self.root.resolve(strict=True)
        except OSError:
            return self.root
