"""
Dependency use cases — ``deps`` and ``gaps``.

``deps`` lists modules and everything they require, dependencies first.
``gaps`` lists what the modules already in Eclipse require but Eclipse
does not have yet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bndx.core.errors import BndxError, WorkspaceError
from bndx.core.models.config import ExplorerConfig
from bndx.core.services.eclipse import eclipse_sort_key
from bndx.core.use_cases.workspace import ModuleEntry, load_known, open_catalog

logger = logging.getLogger(__name__)


@dataclass
class DepsResult:
    """Result of the deps and gaps use cases."""

    requested: list[str] = field(default_factory=list)
    entries: list[ModuleEntry] = field(default_factory=list)
    cycles: list[tuple[str, str]] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "requested": self.requested,
            "modules": [e.to_dict() for e in self.entries],
            "cycles": [list(edge) for edge in self.cycles],
        }


def run_deps(
    names: list[str],
    config: ExplorerConfig,
    show_all: bool = False,
    print_names: bool = False,
    eclipse_ordering: bool = False,
) -> DepsResult:
    """Resolve ``names`` to their ordered dependency closure.

    Args:
        names: Module directory names or published ids.
        config: Workspace locations and descriptor conventions.
        show_all: Include modules already in the Eclipse workspace.
            A missing Eclipse workspace is tolerated in this mode.
        print_names: Sort on names rather than paths (eclipse ordering only).
        eclipse_ordering: Reorder as Eclipse's import dialog does.

    Returns:
        DepsResult whose entries are dependencies-first unless reordered.
    """
    result = DepsResult(requested=list(names))
    show_all = show_all or config.show_all

    try:
        known = _known_or_empty(config) if show_all else load_known(config)
        catalog = open_catalog(config, known)
        catalog.show_all_modules(show_all)
        modules = catalog.visible_required_modules(names)
    except BndxError as e:
        result.error = str(e)
        return result

    result.entries = [ModuleEntry.of(m, catalog) for m in modules]
    result.cycles = list(catalog.cycles)

    if eclipse_ordering:
        result.entries.sort(key=lambda e: eclipse_sort_key(e.name if print_names else e.path))

    logger.info("Resolved %s to %d modules", ", ".join(names), len(result.entries))
    return result


def _known_or_empty(config: ExplorerConfig) -> frozenset[str]:
    try:
        return load_known(config)
    except WorkspaceError as e:
        logger.info("Treating every module as unknown: %s", e)
        return frozenset()


def run_gaps(config: ExplorerConfig) -> DepsResult:
    """Modules required by Eclipse's projects but missing from Eclipse."""
    result = DepsResult()

    try:
        known = load_known(config)
        catalog = open_catalog(config, known)
        modules = catalog.required_modules(sorted(known), ignore_missing=True)
    except BndxError as e:
        result.error = str(e)
        return result

    result.requested = sorted(known)
    result.entries = [ModuleEntry.of(m, catalog) for m in modules if catalog.is_unknown(m)]
    result.cycles = list(catalog.cycles)
    return result
