"""
Graph use cases — ``roots`` and ``uses``.

``roots`` finds known projects that nothing else requires, so they can
be the starting points of a workspace. ``uses`` is the reverse of
``deps``: who depends directly on a module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bndx.core.errors import BndxError
from bndx.core.models.config import ExplorerConfig
from bndx.core.use_cases.listing import ListResult
from bndx.core.use_cases.workspace import load_known, open_catalog

logger = logging.getLogger(__name__)


@dataclass
class UsesResult:
    """Direct dependents of the requested modules."""

    requested: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"requested": self.requested, "dependents": self.dependents}


def run_roots(config: ExplorerConfig) -> ListResult:
    """Known projects (and their dependencies) with nothing depending on them."""
    result = ListResult()
    try:
        known = load_known(config)
        catalog = open_catalog(config, known)
        graph = catalog.dependency_subgraph(sorted(known))
    except BndxError as e:
        result.error = str(e)
        return result

    result.names = [name for name in graph.nodes if graph.in_degree(name) == 0]
    logger.info("%d of %d modules are roots", len(result.names), graph.number_of_nodes())
    return result


def run_uses(names: list[str], config: ExplorerConfig) -> UsesResult:
    """Modules whose build or test path names any of ``names``.

    Listed regardless of whether Eclipse already has them.
    """
    result = UsesResult(requested=list(names))
    try:
        catalog = open_catalog(config)
        dependents = catalog.dependent_modules(names)
    except BndxError as e:
        result.error = str(e)
        return result

    result.dependents = [m.name for m in dependents]
    return result
