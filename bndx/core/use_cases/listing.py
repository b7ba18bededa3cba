"""
Listing use cases — ``list`` and ``known``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bndx.core.errors import BndxError
from bndx.core.models.config import ExplorerConfig
from bndx.core.use_cases.workspace import load_known, open_catalog


@dataclass
class ListResult:
    """A flat list of module names."""

    names: list[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {"total": len(self.names), "modules": self.names}


def run_list(config: ExplorerConfig, patterns: list[str] | None = None) -> ListResult:
    """Modules matching any glob pattern, or every module when none given."""
    result = ListResult()
    try:
        catalog = open_catalog(config)
    except BndxError as e:
        result.error = str(e)
        return result

    modules = catalog.find_modules(patterns) if patterns else catalog.all_modules()
    result.names = [m.name for m in modules]
    return result


def run_known(config: ExplorerConfig) -> ListResult:
    """Projects already imported into the Eclipse workspace."""
    result = ListResult()
    try:
        result.names = sorted(load_known(config))
    except BndxError as e:
        result.error = str(e)
    return result
