"""
Workspace opening — shared by every use case.

Builds the catalog and the known-module set from an ExplorerConfig.
Both raise ``BndxError`` subclasses; callers turn those into
``result.error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from bndx.core.models.config import ExplorerConfig
from bndx.core.models.module import ModuleDescriptor
from bndx.core.services.catalog import Catalog
from bndx.core.services.eclipse import known_modules

logger = logging.getLogger(__name__)


@dataclass
class ModuleEntry:
    """One line of output: a module, where it lives, and whether Eclipse has it."""

    name: str
    path: str
    known: bool = False

    @classmethod
    def of(cls, module: ModuleDescriptor, catalog: Catalog) -> ModuleEntry:
        root = module.real_root()
        path = root if root is not None else Path(module.name)
        return cls(name=module.name, path=str(path.absolute()), known=not catalog.is_unknown(module))

    def to_dict(self) -> dict:
        return {"name": self.name, "path": self.path, "known": self.known}


def load_known(config: ExplorerConfig) -> frozenset[str]:
    return known_modules(config.eclipse_workspace)


def open_catalog(config: ExplorerConfig, known: frozenset[str] = frozenset()) -> Catalog:
    logger.debug("Opening bnd workspace %s", config.bnd_workspace)
    return Catalog(config.bnd_workspace, known_modules=known, config=config)
