"""
Workspace catalog — the module graph of a bnd workspace.

Two phases:

1. **Scan** (eager, in ``__init__``): every immediate subdirectory of the
   workspace holding a descriptor becomes a module record, indexed by
   its directory name and, when different, by its published id.
2. **Cook** (lazy, per query): a module's build and test references are
   resolved into records, recursively, each module at most once.

Records live in an arena (``_records``) and are addressed by index; the
name maps only ever point into it, so an alias and a directory name
share one record. Cooking marks a module ``COOKING`` before recursing,
which is what stops a dependency cycle from recursing forever.
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Iterable
from pathlib import Path

import networkx as nx

from bndx.core.errors import MissingModuleError, WorkspaceError
from bndx.core.models.config import ExplorerConfig
from bndx.core.models.module import CookState, ModuleDescriptor
from bndx.core.services.descriptor import describe_module

logger = logging.getLogger(__name__)


class Catalog:
    """All modules of one workspace, plus memoized dependency resolution.

    Args:
        workspace: The bnd workspace root to scan.
        known_modules: Names already present in the companion IDE
            workspace. Used only to decide what is visible.
        config: Descriptor naming conventions (defaults to bnd's).
    """

    def __init__(
        self,
        workspace: Path,
        known_modules: Iterable[str] = (),
        config: ExplorerConfig | None = None,
    ) -> None:
        if not workspace.is_dir():
            raise WorkspaceError(f"Could not locate bnd workspace: {workspace}")

        self.workspace = workspace
        self.known_modules = frozenset(known_modules)
        self.config = config or ExplorerConfig()
        self.show_all = self.config.show_all
        self.cycles: list[tuple[str, str]] = []

        self._records: list[ModuleDescriptor] = []
        self._by_raw_name: dict[str, int] = {}
        self._by_query: dict[str, int] = {}

        self._scan()

    # ── Scan ────────────────────────────────────────────────────────

    def _scan(self) -> None:
        try:
            children = sorted(self.workspace.iterdir())
        except OSError as e:
            raise WorkspaceError(f"Could not inspect bnd workspace: {self.workspace}") from e

        for child in children:
            if not child.is_dir() or not (child / self.config.descriptor_file).is_file():
                continue
            self._create(child.name)

        # Directory names win over published ids that collide with them
        for module in list(self._records):
            if not module.symbolic_name_differs_from_name():
                continue
            owner = self._by_raw_name.setdefault(module.published_id, module.index)
            if owner != module.index:
                logger.warning(
                    "Module '%s' publishes id '%s', which is already the module '%s'",
                    module.name,
                    module.published_id,
                    self._records[owner].name,
                )

        logger.info(
            "Scanned %s: %d modules, %d aliases",
            self.workspace,
            len(self._records),
            len(self._by_raw_name) - len(self._records),
        )

    def _create(self, name: str) -> ModuleDescriptor:
        module = describe_module(name, len(self._records), self.workspace, self.config)
        self._records.append(module)
        self._by_raw_name[name] = module.index
        return module

    # ── Lookup and cooking ──────────────────────────────────────────

    def get_raw(self, name: str) -> ModuleDescriptor:
        """The record for ``name``, creating a (likely placeholder) one if unseen."""
        index = self._by_raw_name.get(name)
        if index is None:
            return self._create(name)
        return self._records[index]

    def get_canonical(self, name: str) -> ModuleDescriptor:
        """The fully cooked record for ``name``, memoized per query string."""
        index = self._by_query.get(name)
        if index is None:
            module = self._cook(self.get_raw(name))
            self._by_query[name] = module.index
            return module
        return self._records[index]

    def _cook(self, module: ModuleDescriptor) -> ModuleDescriptor:
        if module.state is not CookState.UNCOOKED:
            return module

        module.state = CookState.COOKING
        module.dependencies = []
        for ref in module.refs:
            dep = self.get_raw(ref)
            if dep.is_placeholder:
                continue
            if dep.state is CookState.COOKING:
                self._note_cycle(module, dep)
            self._cook(dep)
            if dep.index not in module.dependencies:
                module.dependencies.append(dep.index)
        module.state = CookState.COOKED
        return module

    def _note_cycle(self, module: ModuleDescriptor, partner: ModuleDescriptor) -> None:
        edge = (module.name, partner.name)
        if edge in self.cycles:
            return
        self.cycles.append(edge)
        logger.warning(
            "Dependency cycle: '%s' requires '%s', which is still being resolved",
            module.name,
            partner.name,
        )

    def dependencies_of(self, module: ModuleDescriptor) -> list[ModuleDescriptor]:
        """Direct dependencies of a cooked module, in declaration order."""
        return [self._records[i] for i in module.dependencies]

    # ── Traversal ───────────────────────────────────────────────────

    def dfs(self, module: ModuleDescriptor) -> list[ModuleDescriptor]:
        """Post-order traversal: every dependency before its dependents.

        Modules are kept at their first position; a module met again is
        skipped, which also ends traversal around a cycle.
        """
        order: dict[int, ModuleDescriptor] = {}
        entered: set[int] = set()
        self._dfs(module, order, entered)
        return list(order.values())

    def _dfs(
        self,
        module: ModuleDescriptor,
        order: dict[int, ModuleDescriptor],
        entered: set[int],
    ) -> None:
        if module.index in entered:
            return
        entered.add(module.index)
        for dep in self.dependencies_of(module):
            self._dfs(dep, order, entered)
        order[module.index] = module

    def topological_order(self, name: str) -> list[ModuleDescriptor]:
        """Ordered closure of one module, itself last.

        Raises:
            MissingModuleError: If ``name`` has no descriptor.
        """
        module = self.get_canonical(name)
        if module.is_placeholder:
            raise MissingModuleError(name, module.root)
        return self.dfs(module)

    # ── Visibility ──────────────────────────────────────────────────

    def show_all_modules(self, show_all: bool) -> None:
        self.show_all = show_all

    def is_unknown(self, module: ModuleDescriptor) -> bool:
        return module.name not in self.known_modules

    def is_visible(self, module: ModuleDescriptor) -> bool:
        return self.show_all or self.is_unknown(module)

    # ── Queries ─────────────────────────────────────────────────────

    def required_modules(
        self,
        names: Iterable[str],
        ignore_missing: bool = False,
    ) -> list[ModuleDescriptor]:
        """Union of the ordered closures of ``names``, first occurrence wins.

        Args:
            names: Module names or published ids.
            ignore_missing: Skip names with no descriptor instead of raising.
        """
        order: dict[int, ModuleDescriptor] = {}
        for name in names:
            module = self.get_canonical(name)
            if module.is_placeholder:
                if ignore_missing:
                    logger.debug("Skipping '%s': not a module in this workspace", name)
                    continue
                raise MissingModuleError(name, module.root)
            for dep in self.dfs(module):
                order.setdefault(dep.index, dep)
        return list(order.values())

    def visible_required_modules(
        self,
        names: Iterable[str],
        ignore_missing: bool = False,
    ) -> list[ModuleDescriptor]:
        return [m for m in self.required_modules(names, ignore_missing) if self.is_visible(m)]

    def all_modules(self) -> list[ModuleDescriptor]:
        """Every real module, sorted by directory name."""
        real = (m for m in self._records if m.is_real)
        return sorted(real, key=lambda m: m.name)

    def find_modules(self, patterns: Iterable[str]) -> list[ModuleDescriptor]:
        """Real modules whose directory name matches any glob pattern."""
        patterns = list(patterns)
        return [
            m for m in self.all_modules()
            if any(fnmatch.fnmatchcase(m.name, p) for p in patterns)
        ]

    def dependent_modules(self, names: Iterable[str]) -> list[ModuleDescriptor]:
        """Real modules that depend directly on any of ``names``.

        Raises:
            MissingModuleError: If a name has no descriptor.
        """
        targets = set()
        for name in names:
            module = self.get_canonical(name)
            if module.is_placeholder:
                raise MissingModuleError(name, module.root)
            targets.add(module.index)
        return [
            m for m in self.all_modules()
            if targets.intersection(self.get_canonical(m.name).dependencies)
        ]

    def dependency_subgraph(
        self,
        names: Iterable[str],
        ignore_missing: bool = True,
    ) -> nx.DiGraph:
        """Graph over ``names`` and everything they require.

        Nodes are module names; each edge points from a dependent to its
        dependency, so a node with in-degree 0 is required by nothing.
        """
        graph = nx.DiGraph()
        for module in self.required_modules(names, ignore_missing):
            graph.add_node(module.name, root=module.root)
            for dep in self.dependencies_of(module):
                graph.add_edge(module.name, dep.name)
        return graph

    def __len__(self) -> int:
        return sum(1 for m in self._records if m.is_real)

    def __contains__(self, name: object) -> bool:
        return name in self._by_raw_name and self._records[self._by_raw_name[name]].is_real
