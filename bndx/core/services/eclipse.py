"""
Eclipse workspace service — which modules the IDE already knows about.

Eclipse keeps one metadata directory per imported project under
``.metadata/.plugins/org.eclipse.core.resources/.projects``. The names of
those directories are the "known" modules; the catalog uses them only to
decide what to show.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from bndx.core.errors import WorkspaceError

logger = logging.getLogger(__name__)

PROJECTS_METADATA = Path(".metadata/.plugins/org.eclipse.core.resources/.projects")


def projects_metadata_dir(eclipse_workspace: Path) -> Path:
    """Locate the .projects metadata directory.

    Raises:
        WorkspaceError: If the workspace or its metadata directory is missing.
    """
    _verify_dir("eclipse workspace", eclipse_workspace)
    return _verify_dir(".projects dir", eclipse_workspace / PROJECTS_METADATA)


def known_modules(eclipse_workspace: Path) -> frozenset[str]:
    """Names of the projects imported into an Eclipse workspace.

    Raises:
        WorkspaceError: If the metadata can't be found or listed.
    """
    projects_dir = projects_metadata_dir(eclipse_workspace)
    try:
        names = frozenset(p.name for p in projects_dir.iterdir() if p.is_dir())
    except OSError as e:
        raise WorkspaceError(
            f"Could not enumerate Eclipse projects despite finding metadata location: "
            f"{projects_dir} ({e})"
        ) from e
    logger.info("Found %d projects in Eclipse workspace %s", len(names), eclipse_workspace)
    return names


def eclipse_sort_key(path: PurePath | str) -> str:
    """Sort key matching Eclipse's Import Existing Projects dialog.

    Dots sort before every other character, and a name sorts after any
    name it is a dotted prefix of.
    """
    return str(path).replace(".", "\0") + "\1"


def _verify_dir(desc: str, directory: Path) -> Path:
    if directory.is_dir():
        return directory
    raise WorkspaceError(f"Could not locate {desc}: {directory}")
