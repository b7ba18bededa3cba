"""
Error taxonomy — everything the core raises on purpose.

Use cases catch ``BndxError`` and turn it into ``result.error``; only the
CLI decides how to render it and which exit code to use.
"""

from __future__ import annotations

from pathlib import Path


class BndxError(Exception):
    """Base class for expected, user-facing failures."""


class WorkspaceError(BndxError):
    """A workspace location is missing, not a directory, or unreadable."""


class MissingModuleError(BndxError):
    """A queried module has no descriptor in the workspace."""

    def __init__(self, name: str, root: Path | None = None) -> None:
        self.name = name
        self.root = root
        location = root if root is not None else name
        super().__init__(f"Module directory does not exist: {location}")


class DescriptorReadError(BndxError):
    """A descriptor or overrides file could not be read.

    Fatal for the whole run: a partially read catalog cannot be trusted
    for ordering.
    """

    def __init__(self, path: Path, cause: OSError | UnicodeDecodeError) -> None:
        self.path = path
        super().__init__(f"Cannot read descriptor {path}: {cause}")
