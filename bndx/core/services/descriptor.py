"""
Descriptor service — read a module's bnd.bnd into a ModuleDescriptor.

A descriptor is a Java-style properties file. An optional overrides file
next to it is read afterwards and wins per key. Only three keys matter
to the explorer: the published identity and the two path lists.

Pure parsing plus file reads — no catalog state lives here.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from bndx.core.errors import DescriptorReadError
from bndx.core.models.config import ExplorerConfig
from bndx.core.models.module import CookState, ModuleDescriptor

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_ESCAPED_CHARS = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"

# Path list tokens: "a, b;version=1.2, c;strategy=lowest"
_PATH_SPLIT = re.compile(r",\s*")


# ── Properties format ───────────────────────────────────────────────


def parse_properties(text: str, into: dict[str, str] | None = None) -> dict[str, str]:
    """Parse properties text, later keys overwriting earlier ones.

    Args:
        text: The file contents.
        into: Existing mapping to layer onto (modified in place).

    Returns:
        The mapping, in first-insertion key order.
    """
    props = {} if into is None else into
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        props[_unescape(key)] = _unescape(value)
    return props


def _logical_lines(text: str):
    """Yield logical lines: comments dropped, continuations joined."""
    pending: str | None = None
    for natural in _LINE_BREAK.split(text):
        line = natural.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
            pending = ""
        if _continues(line):
            pending += line[:-1]
            continue
        yield pending + line
        pending = None
    if pending:
        yield pending


def _continues(line: str) -> bool:
    """A line continues when it ends in an odd number of backslashes."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _SEPARATORS or c in _WHITESPACE:
            break
        i += 1
    key, rest = line[:i], line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(s: str) -> str:
    def repl(m: re.Match[str]) -> str:
        esc = m.group(1)
        if len(esc) == 5:
            return chr(int(esc[1:], 16))
        return _ESCAPED_CHARS.get(esc, esc)

    return _ESCAPE.sub(repl, s)


# ── Path lists ──────────────────────────────────────────────────────


def strip_attributes(token: str) -> str:
    """Drop ``;attr=value`` suffixes, keeping only the bare reference."""
    return token.split(";", 1)[0].strip()


def split_path_list(value: str | None) -> list[str]:
    """Split a -buildpath/-testpath value into bare module references.

    An absent or empty value yields an empty list.
    """
    if not value:
        return []
    refs = (strip_attributes(token) for token in _PATH_SPLIT.split(value))
    return [ref for ref in refs if ref]


# ── Descriptor files ────────────────────────────────────────────────


def load_descriptor(root: Path, descriptor_file: str, overrides_file: str) -> dict[str, str]:
    """Read a module's descriptor, then its overrides file if present.

    Raises:
        DescriptorReadError: If either file exists but cannot be read.
    """
    props: dict[str, str] = {}
    _load_into(root / descriptor_file, props)
    overrides = root / overrides_file
    if overrides.is_file():
        logger.debug("Applying overrides from %s", overrides)
        _load_into(overrides, props)
    return props


def _load_into(path: Path, props: dict[str, str]) -> None:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorReadError(path, e) from e
    parse_properties(text, into=props)


def resolve_root(workspace: Path, name: str) -> Path | None:
    """Map a module name to its directory, or None if it can't be one.

    A name must be a single path segment; anything else is treated as
    "module not found" rather than an error.
    """
    if not name or name in (".", "..") or "\0" in name:
        return None
    if "/" in name or os.sep in name or (os.altsep and os.altsep in name):
        return None
    return workspace / name


def describe_module(
    name: str,
    index: int,
    workspace: Path,
    config: ExplorerConfig,
) -> ModuleDescriptor:
    """Build the descriptor record for ``name``.

    Names without a directory, or whose directory lacks a descriptor
    file, become placeholders: already cooked, with no dependencies.
    """
    root = resolve_root(workspace, name)
    is_real = root is not None and (root / config.descriptor_file).is_file()

    if not is_real:
        logger.debug("Module '%s' has no descriptor; using a placeholder", name)
        return ModuleDescriptor(
            index=index,
            name=name,
            root=root,
            published_id=name,
            is_real=False,
            state=CookState.COOKED,
        )

    assert root is not None
    props = load_descriptor(root, config.descriptor_file, config.overrides_file)
    module = ModuleDescriptor(
        index=index,
        name=name,
        root=root,
        published_id=props.get(config.identity_key, ""),
        is_real=True,
        properties=props,
        build_refs=split_path_list(props.get(config.build_path_key)),
        test_refs=split_path_list(props.get(config.test_path_key)),
    )
    logger.debug(
        "Parsed module '%s': id=%s, build=%d, test=%d",
        name,
        module.published_id or "-",
        len(module.build_refs),
        len(module.test_refs),
    )
    return module
