"""Directory scanning into an immutable size tree."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from duview.models import INVALID_NAME, DirNode, FileNode, Node
from duview.sizing import LogicalSizeProbe, SizeProbe, logical_size

logger = logging.getLogger(__name__)


def display_name(name: str) -> str:
    """Return ``name`` if it is valid text, else the invalid-name placeholder."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        logger.warning("Failed to decode file name: %r", name)
        return INVALID_NAME
    return name or INVALID_NAME


def scan_file(path: Path | str, name: str, probe: SizeProbe) -> FileNode:
    """Measure a single file."""
    size = logical_size(path)
    return FileNode(name=name, size_logical=size, size_on_disk=probe.on_disk_size(path, size))


def scan_tree(
    path: Path | str,
    probe: SizeProbe | None = None,
    progress_callback: Callable[[str], None] | None = None,
) -> Node:
    """
    Build the size tree rooted at ``path``.

    Depth-first and single-threaded. Never raises for filesystem errors:
    unreadable entries are skipped, unreadable directories become empty
    files and vanished paths become zero-size files.

    Args:
        path: File or directory to scan
        probe: On-disk size strategy (logical size when omitted)
        progress_callback: Optional callback(path) for each directory entered

    Returns:
        Root node of the tree
    """
    path = Path(path)
    probe = probe or LogicalSizeProbe()
    name = display_name(path.name) if path.name else str(path)

    if path.is_dir():
        return _scan_dir(path, name, probe, progress_callback)
    if path.is_file():
        return scan_file(path, name, probe)
    return FileNode(name=name)


@dataclass
class _Listing:
    """A directory whose entries are still being turned into nodes."""

    path: Path
    name: str
    entries: list[os.DirEntry]
    position: int = 0
    children: list[Node] = field(default_factory=list)

    def next_entry(self) -> os.DirEntry | None:
        if self.position >= len(self.entries):
            return None
        entry = self.entries[self.position]
        self.position += 1
        return entry

    def finish(self) -> DirNode:
        # Stable sort, so equal sizes keep listing order
        self.children.sort(key=lambda node: node.size_on_disk, reverse=True)
        return DirNode(name=self.name, children=tuple(self.children))


def _open_listing(
    path: Path,
    name: str,
    progress_callback: Callable[[str], None] | None,
) -> _Listing | FileNode:
    """Read all entries of a directory, or a zero-size file if it cannot be opened."""
    if progress_callback:
        progress_callback(str(path))

    try:
        handle = os.scandir(path)
    except OSError as e:
        logger.warning("Failed to read dir %s: %s", path, e)
        return FileNode(name=name)

    entries: list[os.DirEntry] = []
    # The handle is closed before descending, so depth does not hold descriptors open
    with handle:
        try:
            for entry in handle:
                entries.append(entry)
        except OSError as e:
            logger.warning("Listing of %s was interrupted: %s", path, e)
    return _Listing(path=path, name=name, entries=entries)


def _scan_dir(
    path: Path,
    name: str,
    probe: SizeProbe,
    progress_callback: Callable[[str], None] | None,
) -> Node:
    root = _open_listing(path, name, progress_callback)
    if isinstance(root, FileNode):
        return root

    # Explicit stack instead of recursion, so tree depth is not bounded by the interpreter
    stack = [root]
    while True:
        listing = stack[-1]
        entry = listing.next_entry()
        if entry is None:
            stack.pop()
            node = listing.finish()
            if not stack:
                return node
            stack[-1].children.append(node)
            continue

        try:
            # Symlinks are followed and classified by their target
            if entry.is_file():
                listing.children.append(scan_file(entry.path, display_name(entry.name), probe))
            elif entry.is_dir():
                child = _open_listing(Path(entry.path), display_name(entry.name), progress_callback)
                if isinstance(child, FileNode):
                    listing.children.append(child)
                else:
                    stack.append(child)
        except OSError as e:
            logger.warning("Failed to determine file type of %s: %s", entry.path, e)
