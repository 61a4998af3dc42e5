"""Thread-safe navigation over a scanned size tree."""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from duview.errors import NavigationCorruptedError
from duview.models import DirNode, Node, SizeItem
from duview.scanner import scan_tree
from duview.sizing import SizePolicy, make_probe
from duview.view import project_node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """An opened directory and its position among its parent's children."""

    node: Node
    index: int


class NavigationState:
    """
    Root of the current scan plus the stack of opened directories.

    All reads and writes of the root and the stack happen under one lock.
    The filesystem walk of a rescan runs outside it; only the swap of the
    new root is atomic, and it always resets navigation to the root.

    Conventions for callers:
        step_into returns None when the target is a file (nothing changed)
        and the root view when the index is out of range (navigation reset).
        step_out returns None when already at the root.
    """

    def __init__(self, policy: SizePolicy = SizePolicy.LOGICAL):
        self.policy = policy
        self._lock = threading.Lock()
        self._scan_lock = threading.Lock()
        self._root: Node = DirNode.empty()
        self._navigation: list[Frame] = []

    def scan_root_from(
        self,
        path: Path | str,
        progress_callback: Callable[[str], None] | None = None,
    ) -> list[SizeItem]:
        """
        Scan ``path``, install it as the new root and return the root view.

        Raises:
            ClusterSizeError: If the on-disk size policy cannot be set up for ``path``
        """
        with self._scan_lock:
            probe = make_probe(self.policy, path)
            logger.info("Scanning %s (%s sizes)", path, probe.policy.value)
            root = scan_tree(path, probe, progress_callback)
            with self._lock:
                self._root = root
                self._navigation.clear()
                return project_node(self._root)

    def step_into(self, index: int) -> Optional[list[SizeItem]]:
        """Open child ``index`` of the current directory."""
        with self._lock:
            current = self._current_node()
            if isinstance(current, DirNode):
                children = current.children
            elif self._navigation:
                raise NavigationCorruptedError(
                    f"Current node {current.name!r} is a file rather than a dir"
                )
            else:
                # A root that is a file (unreadable or non-directory scan target)
                children = ()

            if index < 0 or index >= len(children):
                logger.warning(
                    "Step into index %d outside of %d elements, returning to root",
                    index,
                    len(children),
                )
                self._navigation.clear()
                return project_node(self._root)

            target = children[index]
            if target.is_file:
                logger.info("Ignoring step into file %r", target.name)
                return None

            self._navigation.append(Frame(node=target, index=index))
            return project_node(target)

    def step_out(self) -> Optional[tuple[int, list[SizeItem]]]:
        """Close the current directory.

        Returns:
            Tuple of (index of the closed directory among its siblings, parent view)
        """
        with self._lock:
            if not self._navigation:
                return None
            left = self._navigation.pop()
            return left.index, project_node(self._current_node())

    def current_items(self) -> list[SizeItem]:
        """View of the currently open directory."""
        with self._lock:
            return project_node(self._current_node())

    def breadcrumbs(self) -> list[str]:
        """Names from the root down to the currently open directory."""
        with self._lock:
            return [self._root.name] + [frame.node.name for frame in self._navigation]

    @property
    def depth(self) -> int:
        with self._lock:
            return len(self._navigation)

    def _current_node(self) -> Node:
        if self._navigation:
            return self._navigation[-1].node
        return self._root
