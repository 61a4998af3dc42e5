"""Projection of tree nodes into flat display rows."""

from typing import Sequence

from duview.formatting import readable_size, size_string
from duview.models import FileNode, Node, SizeItem


def project(children: Sequence[Node]) -> list[SizeItem]:
    """
    Turn sibling nodes into display rows, keeping their order.

    Relative sizes are normalized against the largest sibling, so the largest
    row in each dimension gets exactly 1.0.
    """
    max_logical = max((child.size_logical for child in children), default=0) or 1
    max_disk = max((child.size_on_disk for child in children), default=0) or 1
    return [
        SizeItem(
            name=child.name,
            size_string=size_string(child.size_logical, child.size_on_disk),
            relative_real_size=child.size_logical / max_logical,
            relative_disk_size=child.size_on_disk / max_disk,
            is_file=child.is_file,
        )
        for child in children
    ]


def project_node(node: Node) -> list[SizeItem]:
    """Rows for viewing ``node``: its children, or the file itself."""
    if isinstance(node, FileNode):
        return [
            SizeItem(
                name=node.name,
                size_string=readable_size(node.size_logical),
                relative_real_size=1.0,
                relative_disk_size=1.0,
                is_file=True,
            )
        ]
    return project(node.children)
