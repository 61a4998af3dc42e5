"""Data models for duview."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

INVALID_NAME = "<invalid name>"


class FileNode(BaseModel):
    """A leaf of the size tree."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    name: str = Field(..., description="Display name")
    size_logical: int = Field(0, ge=0, description="Length reported by the filesystem")
    size_on_disk: int = Field(0, ge=0, description="Bytes allocated on storage")

    @property
    def is_file(self) -> bool:
        return True


class DirNode(BaseModel):
    """A directory with its children sorted by on-disk size, largest first."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["dir"] = "dir"
    name: str = Field(..., description="Display name")
    children: tuple["Node", ...] = Field(default_factory=tuple, description="Sorted children")

    @property
    def is_file(self) -> bool:
        return False

    _size_logical: int = PrivateAttr(0)
    _size_on_disk: int = PrivateAttr(0)

    def model_post_init(self, __context: Any) -> None:
        # Children are complete before their parent, so one level of summing suffices
        self._size_logical = sum(child.size_logical for child in self.children)
        self._size_on_disk = sum(child.size_on_disk for child in self.children)

    @property
    def size_logical(self) -> int:
        """Sum of the logical sizes of all descendants."""
        return self._size_logical

    @property
    def size_on_disk(self) -> int:
        """Sum of the on-disk sizes of all descendants."""
        return self._size_on_disk

    @classmethod
    def empty(cls) -> "DirNode":
        """Placeholder root shown before the first scan completes."""
        return cls(name="")


Node = Annotated[Union[FileNode, DirNode], Field(discriminator="kind")]

DirNode.model_rebuild()


class SizeItem(BaseModel):
    """One display row of a projected directory view."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the node")
    size_string: str = Field(..., description="Human-readable size, e.g. '12 MB (14 MB on disk)'")
    relative_real_size: float = Field(..., ge=0.0, le=1.0, description="Logical size / max sibling")
    relative_disk_size: float = Field(..., ge=0.0, le=1.0, description="On-disk size / max sibling")
    is_file: bool = Field(..., description="Whether the row is a leaf")
