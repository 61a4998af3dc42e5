"""Logical and on-disk file size queries.

A scan uses exactly one ``SizeProbe``: sibling ordering and relative sizes
compare on-disk sizes, so every file in one tree must be measured the same way.
"""

import logging
import os
import sys
from enum import Enum
from functools import lru_cache
from pathlib import Path

from duview.errors import ClusterSizeError

logger = logging.getLogger(__name__)

# Returned by GetCompressedFileSizeW when the low word is not a valid size
INVALID_FILE_SIZE = 0xFFFFFFFF


class SizePolicy(str, Enum):
    """How the on-disk size of a file is determined."""

    LOGICAL = "logical"  # Same as the logical size
    CLUSTER = "cluster"  # Logical size rounded up to the volume cluster size
    ALLOCATED = "allocated"  # Allocation reported by the OS (sparse/compressed aware)


def logical_size(path: Path | str) -> int:
    """Length of a file from its metadata, 0 if it cannot be read."""
    try:
        return os.stat(path).st_size
    except OSError as e:
        logger.warning("Failed to read size of %s: %s", path, e)
        return 0


class SizeProbe:
    """Strategy computing the on-disk size of a file."""

    policy = SizePolicy.LOGICAL

    def on_disk_size(self, path: Path | str, size_logical: int) -> int:
        return size_logical


class LogicalSizeProbe(SizeProbe):
    """Reports on-disk size equal to logical size."""


class ClusterSizeProbe(SizeProbe):
    """Rounds logical sizes up to a multiple of the cluster size."""

    policy = SizePolicy.CLUSTER

    def __init__(self, cluster_size: int):
        if cluster_size <= 0:
            raise ClusterSizeError(f"Invalid cluster size: {cluster_size}")
        self.cluster_size = cluster_size

    def on_disk_size(self, path: Path | str, size_logical: int) -> int:
        clusters = -(-size_logical // self.cluster_size)
        return clusters * self.cluster_size


class AllocatedSizeProbe(SizeProbe):
    """Asks the OS how many bytes are allocated, falling back to logical size."""

    policy = SizePolicy.ALLOCATED

    def on_disk_size(self, path: Path | str, size_logical: int) -> int:
        if sys.platform == "win32":
            allocated = _compressed_file_size(str(path))
        else:
            allocated = _allocated_blocks_size(path)
        if allocated is None:
            return size_logical
        return allocated


def _allocated_blocks_size(path: Path | str) -> int | None:
    try:
        st = os.stat(path)
    except OSError as e:
        logger.warning("Failed to query allocated size of %s: %s", path, e)
        return None
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return None
    # st_blocks is always counted in 512-byte units
    return blocks * 512


@lru_cache(maxsize=None)
def _get_compressed_file_size():
    """GetCompressedFileSizeW with its signature declared, bound once per process."""
    import ctypes
    from ctypes import wintypes

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    func = kernel32.GetCompressedFileSizeW
    func.argtypes = [wintypes.LPCWSTR, ctypes.POINTER(wintypes.DWORD)]
    func.restype = wintypes.DWORD
    return func


def _compressed_file_size(path: str) -> int | None:
    import ctypes
    from ctypes import wintypes

    high = wintypes.DWORD(0)
    low = _get_compressed_file_size()(path, ctypes.byref(high))
    if low == INVALID_FILE_SIZE and ctypes.get_last_error() != 0:
        logger.warning("Compressed size query failed for %s", path)
        return None
    return (high.value << 32) + low


def query_cluster_size(root: Path | str) -> int:
    """Cluster size in bytes of the volume containing ``root``.

    Raises:
        ClusterSizeError: If the volume cannot be queried
    """
    if sys.platform == "win32":
        size = _windows_cluster_size(str(root))
    else:
        try:
            st = os.statvfs(root)
        except OSError as e:
            raise ClusterSizeError(f"Cannot query volume of {root}: {e}") from e
        size = st.f_frsize or st.f_bsize
    if size <= 0:
        raise ClusterSizeError(f"Volume of {root} reported cluster size {size}")
    return size


def _windows_cluster_size(root: str) -> int:
    import ctypes
    from ctypes import wintypes

    drive, _ = os.path.splitdrive(os.path.abspath(root))
    volume = drive + "\\"

    sectors_per_cluster = wintypes.DWORD(0)
    bytes_per_sector = wintypes.DWORD(0)
    free_clusters = wintypes.DWORD(0)
    total_clusters = wintypes.DWORD(0)
    ok = ctypes.windll.kernel32.GetDiskFreeSpaceW(
        volume,
        ctypes.byref(sectors_per_cluster),
        ctypes.byref(bytes_per_sector),
        ctypes.byref(free_clusters),
        ctypes.byref(total_clusters),
    )
    if not ok:
        raise ClusterSizeError(f"GetDiskFreeSpaceW failed for {volume}")
    return sectors_per_cluster.value * bytes_per_sector.value


def make_probe(policy: SizePolicy, root: Path | str) -> SizeProbe:
    """Build the probe used for one scan of ``root``."""
    if policy == SizePolicy.CLUSTER:
        return ClusterSizeProbe(query_cluster_size(root))
    if policy == SizePolicy.ALLOCATED:
        return AllocatedSizeProbe()
    return LogicalSizeProbe()
