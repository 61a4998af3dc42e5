"""Human-readable size strings."""

import logging

logger = logging.getLogger(__name__)

UNITS = ("B", "kB", "MB", "GB", "TB", "PB")


def readable_size(size_bytes: int) -> str:
    """Format bytes with decimal units, keeping at most three significant digits.

    Examples: 999 -> "999 B", 1000 -> "1 kB", 4096 -> "4.09 kB", 100000 -> "100 kB".
    """
    size = size_bytes
    remainder = 0
    for unit in UNITS:
        if size < 1000:
            if size >= 100:
                return f"{size} {unit}"
            if size >= 10:
                if remainder // 100 == 0:
                    return f"{size} {unit}"
                return f"{size}.{remainder // 100} {unit}"
            if remainder // 10 == 0:
                return f"{size} {unit}"
            return f"{size}.{remainder // 100}{remainder // 10 % 10} {unit}"
        remainder = size % 1000
        size //= 1000
    logger.warning("Size overflows all known units: %d", size_bytes)
    return f"{size_bytes} B"


def size_string(size_logical: int, size_on_disk: int) -> str:
    """Combine logical and on-disk sizes into a single row label."""
    return f"{readable_size(size_logical)} ({readable_size(size_on_disk)} on disk)"
