"""Resolution of the directory to scan at startup."""

import os
from pathlib import Path
from typing import Optional

from duview.errors import StartupError


def resolve_target_dir(arg: Optional[str] = None) -> Path:
    """
    Directory given on the command line, or the current directory.

    Raises:
        StartupError: If the argument does not exist or is not a directory
    """
    if arg is not None:
        path = Path(arg)
        if not path.exists():
            raise StartupError("Path does not exist:", arg)
        if not path.is_dir():
            raise StartupError("Path is not a directory:", arg)
        return path

    try:
        return Path(os.getcwd())
    except OSError as e:
        raise StartupError("Cannot determine current directory") from e
