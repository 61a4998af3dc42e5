"""Exceptions raised by duview."""


class DuviewError(Exception):
    """Base class for duview errors."""


class ClusterSizeError(DuviewError):
    """The cluster size of the volume holding a scan root could not be determined."""


class NavigationCorruptedError(DuviewError):
    """The navigation stack points at a file where a directory is required.

    Signals a bug in the caller or in the navigation code, never bad input.
    """


class StartupError(DuviewError):
    """The directory to scan could not be determined."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{message} {path}".strip())
        self.message = message
        self.path = path
