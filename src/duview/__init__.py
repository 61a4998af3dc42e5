"""duview - browse directory trees sorted by disk usage."""

__version__ = "0.1.0"
