"""Interactive terminal browser for duview."""
