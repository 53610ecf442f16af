class SnapshotError(ValueError):
    """Raised when a persisted state snapshot is malformed or inconsistent."""
