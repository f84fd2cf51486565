class DocumentLoadError(Exception):
    """Raised when a selected document cannot be read."""
