class ExportError(Exception):
    """Raised when a completed document cannot be saved under its output name."""
