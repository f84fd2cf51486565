from pathlib import PurePath

DEFAULT_EXTENSION = "pdf"


def original_extension(original_name: str, default: str = DEFAULT_EXTENSION) -> str:
    """Extension of the source name without the dot, or `default` if it has none."""
    suffix = PurePath(original_name).suffix
    return suffix[1:] if len(suffix) > 1 else default


def compute_output_name(
    extracted_value: str | None,
    original_name: str,
    default_extension: str = DEFAULT_EXTENSION,
) -> str | None:
    """Map an extracted identifier to the output file name.

    Returns None when the value is empty after trimming; callers treat that
    as "not found". Two documents with the same identifier get the same name.
    """
    value = (extracted_value or "").strip()
    if not value:
        return None
    return f"{value}.{original_extension(original_name, default_extension)}"


class RenamePolicy:
    """compute_output_name bound to a configured default extension."""

    def __init__(self, default_extension: str = DEFAULT_EXTENSION) -> None:
        self._default_extension = default_extension.lstrip(".") or DEFAULT_EXTENSION

    def output_name(self, extracted_value: str | None, original_name: str) -> str | None:
        return compute_output_name(extracted_value, original_name, self._default_extension)
