from pathlib import Path

from vtrenamer.export.base import BaseExporter
from vtrenamer.export.exceptions import ExportError
from vtrenamer.logging.logger import Log


def safe_file_name(output_name: str) -> str:
    """Flatten path separators so the name stays a single file in the target."""
    name = output_name.replace("/", "_").replace("\\", "_")
    if name in ("", ".", ".."):
        return "_"
    return name


class DirectoryExporter(BaseExporter):
    """Writes documents into a target directory under their output names.

    Same-named outputs overwrite each other, like repeated browser downloads
    of one file name would.
    """

    def __init__(self, target_dir: Path) -> None:
        self._target_dir = target_dir

    def export(self, content: bytes, output_name: str) -> Path:
        path = self._target_dir / safe_file_name(output_name)
        try:
            self._target_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            raise ExportError(f"Failed to write {path}: {exc}") from exc
        Log.debug(f"Exported {output_name} ({len(content)} bytes)", path=path)
        return path
