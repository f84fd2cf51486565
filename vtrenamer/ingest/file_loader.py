from collections.abc import Iterable
from pathlib import Path

from vtrenamer.ingest.exceptions import DocumentLoadError
from vtrenamer.items.models import DocumentInput
from vtrenamer.logging.logger import Log

PDF_SUFFIX = ".pdf"


class FileLoader:
    """Reads selected files into DocumentInput records.

    Directories are expanded to the PDF files directly inside them, sorted by
    name, so the resulting order is stable.
    """

    def __init__(self, suffix: str = PDF_SUFFIX) -> None:
        self._suffix = suffix.lower()

    def load_paths(self, paths: Iterable[Path]) -> list[DocumentInput]:
        """Read every file named by `paths`.

        Raises:
            DocumentLoadError: if a path does not exist or cannot be read.
        """
        documents: list[DocumentInput] = []
        for path in paths:
            for file_path in self._expand(path):
                documents.append(self.load(file_path))
        Log.info(f"Loaded {len(documents)} document(s)")
        return documents

    def load(self, path: Path) -> DocumentInput:
        if not path.is_file():
            raise DocumentLoadError(f"File not found: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc
        return DocumentInput(name=path.name, content=content)

    def _expand(self, path: Path) -> list[Path]:
        if path.is_dir():
            return sorted(
                child
                for child in path.iterdir()
                if child.is_file() and child.suffix.lower() == self._suffix
            )
        return [path]
