"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from fnmatch import fnmatch
from pathlib import Path

from object_design_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        return Path(path).exists()

    def glob_source_files(
        self, path: str, suffixes: tuple[str, ...], exclude: tuple[str, ...] = ()
    ) -> list[str]:
        """
        Get all source files with the given suffixes (recursive if directory).

        An explicitly named file is returned even when its suffix is not
        recognised, so the caller can report it. Exclude patterns apply to
        directory walks only and match either the relative path or any part.
        """
        path_obj = Path(path)
        if not path_obj.is_dir():
            return [str(path_obj)]
        found: list[str] = []
        for candidate in sorted(path_obj.rglob("*")):
            if not candidate.is_file() or candidate.suffix not in suffixes:
                continue
            relative = candidate.relative_to(path_obj).as_posix()
            if self._is_excluded(relative, exclude):
                continue
            found.append(str(candidate))
        return found

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        return Path(path).read_text(encoding=encoding)

    @staticmethod
    def _is_excluded(relative: str, exclude: tuple[str, ...]) -> bool:
        parts = relative.split("/")
        for pattern in exclude:
            if fnmatch(relative, pattern) or any(fnmatch(part, pattern) for part in parts):
                return True
        return False
