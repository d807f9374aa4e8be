from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from object_design_linter.domain.entities import Declaration


class ExtractorProtocol(Protocol):
    """Protocol for Source Model Extractors. Pure transform; raises ParseError."""

    language: str
    suffixes: tuple[str, ...]

    def extract(self, source_text: str, path: str = "<string>") -> list["Declaration"]:
        """Decompose source text into declarations."""
        ...


class ExtractorLookupProtocol(Protocol):
    """Protocol for choosing an extractor by file path."""

    def for_path(self, path: str) -> Optional[ExtractorProtocol]:
        ...

    def supported_suffixes(self) -> tuple[str, ...]:
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates. quiet silences banner and progress lines."""

    quiet: bool

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        ...

    def glob_source_files(
        self, path: str, suffixes: tuple[str, ...], exclude: tuple[str, ...] = ()
    ) -> list[str]:
        """Get all source files with the given suffixes (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...
