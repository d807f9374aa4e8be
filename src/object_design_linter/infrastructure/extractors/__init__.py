"""Source Model Extractors, selected by file suffix."""

from pathlib import PurePath
from typing import Optional

from object_design_linter.domain.protocols import ExtractorProtocol
from object_design_linter.infrastructure.extractors.php_extractor import PhpExtractor
from object_design_linter.infrastructure.extractors.python_extractor import PythonExtractor

__all__ = ["ExtractorRegistry", "PhpExtractor", "PythonExtractor"]


class ExtractorRegistry:
    """Maps file suffixes to extractors. Immutable after construction."""

    def __init__(self, extractors: Optional[tuple[ExtractorProtocol, ...]] = None) -> None:
        self._extractors = extractors if extractors is not None else (PhpExtractor(), PythonExtractor())
        self._by_suffix: dict[str, ExtractorProtocol] = {}
        for extractor in self._extractors:
            for suffix in extractor.suffixes:
                self._by_suffix.setdefault(suffix.lower(), extractor)

    def for_path(self, path: str) -> Optional[ExtractorProtocol]:
        """Extractor for path's suffix, or None when unsupported."""
        return self._by_suffix.get(PurePath(path).suffix.lower())

    def supported_suffixes(self) -> tuple[str, ...]:
        """Suffixes with a registered extractor."""
        return tuple(self._by_suffix)
