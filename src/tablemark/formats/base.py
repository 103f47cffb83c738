"""
Base format interface and registry.

Each format strategy turns tabular text into a RecordReader: a header row plus
a once-only stream of records. The registry manages format detection and
selection.
"""

from __future__ import annotations

import csv
import io
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class MalformedInputError(ValueError):
    """Tabular input that cannot be read as header plus records."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class RecordReader:
    """
    Reads a header row and then records from delimited text.

    Records can be consumed once. Blank lines are skipped. In strict mode a
    record whose field count differs from the header is malformed.
    """

    def __init__(self, content: str, delimiter: str = ",", strict: bool = True):
        self.delimiter = delimiter
        self.strict = strict
        # A single field may span the whole input
        csv.field_size_limit(max(csv.field_size_limit(), len(content)))
        self._rows = csv.reader(io.StringIO(content), delimiter=delimiter, strict=True)
        self._headers: list[str] | None = None

    def _next_row(self) -> list[str] | None:
        """Next non-blank row, or None at end of input."""
        while True:
            try:
                row = next(self._rows)
            except StopIteration:
                return None
            except csv.Error as e:
                raise MalformedInputError(str(e), line=self._rows.line_num) from e
            if row:
                return row

    def headers(self) -> list[str]:
        """Column headers (first non-blank row). Empty input has no headers."""
        if self._headers is None:
            self._headers = self._next_row() or []
            logger.debug("Read %d headers with delimiter %r", len(self._headers), self.delimiter)
        return self._headers

    def records(self) -> Iterator[list[str]]:
        """Yield the remaining records, reading past the header if needed."""
        expected = len(self.headers())
        count = 0
        while (row := self._next_row()) is not None:
            if self.strict and len(row) != expected:
                raise MalformedInputError(
                    f"found record with {len(row)} fields, but the header has {expected}",
                    line=self._rows.line_num,
                )
            count += 1
            yield row
        logger.debug("Read %d records", count)


class FormatStrategy(ABC):
    """Base class for tabular format handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this format handles (e.g., ['.csv'])."""
        ...

    @property
    @abstractmethod
    def delimiter(self) -> str:
        """Field separator."""
        ...

    def detect(self, content: str) -> bool:
        """
        Magic detection: returns True if content looks like this format.
        Default implementation returns False (rely on extension only).
        """
        return False

    def reader(self, content: str, strict: bool = True) -> RecordReader:
        """Open a record reader over content."""
        return RecordReader(content, delimiter=self.delimiter, strict=strict)


@dataclass
class FormatMatch:
    """Result of format detection."""
    strategy: FormatStrategy
    confidence: float  # 0.0 to 1.0


class FormatRegistry:
    """Registry of format strategies with detection and selection."""

    def __init__(self):
        self._strategies: list[FormatStrategy] = []
        self._by_extension: dict[str, FormatStrategy] = {}
        self._by_name: dict[str, FormatStrategy] = {}

    def register(self, strategy: FormatStrategy) -> None:
        """Register a format strategy."""
        self._strategies.append(strategy)
        self._by_name[strategy.name] = strategy
        for ext in strategy.extensions:
            # First registered wins for extension conflicts
            if ext not in self._by_extension:
                self._by_extension[ext] = strategy

    def get_by_name(self, name: str) -> FormatStrategy | None:
        """Get strategy by name (for --type override)."""
        return self._by_name.get(name)

    def get_by_extension(self, ext: str) -> FormatStrategy | None:
        """Get strategy by file extension."""
        if not ext.startswith('.'):
            ext = '.' + ext
        return self._by_extension.get(ext.lower())

    def detect(self, content: str, filename: str | None = None) -> FormatMatch | None:
        """
        Detect the best format for content.

        Priority:
        1. Extension match (high confidence)
        2. Magic detection (medium confidence)
        """
        if filename:
            ext = self._get_extension(filename)
            if ext and ext in self._by_extension:
                return FormatMatch(
                    strategy=self._by_extension[ext],
                    confidence=1.0
                )

        for strategy in self._strategies:
            if strategy.detect(content):
                return FormatMatch(
                    strategy=strategy,
                    confidence=0.8
                )

        # Return None to let caller decide fallback
        return None

    def _get_extension(self, filename: str) -> str | None:
        """Extract lowercase extension from filename."""
        if '.' in filename:
            return '.' + filename.rsplit('.', 1)[-1].lower()
        return None

    @property
    def strategies(self) -> list[FormatStrategy]:
        """List all registered strategies."""
        return list(self._strategies)


# Global registry instance
registry = FormatRegistry()
