"""
CSV and TSV format strategies.

Both read the first row as the header and every following row as a record.
"""

from .base import FormatStrategy, registry


def _first_line(content: str) -> str:
    return content.lstrip("\r\n").split("\n", 1)[0]


class CSVStrategy(FormatStrategy):
    """Comma separated values."""

    @property
    def name(self) -> str:
        return "csv"

    @property
    def extensions(self) -> list[str]:
        return [".csv"]

    @property
    def delimiter(self) -> str:
        return ","

    def detect(self, content: str) -> bool:
        return "," in _first_line(content)


class TSVStrategy(FormatStrategy):
    """Tab separated values."""

    @property
    def name(self) -> str:
        return "tsv"

    @property
    def extensions(self) -> list[str]:
        return [".tsv", ".tab"]

    @property
    def delimiter(self) -> str:
        return "\t"

    def detect(self, content: str) -> bool:
        return "\t" in _first_line(content)


registry.register(CSVStrategy())
registry.register(TSVStrategy())
