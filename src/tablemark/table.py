"""
Table building for tablemark.

Maps a header row and records onto table elements:
- table -> thead -> tr -> td (one per header)
- table -> tbody -> tr (one per record) -> td (one per field)

and wraps the table in a minimal html document with a stylesheet.
"""

from __future__ import annotations

import logging

from .dom import Node
from .formats.base import FormatStrategy, RecordReader

logger = logging.getLogger(__name__)

DEFAULT_STYLE = """
        thead {color:green;}
        tbody {color:blue;}
        tfoot {color:red;}

        table, th, td {
          border: 1px solid black;
        }"""


def build_row(fields: list[str]) -> Node:
    """One tr with a td per field, each carrying the field text."""
    row = Node("tr")
    for value in fields:
        row.add_child(Node("td").with_text(value))
    return row


def build_table_header(reader: RecordReader) -> Node:
    """thead holding a single row of column titles."""
    return Node("thead").with_child(build_row(reader.headers()))


def build_table_body(reader: RecordReader) -> Node:
    """tbody holding one row per record, in record order."""
    tbody = Node("tbody")
    for record in reader.records():
        tbody.add_child(build_row(record))
    return tbody


def build_table(reader: RecordReader) -> Node:
    """table with header then body. Reader errors propagate."""
    thead = build_table_header(reader)
    tbody = build_table_body(reader)
    return Node("table").with_child(thead).with_child(tbody)


def create_html_only_with_table(table: Node, style: str | None = DEFAULT_STYLE) -> Node:
    """
    Wrap table in html -> [head -> style, body -> table].

    With style=None the head element is left empty.
    """
    head = Node("head")
    if style is not None:
        head.add_child(Node("style").with_text(style))
    body = Node("body").with_child(table)
    return Node("html").with_child(head).with_child(body)


def convert(
    content: str,
    strategy: FormatStrategy,
    strict: bool = True,
    document: bool = True,
    style: str | None = DEFAULT_STYLE,
) -> str:
    """
    Convert tabular text to pretty markup.

    Args:
        content: Delimited text, header row first
        strategy: Format strategy used to read content
        strict: Reject records whose field count differs from the header
        document: Wrap the table in an html document
        style: Stylesheet text for the document head (None to omit)

    Returns:
        Indented markup string

    Raises:
        MalformedInputError: content cannot be read; nothing is rendered
    """
    reader = strategy.reader(content, strict=strict)
    root = build_table(reader)
    if document:
        root = create_html_only_with_table(root, style=style)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Built %s tree with %d elements from %s input",
            root.name, sum(1 for _ in root.depth_first()), strategy.name,
        )
    return root.to_string_pretty()
