"""Read ``<table>`` elements out of an HTML page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path

from txn_cli.shared.exceptions import ExtractionError

from ..types import RawTable
from ..utils.table import normalize_cells, normalize_table_rows

_log = logging.getLogger(__name__)

_SECTION_TAGS = {"thead", "tbody", "tfoot"}
_CELL_TAGS = {"td", "th"}


@dataclass(slots=True)
class HtmlDocument:
    url: str | None
    title: str
    tables: list[RawTable]


@dataclass(slots=True)
class _Row:
    section: str
    cells: list[str] = field(default_factory=list)
    header_cells: int = 0

    @property
    def all_header_cells(self) -> bool:
        return bool(self.cells) and self.header_cells == len(self.cells)


@dataclass(slots=True)
class _TableState:
    slot: int
    rows: list[_Row] = field(default_factory=list)
    section: str = ""
    row: _Row | None = None
    cell: list[str] | None = None

    def close_cell(self) -> None:
        if self.cell is not None and self.row is not None:
            self.row.cells.append("".join(self.cell))
        self.cell = None

    def close_row(self) -> None:
        self.close_cell()
        if self.row is not None:
            self.rows.append(self.row)
        self.row = None


class _TableCollector(HTMLParser):
    """Collects every table's rows, keeping nested tables separate."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tables: list[list[_Row]] = []
        self.title_parts: list[str] = []
        self.canonical_url: str | None = None
        self.og_url: str | None = None
        self.base_url: str | None = None
        self._stack: list[_TableState] = []
        self._in_title = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "table":
            self.tables.append([])
            self._stack.append(_TableState(slot=len(self.tables) - 1))
            return
        if not self._stack:
            self._handle_head_tag(tag, dict(attrs))
            return

        state = self._stack[-1]
        if tag in _SECTION_TAGS:
            state.close_row()
            state.section = tag
        elif tag == "tr":
            state.close_row()
            state.row = _Row(section=state.section)
        elif tag in _CELL_TAGS:
            state.close_cell()
            if state.row is None:
                state.row = _Row(section=state.section)
            if tag == "th":
                state.row.header_cells += 1
            state.cell = []
        elif tag == "br" and state.cell is not None:
            state.cell.append(" ")

    def handle_endtag(self, tag: str) -> None:
        if tag == "title":
            self._in_title = False
            return
        if not self._stack:
            return

        state = self._stack[-1]
        if tag == "table":
            state.close_row()
            self._stack.pop()
            self.tables[state.slot] = state.rows
        elif tag in _SECTION_TAGS:
            state.close_row()
            state.section = ""
        elif tag == "tr":
            state.close_row()
        elif tag in _CELL_TAGS:
            state.close_cell()

    def handle_data(self, data: str) -> None:
        if self._in_title:
            self.title_parts.append(data)
            return
        if self._stack and self._stack[-1].cell is not None:
            self._stack[-1].cell.append(data)

    def close(self) -> None:
        super().close()
        # Unterminated tables still count.
        while self._stack:
            state = self._stack.pop()
            state.close_row()
            self.tables[state.slot] = state.rows

    def _handle_head_tag(self, tag: str, attrs: dict[str, str | None]) -> None:
        if tag == "title":
            self._in_title = True
        elif tag == "base" and attrs.get("href"):
            self.base_url = attrs["href"]
        elif tag == "link" and "canonical" in (attrs.get("rel") or "").lower().split():
            self.canonical_url = attrs.get("href") or self.canonical_url
        elif tag == "meta" and (attrs.get("property") or "").lower() == "og:url":
            self.og_url = attrs.get("content") or self.og_url


def parse_html_document(html: str) -> HtmlDocument:
    collector = _TableCollector()
    collector.feed(html)
    collector.close()
    tables = [_build_table(rows) for rows in collector.tables]
    _log.debug("Found %d tables in page", len(tables))
    return HtmlDocument(
        url=collector.canonical_url or collector.og_url or collector.base_url,
        title=" ".join("".join(collector.title_parts).split()),
        tables=tables,
    )


def parse_html_tables(html: str) -> list[RawTable]:
    return parse_html_document(html).tables


def load_html_document(path: str | Path) -> HtmlDocument:
    """Load a saved page from disk.

    Raises:
        ExtractionError: If the file cannot be read.
    """

    page_path = Path(path).expanduser()
    try:
        html = page_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExtractionError(f"Unable to read page '{page_path}': {exc}") from exc
    return parse_html_document(html)


def _build_table(rows: list[_Row]) -> RawTable:
    rows = [row for row in rows if row.cells]
    if not rows:
        return RawTable(headers=(), rows=[])

    header_row = next((row for row in rows if row.section == "thead"), None)
    if header_row is None and rows[0].all_header_cells:
        header_row = rows[0]
    if header_row is None:
        # No <th>/<thead>: look for a ledger-like header among the leading rows.
        return normalize_table_rows(row.cells for row in rows if row.section != "tfoot")

    remaining = [
        row
        for row in rows
        if row is not header_row and row.section != "thead" and not row.all_header_cells
    ]
    body = [row for row in remaining if row.section == "tbody"] or remaining
    return RawTable(
        headers=normalize_cells(header_row.cells),
        rows=[normalize_cells(row.cells) for row in body],
    )
