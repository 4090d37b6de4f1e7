from __future__ import annotations

import logging
from typing import Any, Sequence

import gspread
from gspread.exceptions import WorksheetNotFound
from gspread.utils import DateTimeOption, ValueRenderOption

logger = logging.getLogger(__name__)

NEW_TABLE_ROWS = 1000


class SheetWorkbook:
    """
    Thin table-oriented view over a gspread spreadsheet.

    Appended rows are buffered until `flush()`, which writes them with USER_ENTERED
    so HYPERLINK formulas are evaluated by Sheets.
    """

    def __init__(self, spreadsheet: gspread.Spreadsheet) -> None:
        self._spreadsheet = spreadsheet
        self._pending: dict[str, tuple[gspread.Worksheet, list[list[Any]]]] = {}

    def find_table(self, name: str) -> gspread.Worksheet | None:
        try:
            return self._spreadsheet.worksheet(name)
        except WorksheetNotFound:
            return None

    def create_table(self, name: str, headers: Sequence[Any]) -> gspread.Worksheet:
        logger.info("Creating sheet %r with %d header columns", name, len(headers))
        table = self._spreadsheet.add_worksheet(title=name, rows=NEW_TABLE_ROWS, cols=max(len(headers), 1))
        if headers:
            table.update(range_name="A1", values=[list(headers)])
        return table

    def header_row(self, table: gspread.Worksheet) -> list[Any]:
        return list(table.row_values(1))

    def read_rows(self, table: gspread.Worksheet) -> list[list[Any]]:
        """All rows including the header; link cells come back as formulas."""

        return table.get_all_values(
            value_render_option=ValueRenderOption.formula,
            date_time_render_option=DateTimeOption.formatted_string,
        )

    def append_row(self, table: gspread.Worksheet, row: Sequence[Any]) -> None:
        _, rows = self._pending.setdefault(table.title, (table, []))
        rows.append(list(row))

    def flush(self) -> int:
        written = 0
        pending, self._pending = self._pending, {}
        for title, (table, rows) in pending.items():
            if not rows:
                continue
            table.append_rows(rows, value_input_option="USER_ENTERED")
            logger.debug("Appended %d row(s) to %r", len(rows), title)
            written += len(rows)
        return written
