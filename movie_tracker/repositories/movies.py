from __future__ import annotations

import logging
import unicodedata
from typing import Any

from movie_tracker.models.movies import MovieDetail, MovieRecord
from movie_tracker.sheets.row_codec import DEFAULT_HEADERS, decode_row, encode_row, is_blank_record, sort_records
from movie_tracker.sheets.workbook import SheetWorkbook

logger = logging.getLogger(__name__)

PRIMARY_TABLE = "Reading Log"
TO_WATCH_TABLE = "A voir"
TO_WATCH_STATUSES = frozenset({"a voir", "a-voir", "avoir", "to watch", "to-watch", "towatch"})


class MovieStoreError(RuntimeError):
    pass


def normalize_status(status: Any) -> str:
    """Lowercase, trimmed, with diacritics removed ("À voir" -> "a voir")."""

    raw = str(status or "").strip().lower()
    decomposed = unicodedata.normalize("NFD", raw)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def target_table_name(status: Any) -> str:
    if normalize_status(status) in TO_WATCH_STATUSES:
        return TO_WATCH_TABLE
    return PRIMARY_TABLE


def _read_movies(workbook: SheetWorkbook) -> list[MovieRecord]:
    table = workbook.find_table(PRIMARY_TABLE)
    if table is None:
        raise MovieStoreError(f"Sheet '{PRIMARY_TABLE}' not found.")

    values = workbook.read_rows(table)
    if not values:
        return []

    headers = values[0]
    records: list[MovieRecord] = []
    for row_number, row in enumerate(values[1:], start=2):
        try:
            record = decode_row(headers, row)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Skipping unreadable row %d in %r: %s", row_number, PRIMARY_TABLE, exc)
            continue
        if is_blank_record(record):
            continue
        records.append(record)
    return sort_records(records)


def list_movies(workbook: SheetWorkbook) -> list[MovieRecord]:
    """
    Return every movie in the primary sheet, newest first.

    Raises MovieStoreError (with a user-facing message) when the sheet cannot be read.
    """

    try:
        return _read_movies(workbook)
    except Exception as exc:
        logger.error("Error reading movies: %s", exc)
        raise MovieStoreError(f"Unable to read movies from the sheet: {exc}") from exc


def _ensure_table(workbook: SheetWorkbook, name: str):
    table = workbook.find_table(name)
    if table is not None:
        return table

    source = workbook.find_table(PRIMARY_TABLE)
    headers = workbook.header_row(source) if source is not None else []
    table = workbook.create_table(name, headers or DEFAULT_HEADERS)
    if table is None:
        raise MovieStoreError(f"Sheet '{name}' not found.")
    return table


def add_movie(workbook: SheetWorkbook, detail: MovieDetail) -> str:
    """
    Append one row built from `detail` to the sheet matching its status.

    Returns a confirmation message naming the movie and the destination sheet.
    """

    table_name = target_table_name(detail.status)
    try:
        table = _ensure_table(workbook, table_name)
        headers = workbook.header_row(table)
        workbook.append_row(table, encode_row(headers, detail))
        workbook.flush()
    except Exception as exc:
        logger.error("Error adding %r to %r: %s", detail.title, table_name, exc)
        raise MovieStoreError(f"Unable to add the movie to the sheet: {exc}") from exc

    logger.info("Added %r to %r", detail.title, table_name)
    return f"\"{detail.title}\" added to '{table_name}'."
