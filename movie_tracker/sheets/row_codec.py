"""
Conversion between raw sheet rows and movie records.

Rows are read with formulas rendered, so link cells arrive as
`=HYPERLINK("<url>","<label>")` strings and are split into `<col>_Url` / `<col>`.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Sequence

from movie_tracker.models.movies import DEFAULT_STATUS, MovieDetail, MovieRecord, today_us

logger = logging.getLogger(__name__)

TITLE_SENTINEL = "Titre inconnu"
URL_SUFFIX = "_Url"

_HYPERLINK_RE = re.compile(r'^=?\s*HYPERLINK\("([^"]+)"\s*,\s*"([^"]+)"\)', re.IGNORECASE)
_HYPERLINK_PREFIX_RE = re.compile(r'^=?\s*HYPERLINK\(', re.IGNORECASE)
_SORT_EPOCH = date(1970, 1, 1)
_LEADING_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class ColumnKey(str, Enum):
    DATE = "DATE"
    POSTER = "I"
    TRAILER = "T"
    TITLE = "TITRE FILM"
    PLOT = "PLOT"
    DURATION = "DUREE"
    GENRES = "GENRES"
    DIRECTOR = "REALISATEUR"
    ACTORS = "ACTEURS"
    YEAR = "YEAR"
    REMARKS = "REMARQUES"
    STATUS = "STATUS"
    SEQUEL = "SUITE A VOIR (OU PREVUE)"
    RT_SCORE = "RT"
    IMDB_SCORE = "IMDB"
    NOTE = "NOTE"


# Header row written to a freshly created table when no primary table exists to copy from.
DEFAULT_HEADERS: list[str] = [key.value for key in ColumnKey]


def column_key(header: Any) -> ColumnKey | None:
    normalized = str(header if header is not None else "").strip().upper()
    try:
        return ColumnKey(normalized)
    except ValueError:
        return None


# --- Decoding ---


def parse_hyperlink(value: Any) -> tuple[str, str] | None:
    """Return `(url, label)` for a two-argument HYPERLINK formula, else None."""

    if not isinstance(value, str):
        return None
    match = _HYPERLINK_RE.match(value.strip())
    if not match:
        return None
    return match.group(1), match.group(2)


def decode_cell(header: str, value: Any) -> dict[str, Any]:
    if isinstance(value, str) and _HYPERLINK_PREFIX_RE.match(value.strip()):
        link = parse_hyperlink(value)
        if link is None:
            return {header: value}
        url, label = link
        return {f"{header}{URL_SUFFIX}": url, header: label}
    if isinstance(value, date):
        return {header: value.strftime("%m/%d/%Y")}
    return {header: value}


def decode_row(headers: Sequence[Any], row: Sequence[Any]) -> MovieRecord:
    record: MovieRecord = {}
    for index, header in enumerate(headers):
        value = row[index] if index < len(row) else ""
        record.update(decode_cell(str(header), value))

    title = record.get(ColumnKey.TITLE.value)
    if not str(title or "").strip():
        record[ColumnKey.TITLE.value] = TITLE_SENTINEL
    return record


def is_blank_record(record: MovieRecord) -> bool:
    return record.get(ColumnKey.TITLE.value) == TITLE_SENTINEL


# --- Sorting ---


def parse_display_date(value: Any) -> date | None:
    """
    Parse a DATE cell as day/month/year (parts reversed into ISO order).

    Returns None when the value cannot be parsed.
    """

    parts = str(value).strip().split("/")
    if len(parts) != 3:
        return None
    day, month, year = (part.strip() for part in parts)
    if not (day.isdigit() and month.isdigit() and year.isdigit()):
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _sort_instant(record: MovieRecord) -> date | None:
    raw = record.get(ColumnKey.DATE.value)
    if not raw:
        return _SORT_EPOCH
    return parse_display_date(raw)


def _compare_newest_first(a: MovieRecord, b: MovieRecord) -> int:
    instant_a = _sort_instant(a)
    instant_b = _sort_instant(b)
    # Unparseable dates leave the pair in place.
    if instant_a is None or instant_b is None:
        return 0
    if instant_a > instant_b:
        return -1
    if instant_a < instant_b:
        return 1
    return 0


def sort_records(records: Iterable[MovieRecord]) -> list[MovieRecord]:
    return sorted(records, key=cmp_to_key(_compare_newest_first))


# --- Encoding ---


def hyperlink_formula(url: str, label: str) -> str:
    return f'=HYPERLINK("{url}","{label}")'


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _encode_date(detail: MovieDetail) -> str:
    value = _text(detail.date_added).strip()
    if value and len(value.split("/")) == 3:
        return value
    return today_us()


def _encode_poster(detail: MovieDetail) -> str:
    return hyperlink_formula(detail.poster_url, "I") if detail.poster_url else "I"


def _encode_trailer(detail: MovieDetail) -> str:
    link = detail.trailer_link or detail.imdb_link
    return hyperlink_formula(link, "T") if link else "T"


def _encode_sequel(detail: MovieDetail) -> str:
    suite = detail.suite
    if isinstance(suite, bool):
        return "TRUE" if suite else "FALSE"
    return _text(suite).upper() if suite else "FALSE"


def encode_note(value: Any) -> int | float | str:
    """
    Personal note as a number, read from the leading numeric part of the value.

    `"15/20"` is written as 15. Values without a leading number become an empty cell.
    """

    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER_RE.match(str(value))
        if not match:
            return ""
        number = float(match.group(1))
    if not math.isfinite(number):
        return ""
    return int(number) if number.is_integer() else number


_ENCODERS: dict[ColumnKey, Callable[[MovieDetail], Any]] = {
    ColumnKey.DATE: _encode_date,
    ColumnKey.POSTER: _encode_poster,
    ColumnKey.TRAILER: _encode_trailer,
    ColumnKey.TITLE: lambda d: _text(d.title),
    ColumnKey.PLOT: lambda d: _text(d.plot),
    ColumnKey.DURATION: lambda d: _text(d.duration),
    ColumnKey.GENRES: lambda d: _text(d.genres),
    ColumnKey.DIRECTOR: lambda d: _text(d.director),
    ColumnKey.ACTORS: lambda d: _text(d.actors),
    ColumnKey.YEAR: lambda d: _text(d.year),
    ColumnKey.REMARKS: lambda d: _text(d.remarks),
    ColumnKey.STATUS: lambda d: _text(d.status) or DEFAULT_STATUS,
    ColumnKey.SEQUEL: _encode_sequel,
    ColumnKey.RT_SCORE: lambda d: _text(d.rt_score),
    ColumnKey.IMDB_SCORE: lambda d: _text(d.imdb_score),
    ColumnKey.NOTE: lambda d: encode_note(d.note),
}


def encode_value(key: ColumnKey, detail: MovieDetail) -> Any:
    return _ENCODERS[key](detail)


def encode_row(headers: Sequence[Any], detail: MovieDetail) -> list[Any]:
    row: list[Any] = []
    unknown: list[str] = []
    for header in headers:
        key = column_key(header)
        if key is None:
            if str(header or "").strip():
                unknown.append(str(header))
            row.append("")
            continue
        row.append(encode_value(key, detail))

    if unknown:
        logger.warning("Unknown sheet columns left empty: %s", ", ".join(unknown))
    return row
