from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

# A decoded sheet row: column header -> cell value. Link cells add a `<header>_Url` key.
MovieRecord = dict[str, Any]

DEFAULT_STATUS = "Vu"
UNKNOWN_TITLE = "Unknown Title"


def today_us() -> str:
    """Today's date as MM/DD/YYYY, the format used by the DATE column."""

    return date.today().strftime("%m/%d/%Y")


@dataclass(frozen=True)
class SearchResult:
    id: int
    title: str
    year: str  # YYYY or "N/A"
    poster_path: str
    overview: str = ""


@dataclass
class MovieDetail:
    """
    Movie details merged from TMDb and OMDb, plus the user-editable fields.

    Instances are edited before being appended to the sheet; they carry no identity afterwards.
    """

    title: str = ""
    plot: str = ""
    duration: str = ""
    genres: str = ""
    director: str = ""
    actors: str = ""
    year: str = ""
    poster_url: str | None = None
    imdb_id: str | None = None
    imdb_link: str | None = None
    trailer_link: str | None = None
    imdb_score: str = ""
    rt_score: str = ""
    date_added: str = ""
    status: str = DEFAULT_STATUS
    suite: bool | str = False
    note: str | float | None = ""
    remarks: str = ""
