from __future__ import annotations

from dataclasses import dataclass, field

from movie_tracker.models.movies import DEFAULT_STATUS, MovieDetail, MovieRecord, SearchResult
from movie_tracker.sheets.row_codec import URL_SUFFIX, ColumnKey

EMPTY_LIST_MESSAGE = "No movies found. Add one!"
NO_RESULTS_MESSAGE = "No results found."
NO_OVERVIEW = "No description."


@dataclass(frozen=True)
class Feedback:
    message: str
    is_success: bool = True


@dataclass
class MovieTrackerViewModel:
    """
    UI state for one session.

    The list area and the search area keep separate error slots so one failing
    never blanks the other.
    """

    movies: list[MovieRecord] = field(default_factory=list)
    movies_loading: bool = False
    movies_error: str | None = None

    search_query: str = ""
    search_results: list[SearchResult] = field(default_factory=list)
    search_error: str | None = None
    search_busy: bool = False

    pending_details: set[int] = field(default_factory=set)
    edit_form: MovieDetail | None = None
    save_busy: bool = False

    feedback: Feedback | None = None

    def clear_feedback(self) -> None:
        self.feedback = None


@dataclass(frozen=True)
class MovieRow:
    date: str
    poster_url: str | None
    poster_label: str
    link_url: str | None
    link_label: str
    title: str
    year: str
    director: str
    actors: str
    status: str
    status_class: str


def _cell(record: MovieRecord, key: ColumnKey, default: str = "") -> str:
    value = record.get(key.value)
    return default if value is None or value == "" else str(value)


def movie_row(record: MovieRecord) -> MovieRow:
    status = _cell(record, ColumnKey.STATUS)
    return MovieRow(
        date=_cell(record, ColumnKey.DATE),
        poster_url=record.get(ColumnKey.POSTER.value + URL_SUFFIX) or None,
        poster_label=_cell(record, ColumnKey.POSTER, "I"),
        link_url=record.get(ColumnKey.TRAILER.value + URL_SUFFIX) or None,
        link_label=_cell(record, ColumnKey.TRAILER, "T"),
        title=_cell(record, ColumnKey.TITLE, "N/A"),
        year=_cell(record, ColumnKey.YEAR),
        director=_cell(record, ColumnKey.DIRECTOR),
        actors=_cell(record, ColumnKey.ACTORS),
        status=status,
        status_class="success" if status == DEFAULT_STATUS else "warning",
    )


def movie_rows(movies: list[MovieRecord]) -> list[MovieRow]:
    return [movie_row(record) for record in movies]


def result_overview(result: SearchResult) -> str:
    return result.overview or NO_OVERVIEW
