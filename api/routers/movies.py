"""
Movie endpoints: list the sheet, search TMDb, fetch details, append a movie.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from api.deps import HttpSession, Workbook, to_http_exception
from movie_tracker.ingestion.movie_details import fetch_movie_detail
from movie_tracker.integrations.tmdb.client import search_movies
from movie_tracker.models.movies import DEFAULT_STATUS, MovieDetail
from movie_tracker.repositories.movies import add_movie, list_movies


router = APIRouter(prefix="/movies", tags=["movies"])


# --- Pydantic models ---

class SearchResultOut(BaseModel):
    id: int
    title: str
    year: str
    poster_path: str
    overview: str = ""


class MovieDetailBody(BaseModel):
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


class SaveConfirmation(BaseModel):
    message: str


# --- Endpoints ---

@router.get("", response_model=list[dict[str, Any]])
def get_movies(workbook: Workbook) -> list[dict[str, Any]]:
    """List tracked movies, newest first."""
    try:
        return list_movies(workbook)
    except Exception as exc:
        raise to_http_exception(exc, "listing movies") from exc


@router.get("/search", response_model=list[SearchResultOut])
def search_metadata(session: HttpSession, query: str = Query(default="")) -> list[dict[str, Any]]:
    """Search TMDb; queries shorter than two characters return an empty list."""
    try:
        return [asdict(result) for result in search_movies(query, session=session)]
    except Exception as exc:
        raise to_http_exception(exc, "TMDb search") from exc


@router.get("/details/{tmdb_id}", response_model=MovieDetailBody)
def fetch_detail(session: HttpSession, tmdb_id: int) -> dict[str, Any]:
    """Merged TMDb details and OMDb ratings, with editable defaults filled in."""
    try:
        return asdict(fetch_movie_detail(tmdb_id, session=session))
    except Exception as exc:
        raise to_http_exception(exc, "fetching movie details") from exc


@router.post("", response_model=SaveConfirmation)
def save_record(workbook: Workbook, body: MovieDetailBody) -> dict[str, str]:
    """Append the edited movie to the sheet matching its status."""
    try:
        message = add_movie(workbook, MovieDetail(**body.model_dump()))
    except Exception as exc:
        raise to_http_exception(exc, "saving the movie") from exc
    return {"message": message}
