from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from movie_tracker.models.movies import SearchResult
from movie_tracker.utils.env import require_env

logger = logging.getLogger(__name__)

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
SEARCH_POSTER_SIZE = "w200"
DETAIL_POSTER_SIZE = "w500"
PLACEHOLDER_POSTER_URL = "https://via.placeholder.com/100x150.png?text=No+Image"
MIN_QUERY_LENGTH = 2


class TmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def _require_api_key(api_key: str | None) -> str:
    return require_env("TMDB_API_KEY", api_key)


def poster_url(poster_path: str | None, *, size: str) -> str | None:
    if not poster_path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{size}{poster_path}"


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    timeout_seconds: float = 20.0,
) -> dict[str, Any]:
    headers = {
        "accept": "application/json",
        "user-agent": "Mozilla/5.0",
    }
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise TmdbClientError(f"TMDb request failed: {exc}") from exc

    if resp.status_code != 200:
        body = resp.text or ""
        logger.error("TMDb request to %s failed with HTTP %s: %s", url, resp.status_code, body)
        raise TmdbClientError(
            f"TMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=body[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        logger.error("TMDb returned non-JSON response from %s: %s", url, resp.text)
        raise TmdbClientError(
            "TMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise TmdbClientError("TMDb returned unexpected JSON shape (not an object).")
    return payload


def _search_result(hit: Mapping[str, Any]) -> SearchResult:
    release_date = hit.get("release_date")
    year = release_date[:4] if isinstance(release_date, str) and release_date else "N/A"
    return SearchResult(
        id=int(hit.get("id") or 0),
        title=str(hit.get("title") or ""),
        year=year,
        poster_path=poster_url(hit.get("poster_path"), size=SEARCH_POSTER_SIZE) or PLACEHOLDER_POSTER_URL,
        overview=str(hit.get("overview") or ""),
    )


def search_movies(
    query: str,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    language: str = "en-US",
) -> list[SearchResult]:
    """
    Search TMDb movies by title.

    Queries shorter than two characters (after trimming) return an empty list without
    touching the network.
    """

    if not query or len(query.strip()) < MIN_QUERY_LENGTH:
        return []

    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    url = f"{TMDB_API_BASE_URL}/search/movie"
    payload = _request_json(
        session,
        url,
        params={"api_key": api_key, "query": query, "language": language, "include_adult": "false"},
    )
    results = payload.get("results")
    if not isinstance(results, list):
        logger.error("TMDb search response missing results: %s", payload)
        raise TmdbClientError("TMDb search response missing results.")
    return [_search_result(hit) for hit in results if isinstance(hit, dict)]


def fetch_movie_details(
    tmdb_id: int,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    language: str = "en-US",
    append_to_response: list[str] | None = None,
) -> dict[str, Any]:
    """
    Fetch a movie details payload from TMDb.

    Returns the full JSON object as returned by `/3/movie/{id}` (with `credits` and `videos`
    appended by default).
    """

    append_parts = append_to_response if append_to_response is not None else ["credits", "videos"]
    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    url = f"{TMDB_API_BASE_URL}/movie/{int(tmdb_id)}"
    params: dict[str, Any] = {"api_key": api_key, "language": language}
    if append_parts:
        params["append_to_response"] = ",".join(append_parts)
    return _request_json(session, url, params=params)
