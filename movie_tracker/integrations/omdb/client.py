from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import requests

from movie_tracker.utils.env import optional_env

OMDB_API_BASE_URL = "https://www.omdbapi.com/"


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


@dataclass(frozen=True)
class OmdbRatings:
    imdb_score: str = ""
    rt_score: str = ""  # Rotten Tomatoes percentage without the "%"


def resolve_api_key(api_key: str | None = None) -> str | None:
    return optional_env("OMDB_API_KEY", api_key)


def parse_imdb_rating(payload: Mapping[str, Any]) -> str:
    raw = payload.get("imdbRating")
    if not raw or raw == "N/A":
        return ""
    return str(raw)


def parse_rt_score(payload: Mapping[str, Any]) -> str:
    ratings = payload.get("Ratings") or []
    if not isinstance(ratings, list):
        return ""
    for rating in ratings:
        if not isinstance(rating, Mapping) or rating.get("Source") != "Rotten Tomatoes":
            continue
        value = rating.get("Value")
        if not isinstance(value, str) or not value or value == "N/A":
            return ""
        return value.replace("%", "")
    return ""


def fetch_ratings(
    imdb_id: str,
    *,
    api_key: str,
    session: requests.Session | None = None,
    timeout_seconds: float = 20.0,
) -> OmdbRatings:
    """
    Fetch IMDb and Rotten Tomatoes scores for an IMDb title id.

    Raises OmdbClientError on transport errors, non-200 responses, or `Response != "True"`.
    """

    session = session or requests.Session()
    try:
        resp = session.get(
            OMDB_API_BASE_URL,
            params={"apikey": api_key, "i": imdb_id},
            headers={"accept": "application/json"},
            timeout=timeout_seconds,
        )
    except requests.RequestException as exc:
        raise OmdbClientError(f"OMDb request failed: {exc}") from exc

    body = resp.text or ""
    if resp.status_code != 200:
        raise OmdbClientError(
            f"OMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=body[:400],
        )
    try:
        payload = resp.json()
    except ValueError as exc:
        raise OmdbClientError("OMDb returned non-JSON response.", body_snippet=body[:400]) from exc

    if not isinstance(payload, dict) or payload.get("Response") != "True":
        raise OmdbClientError(f"OMDb lookup failed for {imdb_id}.", status_code=resp.status_code, body_snippet=body[:400])

    return OmdbRatings(imdb_score=parse_imdb_rating(payload), rt_score=parse_rt_score(payload))
