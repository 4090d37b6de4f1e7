from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import requests

from movie_tracker.integrations.omdb.client import OmdbClientError, OmdbRatings, fetch_ratings
from movie_tracker.integrations.omdb.client import resolve_api_key as resolve_omdb_api_key
from movie_tracker.integrations.tmdb.client import DETAIL_POSTER_SIZE, fetch_movie_details, poster_url
from movie_tracker.models.movies import DEFAULT_STATUS, UNKNOWN_TITLE, MovieDetail, today_us

logger = logging.getLogger(__name__)

IMDB_TITLE_URL = "https://www.imdb.com/title/{imdb_id}/"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={key}"
TOP_CAST_COUNT = 3


def format_runtime(minutes: Any) -> str:
    if not isinstance(minutes, int) or isinstance(minutes, bool) or minutes <= 0:
        return ""
    return f"{minutes // 60}h {minutes % 60}min"


def _names(items: Any) -> Iterable[str]:
    if not isinstance(items, list):
        return []
    return [str(item.get("name")) for item in items if isinstance(item, Mapping) and item.get("name")]


def pick_director(credits: Any) -> str:
    crew = credits.get("crew") if isinstance(credits, Mapping) else None
    for person in crew if isinstance(crew, list) else []:
        if isinstance(person, Mapping) and person.get("job") == "Director":
            return str(person.get("name") or "")
    return ""


def pick_top_cast(credits: Any, *, limit: int = TOP_CAST_COUNT) -> str:
    cast = credits.get("cast") if isinstance(credits, Mapping) else None
    return ", ".join(list(_names(cast))[:limit])


def pick_trailer_url(videos: Any) -> str | None:
    """YouTube trailer URL, preferring an English-language one."""

    results = videos.get("results") if isinstance(videos, Mapping) else None
    trailers = [
        video
        for video in (results if isinstance(results, list) else [])
        if isinstance(video, Mapping) and video.get("site") == "YouTube" and video.get("type") == "Trailer"
    ]
    if not trailers:
        return None
    english = [video for video in trailers if video.get("iso_639_1") == "en"]
    chosen = (english or trailers)[0]
    key = chosen.get("key")
    return YOUTUBE_WATCH_URL.format(key=key) if key else None


def build_movie_detail(
    payload: Mapping[str, Any],
    *,
    ratings: OmdbRatings | None = None,
    date_added: str | None = None,
) -> MovieDetail:
    """Map a TMDb `/movie/{id}` payload (with credits and videos) onto an editable MovieDetail."""

    credits = payload.get("credits")
    release_date = payload.get("release_date")
    imdb_id = payload.get("imdb_id") or None
    ratings = ratings or OmdbRatings()

    return MovieDetail(
        title=str(payload.get("title") or UNKNOWN_TITLE),
        plot=str(payload.get("overview") or ""),
        duration=format_runtime(payload.get("runtime")),
        genres=", ".join(_names(payload.get("genres"))),
        director=pick_director(credits),
        actors=pick_top_cast(credits),
        year=release_date[:4] if isinstance(release_date, str) else "",
        poster_url=poster_url(payload.get("poster_path"), size=DETAIL_POSTER_SIZE),
        imdb_id=imdb_id,
        imdb_link=IMDB_TITLE_URL.format(imdb_id=imdb_id) if imdb_id else None,
        trailer_link=pick_trailer_url(payload.get("videos")),
        imdb_score=ratings.imdb_score,
        rt_score=ratings.rt_score,
        date_added=date_added or today_us(),
        status=DEFAULT_STATUS,
        suite=False,
        note="",
        remarks="",
    )


def lookup_ratings(
    imdb_id: str | None,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
) -> OmdbRatings:
    """OMDb scores for `imdb_id`; any failure yields empty scores."""

    if not imdb_id:
        return OmdbRatings()
    resolved_key = resolve_omdb_api_key(api_key)
    if not resolved_key:
        logger.info("OMDB_API_KEY is not set; skipping ratings for %s", imdb_id)
        return OmdbRatings()
    try:
        ratings = fetch_ratings(imdb_id, api_key=resolved_key, session=session)
    except OmdbClientError as exc:
        logger.warning("OMDb ratings lookup failed for %s: %s %s", imdb_id, exc, exc.body_snippet or "")
        return OmdbRatings()
    logger.info("OMDb ratings for %s: IMDb=%s RT=%s", imdb_id, ratings.imdb_score, ratings.rt_score)
    return ratings


def fetch_movie_detail(
    tmdb_id: int,
    *,
    tmdb_api_key: str | None = None,
    omdb_api_key: str | None = None,
    session: requests.Session | None = None,
    date_added: str | None = None,
) -> MovieDetail:
    """
    Fetch TMDb details for `tmdb_id`, enrich with OMDb ratings, and fill the editable defaults.

    TMDb failures raise TmdbClientError; OMDb failures are never surfaced.
    """

    session = session or requests.Session()
    payload = fetch_movie_details(tmdb_id, api_key=tmdb_api_key, session=session)
    ratings = lookup_ratings(payload.get("imdb_id") or None, api_key=omdb_api_key, session=session)
    return build_movie_detail(payload, ratings=ratings, date_added=date_added)
