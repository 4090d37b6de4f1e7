"""
Remote-call boundary between the controller and the tracker services.

Every call is one-shot: it either yields a value or a flattened, human-readable
error message. No typed errors cross this boundary.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar

import requests

from movie_tracker.ingestion.movie_details import fetch_movie_detail
from movie_tracker.integrations.tmdb.client import search_movies
from movie_tracker.models.movies import MovieDetail, MovieRecord, SearchResult
from movie_tracker.repositories.movies import add_movie, list_movies
from movie_tracker.sheets.client import create_workbook
from movie_tracker.sheets.workbook import SheetWorkbook

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RemoteCallError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class CallResult(Generic[T]):
    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def call_remote(fn: Callable[..., T], *args: Any) -> CallResult[T]:
    """Run a blocking remote call off the event loop and capture its outcome."""

    try:
        value = await asyncio.to_thread(fn, *args)
    except Exception as exc:
        logger.warning("Remote call %s failed: %s", getattr(fn, "__name__", fn), exc)
        return CallResult(error=str(exc) or exc.__class__.__name__)
    return CallResult(value=value)


class MovieTrackerRemote(Protocol):
    def list_movies(self) -> list[MovieRecord]: ...

    def search_metadata(self, query: str) -> list[SearchResult]: ...

    def fetch_detail(self, tmdb_id: int) -> MovieDetail: ...

    def save_record(self, detail: MovieDetail) -> str: ...


class LocalRemote:
    """Calls the tracker services in-process."""

    def __init__(
        self,
        *,
        workbook_factory: Callable[[], SheetWorkbook] = create_workbook,
        session: requests.Session | None = None,
    ) -> None:
        self._workbook_factory = workbook_factory
        self._session = session or requests.Session()

    def list_movies(self) -> list[MovieRecord]:
        return list_movies(self._workbook_factory())

    def search_metadata(self, query: str) -> list[SearchResult]:
        return search_movies(query, session=self._session)

    def fetch_detail(self, tmdb_id: int) -> MovieDetail:
        return fetch_movie_detail(tmdb_id, session=self._session)

    def save_record(self, detail: MovieDetail) -> str:
        return add_movie(self._workbook_factory(), detail)


class HttpRemote:
    """Calls the FastAPI surface (`/api/v1/movies`)."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout_seconds = timeout_seconds

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}/api/v1/movies{path}"
        try:
            resp = self._session.request(method, url, timeout=self._timeout_seconds, **kwargs)
        except requests.RequestException as exc:
            raise RemoteCallError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail")
            except ValueError:
                detail = None
            raise RemoteCallError(str(detail or resp.text or f"HTTP {resp.status_code}"), status_code=resp.status_code)
        return resp.json()

    def list_movies(self) -> list[MovieRecord]:
        return list(self._request("GET", ""))

    def search_metadata(self, query: str) -> list[SearchResult]:
        return [SearchResult(**item) for item in self._request("GET", "/search", params={"query": query})]

    def fetch_detail(self, tmdb_id: int) -> MovieDetail:
        return MovieDetail(**self._request("GET", f"/details/{int(tmdb_id)}"))

    def save_record(self, detail: MovieDetail) -> str:
        return str(self._request("POST", "", json=asdict(detail))["message"])
