from __future__ import annotations

import pytest

from movie_tracker.integrations.tmdb.client import (
    PLACEHOLDER_POSTER_URL,
    TmdbClientError,
    fetch_movie_details,
    search_movies,
)
from movie_tracker.models.movies import SearchResult
from movie_tracker.utils.env import ConfigurationError


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = "") -> None:  # noqa: ANN001
        self.status_code = status_code
        self._payload = payload
        self.text = text or str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class _FakeSession:
    def __init__(self, responses: list[_FakeResponse]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, *, params=None, headers=None, timeout=None):  # noqa: ANN001
        self.calls.append((url, dict(params or {})))
        return self._responses.pop(0)


@pytest.fixture(autouse=True)
def _tmdb_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMDB_API_KEY", "test-key")


@pytest.mark.parametrize("query", ["", " ", "a", "  b  "])
def test_search_short_query_makes_no_network_call(query: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    session = _FakeSession([])

    assert search_movies(query, session=session) == []
    assert session.calls == []


def test_search_maps_hits_to_search_results() -> None:
    session = _FakeSession(
        [
            _FakeResponse(
                payload={
                    "results": [
                        {
                            "id": 27205,
                            "title": "Inception",
                            "release_date": "2010-07-16",
                            "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
                            "overview": "Cobb, a skilled thief...",
                        },
                        {"id": 1, "title": "Inception: The Cobol Job", "release_date": "", "poster_path": None},
                    ]
                }
            )
        ]
    )

    results = search_movies("Inception", session=session)

    assert results[0] == SearchResult(
        id=27205,
        title="Inception",
        year="2010",
        poster_path="https://image.tmdb.org/t/p/w200/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
        overview="Cobb, a skilled thief...",
    )
    assert results[1].year == "N/A"
    assert results[1].poster_path == PLACEHOLDER_POSTER_URL
    assert results[1].overview == ""

    url, params = session.calls[0]
    assert url == "https://api.themoviedb.org/3/search/movie"
    assert params == {"api_key": "test-key", "query": "Inception", "language": "en-US", "include_adult": "false"}


def test_search_raises_on_http_error() -> None:
    session = _FakeSession([_FakeResponse(status_code=401, payload={"status_message": "Invalid API key"})])

    with pytest.raises(TmdbClientError) as excinfo:
        search_movies("Inception", session=session)

    assert excinfo.value.status_code == 401
    assert "Invalid API key" in (excinfo.value.body_snippet or "")


def test_search_raises_when_results_missing() -> None:
    session = _FakeSession([_FakeResponse(payload={"page": 1})])

    with pytest.raises(TmdbClientError, match="missing results"):
        search_movies("Inception", session=session)


def test_search_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TMDB_API_KEY", raising=False)

    with pytest.raises(ConfigurationError, match="TMDB_API_KEY"):
        search_movies("Inception", session=_FakeSession([]))


def test_fetch_movie_details_appends_credits_and_videos() -> None:
    session = _FakeSession([_FakeResponse(payload={"id": 27205, "title": "Inception"})])

    payload = fetch_movie_details(27205, session=session)

    assert payload["title"] == "Inception"
    url, params = session.calls[0]
    assert url == "https://api.themoviedb.org/3/movie/27205"
    assert params["append_to_response"] == "credits,videos"
    assert params["language"] == "en-US"


def test_fetch_movie_details_raises_on_http_error() -> None:
    session = _FakeSession([_FakeResponse(status_code=404, payload={"status_code": 34})])

    with pytest.raises(TmdbClientError) as excinfo:
        fetch_movie_details(999999999, session=session)

    assert excinfo.value.status_code == 404


def test_fetch_movie_details_rejects_non_json() -> None:
    session = _FakeSession([_FakeResponse(payload=None, text="<html>oops</html>")])

    with pytest.raises(TmdbClientError, match="non-JSON"):
        fetch_movie_details(27205, session=session)
