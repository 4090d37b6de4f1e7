"""
TMDb integration clients.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_tracker.integrations.tmdb.client import (
        TmdbClientError,
        fetch_movie_details,
        search_movies,
    )

__all__ = [
    "TmdbClientError",
    "fetch_movie_details",
    "search_movies",
]


def __getattr__(name: str):
    if name in __all__:
        from movie_tracker.integrations.tmdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
