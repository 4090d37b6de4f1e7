"""
Domain models shared across scripts and services.
"""

from movie_tracker.models.movies import MovieDetail, MovieRecord, SearchResult

__all__ = [
    "MovieDetail",
    "MovieRecord",
    "SearchResult",
]
