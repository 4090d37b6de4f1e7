"""
Ingestion helpers for turning external metadata into tracker records.
"""

from movie_tracker.ingestion.movie_details import build_movie_detail, fetch_movie_detail

__all__ = [
    "build_movie_detail",
    "fetch_movie_detail",
]
