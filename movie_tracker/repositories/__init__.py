"""
Repository layer for spreadsheet access patterns.
"""

from movie_tracker.repositories.movies import (
    MovieStoreError,
    add_movie,
    list_movies,
    target_table_name,
)

__all__ = [
    "MovieStoreError",
    "add_movie",
    "list_movies",
    "target_table_name",
]
