"""
OMDb ratings client.
"""

from movie_tracker.integrations.omdb.client import OmdbClientError, OmdbRatings, fetch_ratings

__all__ = [
    "OmdbClientError",
    "OmdbRatings",
    "fetch_ratings",
]
