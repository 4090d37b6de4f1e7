"""
Client-side orchestration: view-model, controller, and the remote-call boundary.
"""

from movie_tracker.ui.controller import MovieTrackerController
from movie_tracker.ui.remote import CallResult, HttpRemote, LocalRemote, MovieTrackerRemote
from movie_tracker.ui.view_model import Feedback, MovieTrackerViewModel, movie_rows

__all__ = [
    "CallResult",
    "Feedback",
    "HttpRemote",
    "LocalRemote",
    "MovieTrackerController",
    "MovieTrackerRemote",
    "MovieTrackerViewModel",
    "movie_rows",
]
