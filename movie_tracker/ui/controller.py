from __future__ import annotations

import logging

from movie_tracker.models.movies import MovieDetail
from movie_tracker.ui.remote import MovieTrackerRemote, call_remote
from movie_tracker.ui.view_model import Feedback, MovieTrackerViewModel

logger = logging.getLogger(__name__)


class MovieTrackerController:
    """
    Drives search, selection, editing, and list refresh for one view-model.

    Each action awaits exactly one remote call. While a call is in flight the
    triggering action is ignored, which stands in for a disabled button.
    """

    def __init__(self, remote: MovieTrackerRemote, view: MovieTrackerViewModel | None = None) -> None:
        self.remote = remote
        self.view = view or MovieTrackerViewModel()

    async def load_movies(self) -> None:
        view = self.view
        view.movies_loading = True
        view.movies_error = None
        view.movies = []

        result = await call_remote(self.remote.list_movies)
        view.movies_loading = False
        if not result.ok:
            view.movies_error = f"Error loading movies: {result.error}"
            return
        view.movies = list(result.value or [])

    async def search(self, query: str) -> None:
        view = self.view
        query = (query or "").strip()
        view.search_query = query
        if not query:
            view.search_error = "Please enter a search term."
            return
        if view.search_busy:
            logger.debug("Search already in flight; ignoring %r", query)
            return

        view.search_busy = True
        view.search_results = []
        view.search_error = None
        view.clear_feedback()

        result = await call_remote(self.remote.search_metadata, query)
        view.search_busy = False
        if not result.ok:
            view.search_error = f"Search failed: {result.error}"
            return
        view.search_results = list(result.value or [])

    async def select_result(self, tmdb_id: int) -> None:
        view = self.view
        if tmdb_id in view.pending_details:
            return

        view.pending_details.add(tmdb_id)
        view.clear_feedback()
        try:
            result = await call_remote(self.remote.fetch_detail, tmdb_id)
        finally:
            view.pending_details.discard(tmdb_id)

        if not result.ok:
            view.feedback = Feedback(f"Error fetching details: {result.error}", is_success=False)
            return
        view.edit_form = result.value

    async def save(self, detail: MovieDetail | None = None) -> None:
        view = self.view
        detail = detail or view.edit_form
        if detail is None or view.save_busy:
            return

        view.save_busy = True
        view.clear_feedback()
        result = await call_remote(self.remote.save_record, detail)
        view.save_busy = False
        if not result.ok:
            view.feedback = Feedback(f"Error saving movie: {result.error}", is_success=False)
            return

        view.edit_form = None
        view.feedback = Feedback(str(result.value), is_success=True)
        await self.load_movies()
