from __future__ import annotations

import asyncio

from movie_tracker.models.movies import MovieDetail, SearchResult
from movie_tracker.ui.controller import MovieTrackerController
from movie_tracker.ui.remote import call_remote
from movie_tracker.ui.view_model import Feedback, MovieTrackerViewModel, movie_rows, result_overview


class _FakeRemote:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.movies = [{"TITRE FILM": "Heat", "STATUS": "Vu"}]
        self.results = [SearchResult(id=27205, title="Inception", year="2010", poster_path="p", overview="")]
        self.detail = MovieDetail(title="Inception", year="2010")
        self.fail: set[str] = set()

    def _maybe_fail(self, name: str) -> None:
        if name in self.fail:
            raise RuntimeError(f"{name} exploded")

    def list_movies(self):
        self.calls.append(("list_movies", None))
        self._maybe_fail("list_movies")
        return list(self.movies)

    def search_metadata(self, query: str):
        self.calls.append(("search_metadata", query))
        self._maybe_fail("search_metadata")
        return list(self.results)

    def fetch_detail(self, tmdb_id: int):
        self.calls.append(("fetch_detail", tmdb_id))
        self._maybe_fail("fetch_detail")
        return self.detail

    def save_record(self, detail: MovieDetail):
        self.calls.append(("save_record", detail.title))
        self._maybe_fail("save_record")
        return f"\"{detail.title}\" added to 'Reading Log'."


def test_call_remote_flattens_errors_into_message() -> None:
    def _boom() -> None:
        raise ValueError("Sheet 'Reading Log' not found.")

    ok = asyncio.run(call_remote(lambda: 42))
    failed = asyncio.run(call_remote(_boom))

    assert ok.ok and ok.value == 42
    assert not failed.ok
    assert failed.error == "Sheet 'Reading Log' not found."


def test_load_movies_populates_view() -> None:
    controller = MovieTrackerController(_FakeRemote())

    asyncio.run(controller.load_movies())

    assert controller.view.movies == [{"TITRE FILM": "Heat", "STATUS": "Vu"}]
    assert controller.view.movies_loading is False
    assert controller.view.movies_error is None


def test_load_movies_failure_sets_list_error_only() -> None:
    remote = _FakeRemote()
    remote.fail.add("list_movies")
    view = MovieTrackerViewModel(search_results=list(remote.results))
    controller = MovieTrackerController(remote, view)

    asyncio.run(controller.load_movies())

    assert view.movies_error == "Error loading movies: list_movies exploded"
    assert view.movies_loading is False
    assert view.search_results == remote.results


def test_search_blank_query_sets_error_without_calling_remote() -> None:
    remote = _FakeRemote()
    controller = MovieTrackerController(remote)

    asyncio.run(controller.search("   "))

    assert controller.view.search_error == "Please enter a search term."
    assert remote.calls == []


def test_search_populates_results_and_clears_feedback() -> None:
    remote = _FakeRemote()
    view = MovieTrackerViewModel(feedback=Feedback("old"))
    controller = MovieTrackerController(remote, view)

    asyncio.run(controller.search(" Inception "))

    assert remote.calls == [("search_metadata", "Inception")]
    assert view.search_results == remote.results
    assert view.search_busy is False
    assert view.feedback is None


def test_search_is_ignored_while_in_flight() -> None:
    remote = _FakeRemote()
    controller = MovieTrackerController(remote, MovieTrackerViewModel(search_busy=True))

    asyncio.run(controller.search("Inception"))

    assert remote.calls == []


def test_search_failure_leaves_movie_list_intact() -> None:
    remote = _FakeRemote()
    remote.fail.add("search_metadata")
    view = MovieTrackerViewModel(movies=[{"TITRE FILM": "Heat"}])
    controller = MovieTrackerController(remote, view)

    asyncio.run(controller.search("Inception"))

    assert view.search_error == "Search failed: search_metadata exploded"
    assert view.search_busy is False
    assert view.movies == [{"TITRE FILM": "Heat"}]


def test_select_result_fills_edit_form() -> None:
    remote = _FakeRemote()
    controller = MovieTrackerController(remote)

    asyncio.run(controller.select_result(27205))

    assert controller.view.edit_form is remote.detail
    assert controller.view.pending_details == set()


def test_select_result_failure_reports_feedback() -> None:
    remote = _FakeRemote()
    remote.fail.add("fetch_detail")
    controller = MovieTrackerController(remote)

    asyncio.run(controller.select_result(27205))

    assert controller.view.edit_form is None
    assert controller.view.feedback == Feedback("Error fetching details: fetch_detail exploded", is_success=False)
    assert controller.view.pending_details == set()


def test_select_result_ignores_pending_id() -> None:
    remote = _FakeRemote()
    controller = MovieTrackerController(remote, MovieTrackerViewModel(pending_details={27205}))

    asyncio.run(controller.select_result(27205))

    assert remote.calls == []


def test_save_success_reports_and_reloads_list() -> None:
    remote = _FakeRemote()
    view = MovieTrackerViewModel(edit_form=MovieDetail(title="Inception"))
    controller = MovieTrackerController(remote, view)

    asyncio.run(controller.save())

    assert remote.calls == [("save_record", "Inception"), ("list_movies", None)]
    assert view.edit_form is None
    assert view.feedback == Feedback("\"Inception\" added to 'Reading Log'.", is_success=True)
    assert view.movies == remote.movies
    assert view.save_busy is False


def test_save_failure_keeps_form() -> None:
    remote = _FakeRemote()
    remote.fail.add("save_record")
    form = MovieDetail(title="Inception")
    view = MovieTrackerViewModel(edit_form=form)
    controller = MovieTrackerController(remote, view)

    asyncio.run(controller.save())

    assert view.edit_form is form
    assert view.feedback == Feedback("Error saving movie: save_record exploded", is_success=False)
    assert remote.calls == [("save_record", "Inception")]


def test_save_without_form_does_nothing() -> None:
    remote = _FakeRemote()
    controller = MovieTrackerController(remote)

    asyncio.run(controller.save())

    assert remote.calls == []


def test_movie_rows_build_display_values() -> None:
    rows = movie_rows(
        [
            {
                "DATE": "03/15/2024",
                "I": "I",
                "I_Url": "https://img/p.jpg",
                "T": "T",
                "TITRE FILM": "Inception",
                "YEAR": 2010,
                "STATUS": "Vu",
            },
            {"TITRE FILM": "Heat", "STATUS": "A voir"},
        ]
    )

    assert rows[0].poster_url == "https://img/p.jpg"
    assert rows[0].link_url is None
    assert rows[0].link_label == "T"
    assert rows[0].year == "2010"
    assert rows[0].status_class == "success"
    assert rows[1].status_class == "warning"
    assert rows[1].poster_label == "I"


def test_result_overview_falls_back() -> None:
    result = SearchResult(id=1, title="X", year="N/A", poster_path="p")
    assert result_overview(result) == "No description."
