#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from movie_tracker.ui.controller import MovieTrackerController
from movie_tracker.ui.remote import HttpRemote, LocalRemote, MovieTrackerRemote
from movie_tracker.ui.view_model import EMPTY_LIST_MESSAGE, NO_RESULTS_MESSAGE, movie_rows, result_overview
from movie_tracker.utils.env import load_env


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="movie_tracker_cli",
        description="Search TMDb and keep the movie tracker spreadsheet up to date.",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Call a running Movie Tracker API instead of the services in-process "
        "(defaults to MOVIE_TRACKER_API_URL when set).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List tracked movies, newest first.")

    search = sub.add_parser("search", help="Search TMDb by title.")
    search.add_argument("query")

    add = sub.add_parser("add", help="Fetch TMDb details for a movie and append it to the sheet.")
    add.add_argument("tmdb_id", type=int)
    add.add_argument("--status", default=None, help='Status to record (e.g. "Vu", "A voir").')
    add.add_argument("--note", default=None, help="Personal note (0-20).")
    add.add_argument("--remarks", default=None, help="Free-text remarks.")
    add.add_argument("--date", default=None, help="Date added (MM/DD/YYYY). Defaults to today.")
    add.add_argument("--suite", action="store_true", help="Mark a sequel as planned.")
    return parser.parse_args(argv)


def _build_remote(args: argparse.Namespace) -> MovieTrackerRemote:
    api_url = args.api_url or os.getenv("MOVIE_TRACKER_API_URL")
    if api_url:
        return HttpRemote(api_url)
    return LocalRemote()


async def _run(controller: MovieTrackerController, args: argparse.Namespace) -> int:
    view = controller.view

    if args.command == "list":
        await controller.load_movies()
        if view.movies_error:
            print(f"❌ {view.movies_error}", file=sys.stderr)
            return 1
        rows = movie_rows(view.movies)
        if not rows:
            print(EMPTY_LIST_MESSAGE)
        for row in rows:
            print(f"{row.date:<10}  {row.title} ({row.year})  {row.director}  [{row.status}]")
        return 0

    if args.command == "search":
        await controller.search(args.query)
        if view.search_error:
            print(f"❌ {view.search_error}", file=sys.stderr)
            return 1
        if not view.search_results:
            print(NO_RESULTS_MESSAGE)
        for result in view.search_results:
            print(f"{result.id:>8}  {result.title} ({result.year})")
            print(f"          {result_overview(result)[:120]}")
        return 0

    await controller.select_result(args.tmdb_id)
    detail = view.edit_form
    if detail is None:
        message = view.feedback.message if view.feedback else "No details returned."
        print(f"❌ {message}", file=sys.stderr)
        return 1

    if args.status is not None:
        detail.status = args.status
    if args.note is not None:
        detail.note = args.note
    if args.remarks is not None:
        detail.remarks = args.remarks
    if args.date is not None:
        detail.date_added = args.date
    detail.suite = bool(args.suite)

    await controller.save(detail)
    feedback = view.feedback
    if feedback is None or not feedback.is_success:
        print(f"❌ {feedback.message if feedback else 'Save failed.'}", file=sys.stderr)
        return 1
    print(f"✅ {feedback.message}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    load_env()
    controller = MovieTrackerController(_build_remote(args))
    return asyncio.run(_run(controller, args))


if __name__ == "__main__":
    raise SystemExit(main())
