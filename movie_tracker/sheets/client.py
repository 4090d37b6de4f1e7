from __future__ import annotations

import os
from functools import lru_cache

import gspread
from google.oauth2.service_account import Credentials

from movie_tracker.sheets.workbook import SheetWorkbook
from movie_tracker.utils.env import require_env

SHEETS_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


@lru_cache
def get_service_account_file() -> str:
    return require_env("GOOGLE_SERVICE_ACCOUNT_FILE")


@lru_cache
def get_spreadsheet_name() -> str:
    return require_env("MOVIE_TRACKER_SPREADSHEET")


@lru_cache
def open_spreadsheet() -> gspread.Spreadsheet:
    """
    Open the tracker spreadsheet with the configured service account.

    `MOVIE_TRACKER_SPREADSHEET` is a spreadsheet title, or a key when
    `MOVIE_TRACKER_SPREADSHEET_KEY=1`.
    """

    creds = Credentials.from_service_account_file(get_service_account_file(), scopes=SHEETS_SCOPES)
    client = gspread.authorize(creds)
    name = get_spreadsheet_name()
    if (os.getenv("MOVIE_TRACKER_SPREADSHEET_KEY") or "").strip() in {"1", "true", "yes"}:
        return client.open_by_key(name)
    return client.open(name)


def create_workbook(spreadsheet: gspread.Spreadsheet | None = None) -> SheetWorkbook:
    """A fresh workbook view (with its own write buffer) over the shared spreadsheet."""

    return SheetWorkbook(spreadsheet or open_spreadsheet())
