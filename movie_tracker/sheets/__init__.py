"""
Google Sheets helpers for the movie tracker spreadsheet.
"""

from movie_tracker.sheets.workbook import SheetWorkbook

__all__ = [
    "SheetWorkbook",
]
