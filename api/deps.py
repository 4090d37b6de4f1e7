"""
Dependency injection for the spreadsheet workbook and the outbound HTTP session.
"""
from __future__ import annotations

import logging
from typing import Annotated, Iterator

import requests
from fastapi import Depends, HTTPException

from movie_tracker.integrations.tmdb.client import TmdbClientError
from movie_tracker.repositories.movies import MovieStoreError
from movie_tracker.sheets.client import create_workbook
from movie_tracker.sheets.workbook import SheetWorkbook
from movie_tracker.utils.env import ConfigurationError

logger = logging.getLogger(__name__)


def get_workbook() -> SheetWorkbook:
    """
    Returns a workbook view over the configured spreadsheet.

    Each request gets its own write buffer; the underlying spreadsheet handle is shared.
    """
    try:
        return create_workbook()
    except ConfigurationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"Unable to open the spreadsheet: {exc}")
        raise HTTPException(status_code=502, detail=f"Unable to open the spreadsheet: {exc}") from exc


def get_http_session() -> Iterator[requests.Session]:
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


# Type aliases for dependency injection
Workbook = Annotated[SheetWorkbook, Depends(get_workbook)]
HttpSession = Annotated[requests.Session, Depends(get_http_session)]


def to_http_exception(exc: Exception, context: str) -> HTTPException:
    """
    Flatten a domain error into an HTTPException carrying a single message.

    Args:
        exc: The error raised by the library layer
        context: Description of the operation for error messages

    Returns:
        HTTPException: 500 for configuration/store errors, 502 for upstream API errors
    """
    if isinstance(exc, ConfigurationError):
        logger.error(f"Configuration error during {context}: {exc}")
        return HTTPException(status_code=500, detail=str(exc))
    if isinstance(exc, TmdbClientError):
        logger.error(f"TMDb error during {context}: {exc} {exc.body_snippet or ''}")
        return HTTPException(status_code=502, detail=f"TMDb API error during {context}: {exc}")
    if isinstance(exc, MovieStoreError):
        return HTTPException(status_code=500, detail=str(exc))
    logger.exception(f"Unexpected error during {context}")
    return HTTPException(status_code=500, detail=f"Unexpected error during {context}: {exc}")
