"""
Shared movie tracker library code.

This package is intended to hold code that is reused across:
- the FastAPI app in `api/`
- the command-line front-end in `scripts/`

App entrypoints (FastAPI routers, CLI scripts) should live outside this package and
import from `movie_tracker` rather than the other way around.
"""
