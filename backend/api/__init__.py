"""FastAPI HTTP layer package.

Run with::

    uvicorn backend.api:app --port 3001
"""

from backend.api.app import app

__all__ = ["app"]
