"""
App assembly entry point.

Re-exports the FastAPI `app` from `collab.api.main` so `uvicorn app:app` works
from the repository root.
"""

from collab.api.main import app  # noqa: F401
