"""
Interview Calendar Sync API module.

Provides FastAPI HTTP endpoints for the calendar sync client.
"""

from src.api.main import app, run_server

__all__ = ["app", "run_server"]
