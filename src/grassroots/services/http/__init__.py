"""HTTP surface for the calendar services."""

from .server import app, get_state, run_local_server

__all__ = ["app", "get_state", "run_local_server"]
