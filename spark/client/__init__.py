"""
Client-side pieces: the HTTP API client, per-tab session state, the
dashboard view state and the controller tying them together.
"""

from .api import SparkApiClient, SparkApiError
from .controller import NoActiveSpark, SparkSessionController
from .dashboard import DashboardState, DashboardView, InvalidTransition
from .session import SessionState, SessionStore

__all__ = [
    "SparkApiClient",
    "SparkApiError",
    "NoActiveSpark",
    "SparkSessionController",
    "DashboardState",
    "DashboardView",
    "InvalidTransition",
    "SessionState",
    "SessionStore",
]
