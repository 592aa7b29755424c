"""
MultiVersus - Async client for the MultiVersus game backend.

Authenticates with a platform ticket, keeps the access token fresh and
exposes profile, match, leaderboard and username search calls.
"""

__version__ = "0.1.0"

from .api import MultiVersusAPIError, MultiVersusClient
from .config import Settings, get_settings

__all__ = [
    "MultiVersusClient",
    "MultiVersusAPIError",
    "Settings",
    "get_settings",
    "__version__",
]
