"""
Core infrastructure shared by every module.

- ``config``: environment settings
- ``database``: engine, session factory, ``get_db`` dependency
- ``security`` / ``auth``: password hashing, JWTs, role guards
- ``redis`` / ``rate_limit``: optional Redis and request throttling
- ``email`` / ``storage``: outbound email and uploaded files
- ``logging``: root logger setup

``auth`` is not re-exported here because it depends on the users module.
"""

from app.core.config import get_settings, settings
from app.core.database import Base, async_session_maker, get_db
from app.core.logging import setup_logging
from app.core.rate_limit import RateLimitExceeded, client_ip, enforce_rate_limit

__all__ = [
    "settings",
    "get_settings",
    "Base",
    "async_session_maker",
    "get_db",
    "setup_logging",
    "RateLimitExceeded",
    "client_ip",
    "enforce_rate_limit",
]
