"""Core module - Settings, logging, auth, and shared errors.

Note: Dependencies (deps.py) and auth modules are imported lazily
to avoid circular imports. Import them directly where needed:

    from app.core.deps import CurrentUser, OptionalUser
    from app.core.auth import create_access_token
    from app.core.exceptions import NotFoundError
"""

from app.core.config import settings

__all__ = [
    "settings",
]
