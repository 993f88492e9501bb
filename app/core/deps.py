"""FastAPI dependencies for authentication.

This module provides injectable dependencies for:
- The required requester identity (401 when absent)
- The optional requester identity (anonymous reads)
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.auth import Identity, token_service
from app.core.exceptions import Unauthorized

# Bearer scheme; errors are raised by the dependencies so they share the
# API's error format
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Identity:
    """Get the authenticated requester from the Authorization header.

    Args:
        credentials: Bearer credentials, if any

    Returns:
        The requester's Identity

    Raises:
        Unauthorized: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise Unauthorized()

    identity = token_service.get_identity(credentials.credentials)
    if identity is None:
        raise Unauthorized()
    return identity


async def get_optional_identity(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Identity | None:
    """Get the requester if authenticated, None otherwise.

    An invalid token is treated the same as no token.
    """
    if credentials is None:
        return None
    return token_service.get_identity(credentials.credentials)


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[Identity, Depends(get_current_identity)]
OptionalUser = Annotated[Identity | None, Depends(get_optional_identity)]
