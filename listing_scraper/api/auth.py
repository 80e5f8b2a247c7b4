"""Admin authorization for the API."""

import logging
import secrets
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import settings

logger = logging.getLogger(__name__)

# Token security
security = HTTPBearer(auto_error=False)


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> None:
    """Allow the request only when it carries the admin bearer token.

    With no ``API_ADMIN_TOKEN`` configured every request is rejected.

    Raises:
        HTTPException: If the token is missing or wrong, or none is configured
    """
    if not settings.api.admin_token:
        logger.warning("Rejected admin request: API_ADMIN_TOKEN is not configured")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), settings.api.admin_token.encode()
    ):
        logger.warning("Rejected unauthorized admin request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
