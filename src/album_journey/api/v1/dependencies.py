"""Shared API dependencies."""

import logging
import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from album_journey.core.settings import settings
from album_journey.db.session import get_db

logger = logging.getLogger(__name__)

# The scheduler presents the shared secret as a bearer token.
cron_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def require_cron_secret(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(cron_bearer_scheme)],
) -> None:
    """Reject scheduler calls that do not carry the configured secret.

    When no ``CRON_SECRET`` is configured the check is disabled.

    Raises:
        HTTPException: If a secret is configured and the token does not match
    """
    expected = settings.cron_secret
    if not expected:
        return
    if credentials is None or not secrets.compare_digest(credentials.credentials, expected):
        logger.warning("Rejected scheduler call with missing or invalid secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


CronSecretDep = Depends(require_cron_secret)
