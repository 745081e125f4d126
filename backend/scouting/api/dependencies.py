"""Request Dependencies — bearer-token user resolution and internal API key check.

Invariants:
    - get_current_user: no/invalid Authorization header -> 401
    - require_internal_api_key: missing x-api-key -> 401, wrong key -> 403
    - An unset INTERNAL_API_KEY rejects every key (fail closed)
    - Key comparison is constant-time
"""

import logging
import secrets

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.concurrency import run_in_threadpool

from scouting.config import Settings, get_settings
from scouting.core.errors import AuthenticationError, PermissionDeniedError
from scouting.infrastructure.firebase import VerifiedIdentity, verify_id_token

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> VerifiedIdentity:
    """Resolve the caller from a Firebase ID token."""
    if not credentials or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Authorization token is missing")
    return await run_in_threadpool(
        verify_id_token, credentials.credentials, settings,
    )


async def require_internal_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
    settings: Settings = Depends(get_settings),
) -> None:
    """Gate for the analysis-worker endpoints."""
    if not x_api_key:
        raise AuthenticationError("API key is missing")
    expected = settings.internal_api_key
    if not expected or not secrets.compare_digest(x_api_key, expected):
        logger.warning("Rejected internal API key")
        raise PermissionDeniedError("Invalid API key")
