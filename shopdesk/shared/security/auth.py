"""
API key authentication.

Resolves the Caller for a request from the ``X-API-Key`` header.
Known keys and their permissions come from application settings.
The resolved Caller is handed explicitly to controllers.
"""

import logging
import secrets
from typing import Optional

from fastapi import Security
from fastapi.security import APIKeyHeader

from shopdesk.core.config import ApiKeyGrant, settings
from shopdesk.domain.caller import Caller

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


class AuthenticationError(Exception):
    """Raised when a request carries no valid API key."""

    def __init__(self, message: str = "Invalid or missing API key") -> None:
        self.message = message
        super().__init__(self.message)


def _find_grant(api_key: str) -> Optional[ApiKeyGrant]:
    for known_key, grant in settings.api_keys.items():
        if secrets.compare_digest(known_key.encode(), api_key.encode()):
            return grant
    return None


def resolve_caller(api_key: Optional[str] = Security(api_key_header)) -> Caller:
    """FastAPI dependency returning the authenticated Caller.

    Raises:
        AuthenticationError: If the key is missing or unknown.
    """
    if not api_key:
        raise AuthenticationError()

    grant = _find_grant(api_key)
    if grant is None:
        logger.warning("Rejected request with unknown API key")
        raise AuthenticationError()

    return Caller(name=grant.name, permissions=frozenset(grant.permissions))
