"""Session verification — resolves the calling principal from a signed token.

Tokens are issued by the external login flow as HS256 JWTs and presented
either in the session cookie or as an ``Authorization: Bearer`` header.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request
from jose import JWTError, jwt

from repo_auditor.domain.entities import Principal
from repo_auditor.domain.exceptions import AuthenticationRequiredError
from repo_auditor.infrastructure.config import Settings
from repo_auditor.interface.dependencies import get_app_settings

logger = logging.getLogger(__name__)


def _extract_token(request: Request, cookie_name: str) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(cookie_name)


def decode_session_token(token: str, settings: Settings) -> Principal:
    """Verify *token* and return the principal it names."""
    try:
        payload = jwt.decode(
            token,
            settings.session_secret.get_secret_value(),
            algorithms=[settings.session_algorithm],
        )
    except JWTError as exc:
        raise AuthenticationRequiredError(f"Invalid session token: {exc}") from exc

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationRequiredError("Session token has no subject.")

    return Principal(
        subject=str(subject),
        name=payload.get("name"),
        email=payload.get("email"),
        picture=payload.get("picture"),
    )


async def get_current_principal(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    """FastAPI dependency: the authenticated caller, or a 401."""
    token = _extract_token(request, settings.session_cookie_name)
    if not token:
        raise AuthenticationRequiredError("No session token presented.")
    principal = decode_session_token(token, settings)
    logger.debug("Authenticated principal %s", principal.subject)
    return principal
