"""
Security utilities for the AI Career Coach backend.

Authentication itself is handled by an external identity provider; this module
only turns the bearer token it issued into an ``Identity`` and enforces that
interactive operations have one.

Features:
- JWT decoding and validation (PyJWT)
- Optional bearer credentials dependency
- Identity requirement check shared by all services
- Token creation for scripts and tests
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from careercoach.core.config import Settings, get_settings
from careercoach.core.exceptions import UnauthorizedError
from careercoach.core.logging import security_logger, user_id_var

# Bearer token scheme; missing credentials are handled by the services
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by the identity provider."""
    subject: str
    email: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode in the token (``sub`` is required)
        settings: Settings carrying the signing key and algorithm
        expires_delta: Token expiration time delta

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=30))
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token payload or None if invalid
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.InvalidTokenError:
        return None


def identity_from_claims(claims: Dict[str, Any]) -> Optional[Identity]:
    """Build an Identity from decoded token claims."""
    subject = claims.get("sub")
    if not subject:
        return None
    return Identity(
        subject=str(subject),
        email=claims.get("email"),
        name=claims.get("name"),
        image_url=claims.get("picture"),
    )


def require_identity(identity: Optional[Identity]) -> Identity:
    """
    Ensure an operation has a caller identity.

    Raises:
        UnauthorizedError: If no identity is present
    """
    if identity is None:
        raise UnauthorizedError("Unauthorized")
    return identity


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Optional[Identity]:
    """
    Resolve the caller identity from the Authorization header.

    Returns None when the header is missing or the token is invalid; the
    service layer decides whether that is an error.
    """
    if credentials is None:
        return None

    claims = verify_token(credentials.credentials, settings)
    identity = identity_from_claims(claims) if claims else None
    if identity is None:
        security_logger.log_unauthorized("invalid token", path=request.url.path)
        return None

    user_id_var.set(identity.subject)
    return identity
