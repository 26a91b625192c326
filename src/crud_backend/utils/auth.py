"""
Bearer-token authentication for API endpoints.

The dependency is only attached to routes when ENABLE_AUTH is set; the
default deployment serves the API without it.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from fastapi import Header, HTTPException, Request

from crud_backend.config.settings import Settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass
class AuthContext:
    """Authenticated caller, taken from the token claims"""
    is_authenticated: bool
    subject: str
    claims: Dict[str, Any]


def create_access_token(subject: str, settings: Settings, ttl_seconds: Optional[int] = None) -> str:
    """
    Issue a signed access token

    Args:
        subject: Value for the "sub" claim
        settings: Supplies the secret, algorithm and optional aud/iss
        ttl_seconds: Lifetime, defaults to ACCESS_TOKEN_TTL_SECONDS

    Returns:
        Encoded JWT
    """
    if not settings.jwt_secret:
        raise ValueError("JWT_SECRET is not configured")

    current_time = int(time.time())
    payload = {
        "sub": subject,
        "iat": current_time,
        "exp": current_time + (ttl_seconds if ttl_seconds is not None else settings.access_token_ttl_seconds),
    }
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Verify signature, expiry and (when configured) audience and issuer

    Raises:
        jwt.InvalidTokenError: If the token does not verify
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],  # Strict algorithm allowlist
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options={"require": ["exp", "sub"]},
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def authenticate_api(
    request: Request,
    authorization: Optional[str] = Header(None)
) -> AuthContext:
    """
    FastAPI dependency for JWT Bearer token authentication.

    Raises:
        HTTPException: 401 if the header is missing, malformed or the token is invalid
    """
    if not authorization:
        logger.warning("AUTH: request missing Authorization header")
        raise _unauthorized("Missing Authorization header")

    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("AUTH: invalid Authorization header format")
        raise _unauthorized("Invalid authorization header format. Expected 'Bearer <token>'")

    token = authorization[len(BEARER_PREFIX):].strip()
    settings: Settings = request.app.state.settings

    try:
        claims = decode_access_token(token, settings)
    except jwt.ExpiredSignatureError:
        logger.warning("AUTH: token has expired")
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"AUTH: invalid token: {str(e)}")
        raise _unauthorized("Invalid token")

    logger.debug(f"AUTH: authenticated subject {claims['sub']}")
    return AuthContext(is_authenticated=True, subject=claims["sub"], claims=claims)
