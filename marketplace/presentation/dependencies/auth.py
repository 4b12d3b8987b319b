"""
Session Authentication for FastAPI.

A session is a signed JWT (HS256) carried in an httpOnly cookie, or in an
`Authorization: Bearer` header for non-browser clients. REST routes and the
realtime channel decode the same token, so one login serves both.

Claims:
- sub:   user id (canonical UUID)
- email: user email
- iat, exp, iss, aud

Settings needed (from the active get_config() class):
- SESSION_SECRET
- SESSION_ISSUER
- SESSION_AUDIENCE
- SESSION_TTL_SECONDS
- SESSION_COOKIE_NAME / SESSION_COOKIE_SECURE
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, Response, WebSocket, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from marketplace.config.settings import get_config
from marketplace.domain.entities.user import User
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass
class AuthUser:
    id: UserId
    email: UserEmail


class InvalidSessionError(Exception):
    """Token missing, expired, tampered with or lacking claims."""


def issue_session_token(user: User, now: Optional[datetime] = None) -> str:
    settings = get_config()
    now = now or datetime.now(timezone.utc)
    claims = {
        "sub": user.id.value,
        "email": user.email.value,
        "iat": now,
        "exp": now + timedelta(seconds=settings.SESSION_TTL_SECONDS),
        "iss": settings.SESSION_ISSUER,
        "aud": settings.SESSION_AUDIENCE,
    }
    return jwt.encode(claims, settings.SESSION_SECRET, algorithm=ALGORITHM)


def decode_session_token(token: str) -> AuthUser:
    """
    Validate a session token and return its user.

    Raises:
        InvalidSessionError if the token is invalid, expired, or missing claims
    """
    settings = get_config()
    try:
        claims = jwt.decode(
            token,
            settings.SESSION_SECRET,
            algorithms=[ALGORITHM],
            audience=settings.SESSION_AUDIENCE,
            issuer=settings.SESSION_ISSUER,
            options={"require": ["sub", "exp", "iat", "aud", "iss"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidSessionError("Session has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidSessionError(f"Invalid session: {str(e)}") from e

    try:
        return AuthUser(id=UserId(claims["sub"]), email=UserEmail(claims.get("email")))
    except ValueError as e:
        raise InvalidSessionError("Invalid session claims") from e


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_config()
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_config()
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and validate the session user from the Bearer header or the cookie.

    Raises:
        HTTPException 401 if there is no session or it is invalid
    """
    token = credentials.credentials if credentials else None
    token = token or request.cookies.get(get_config().SESSION_COOKIE_NAME)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Login required",
        )

    try:
        return decode_session_token(token)
    except InvalidSessionError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e


def authenticate_websocket(websocket: WebSocket) -> Optional[UserId]:
    """
    Session gate for the realtime channel.

    Looks for the session in the cookie, then the Authorization header, then
    a `token` query parameter (browsers cannot set headers on upgrades).
    Returns None when no valid session is present; the caller must close
    the connection before accepting it.
    """
    token = websocket.cookies.get(get_config().SESSION_COOKIE_NAME)
    if not token:
        header = websocket.headers.get("authorization", "")
        scheme, _, value = header.partition(" ")
        if scheme.lower() == "bearer" and value:
            token = value.strip()
    token = token or websocket.query_params.get("token")
    if not token:
        return None

    try:
        return decode_session_token(token).id
    except InvalidSessionError as e:
        logger.info(f"Rejected realtime connection: {e}")
        return None
