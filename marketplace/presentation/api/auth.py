"""
Auth API Router - Accounts and sessions.

Endpoints:
- POST /api/signup  {name, email, password} → 201, logs the new user in
- POST /api/login   {email, password}
- POST /api/logout  (authenticated) → clears the session cookie
- GET  /api/me      (authenticated)

The session token is set as an httpOnly cookie and also returned in the body
for clients that send it as a Bearer header.
"""

from logging import getLogger

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from marketplace.application.commands.users import (
    LogInCommand,
    LogInHandler,
    SignUpCommand,
    SignUpHandler,
)
from marketplace.application.dto.user import UserProfileDTO, UserSummaryDTO
from marketplace.application.queries.users import GetUserHandler, GetUserQuery
from marketplace.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
)
from marketplace.presentation.dependencies.auth import (
    AuthUser,
    clear_session_cookie,
    get_current_user,
    issue_session_token,
    set_session_cookie,
)

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class SignUpRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class LogInRequest(BaseModel):
    email: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    success: bool = True
    message: str
    user: UserSummaryDTO
    token: str


class MeResponse(BaseModel):
    success: bool = True
    user: UserProfileDTO


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ==================== ROUTER ====================

router = APIRouter(prefix="/api", tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post(
    "/signup",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def sign_up(
    request: SignUpRequest,
    response: Response,
    handler: FromDishka[SignUpHandler],
):
    try:
        user = await handler.execute(
            SignUpCommand(
                name=request.name, email=request.email, password=request.password
            )
        )
    except DomainValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except ConflictError as e:
        # Reported as a plain bad request, like any other invalid signup
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already in use"
        ) from e

    token = issue_session_token(user)
    set_session_cookie(response, token)
    return SessionResponse(
        message="Signed up successfully",
        user=UserSummaryDTO.from_entity(user),
        token=token,
    )


@router.post("/login", response_model=SessionResponse, status_code=status.HTTP_200_OK)
@inject
async def log_in(
    request: LogInRequest,
    response: Response,
    handler: FromDishka[LogInHandler],
):
    try:
        user = await handler.execute(
            LogInCommand(email=request.email, password=request.password)
        )
    except DomainValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e

    token = issue_session_token(user)
    set_session_cookie(response, token)
    logger.info(f"User {user.id.value} logged in")
    return SessionResponse(
        message="Logged in successfully",
        user=UserSummaryDTO.from_entity(user),
        token=token,
    )


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def log_out(
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
):
    clear_session_cookie(response)
    logger.info(f"User {current_user.id.value} logged out")
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse, status_code=status.HTTP_200_OK)
@inject
async def me(
    handler: FromDishka[GetUserHandler],
    current_user: AuthUser = Depends(get_current_user),
):
    try:
        user = await handler.execute(GetUserQuery(user_id=current_user.id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return MeResponse(user=UserProfileDTO.from_entity(user))
