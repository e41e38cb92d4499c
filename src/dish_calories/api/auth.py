"""Registration and login endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, HTTPException, Request, status

from dish_calories.api.models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserPayload,
)
from dish_calories.domain.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from dish_calories.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from dish_calories.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


def _error(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code, detail={"error": error, "message": message}
    )


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserRecord:
    """Resolve the bearer token into the authenticated user."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise _error(
            status.HTTP_401_UNAUTHORIZED,
            "Access denied",
            "No token provided",
        )
    container: AppContainer = request.app.state.container
    try:
        return container.user_service.authenticate(token.strip())
    except InvalidTokenError as exc:
        raise _error(status.HTTP_401_UNAUTHORIZED, "Access denied", str(exc)) from exc


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
async def register(payload: RegisterRequest, request: Request) -> AuthResponse:
    """Register a new user."""
    container: AppContainer = request.app.state.container
    try:
        session = container.user_service.register(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            password=payload.password,
        )
    except EmailAlreadyRegisteredError as exc:
        raise _error(
            status.HTTP_400_BAD_REQUEST, "Registration failed", str(exc)
        ) from exc
    return AuthResponse(
        message="User registered successfully",
        user=UserPayload.from_record(session.user),
        token=session.token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, request: Request) -> AuthResponse:
    """Login a user."""
    container: AppContainer = request.app.state.container
    try:
        session = container.user_service.login(payload.email, payload.password)
    except InvalidCredentialsError as exc:
        raise _error(
            status.HTTP_401_UNAUTHORIZED,
            "Authentication failed",
            "Invalid email or password",
        ) from exc
    return AuthResponse(
        message="Login successful",
        user=UserPayload.from_record(session.user),
        token=session.token,
    )
