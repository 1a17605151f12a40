"""Auth endpoints: register, login, refresh, logout and password reset."""

import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status

from traintrack.api.deps import AppSettings, DbSession, Principal, get_bearer_token
from traintrack.api.responses import message_response
from traintrack.schemas.auth import (
    CurrentUser,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenResponse,
)
from traintrack.schemas.common import ERROR_RESPONSES, MessageResponse
from traintrack.schemas.user import UserRead
from traintrack.services import auth as auth_service
from traintrack.services.mail import send_password_reset_mail, send_registration_mail
from traintrack.services.tokens import IssuedTokens, issue_session, revoke_session, rotate_session

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


def _token_response(message: str, tokens: IssuedTokens) -> TokenResponse:
    return TokenResponse(
        message=message,
        access_token=tokens.access_token,
        access_token_expires=tokens.access_token_expires,
        refresh_token=tokens.refresh_token,
        refresh_token_expires=tokens.refresh_token_expires,
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: DbSession,
    settings: AppSettings,
    background_tasks: BackgroundTasks,
) -> RegisterResponse:
    """
    Create an account with role 'user' and log it in.

    Returns the user (without password) and a token pair. A welcome mail is
    sent after the response.
    """
    user, tokens = auth_service.register_user(db, body, settings)
    background_tasks.add_task(send_registration_mail, user, settings)
    return RegisterResponse(
        user=UserRead.model_validate(user),
        **_token_response("User registered successfully", tokens).model_dump(),
    )


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: DbSession, settings: AppSettings) -> TokenResponse:
    """
    Authenticate with email and password; starts a new session.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    user = auth_service.authenticate(db, body.email, body.password)
    tokens = issue_session(db, user, settings)
    logger.info("User logged in: user_id=%s", user.id)
    return _token_response("User logged in successfully", tokens)


@router.post("/refresh", response_model=TokenResponse)
def refresh(body: RefreshRequest, db: DbSession, settings: AppSettings) -> TokenResponse:
    """Exchange the current refresh token for a new pair; the old pair stops working."""
    tokens = rotate_session(db, body.refresh_token, settings)
    return _token_response("Tokens refreshed successfully", tokens)


@router.get("/logout", response_model=MessageResponse)
def logout(
    token: Annotated[str, Depends(get_bearer_token)],
    db: DbSession,
    settings: AppSettings,
) -> MessageResponse:
    """Revoke the session of the presented access token."""
    revoke_session(db, token, settings)
    return message_response("User logged out successfully")


@router.post("/forgotPassword", response_model=MessageResponse)
def forgot_password(body: ForgotPasswordRequest, db: DbSession, settings: AppSettings) -> MessageResponse:
    """Mail a single-use password reset token to the account's address."""
    user, token = auth_service.request_password_reset(db, body.email, settings)
    send_password_reset_mail(user, token, settings)
    return message_response("Password reset mail sent")


@router.post("/resetPassword", response_model=MessageResponse)
def reset_password(body: ResetPasswordRequest, db: DbSession, settings: AppSettings) -> MessageResponse:
    """Set a new password with a reset token. Logs out every session of the account."""
    auth_service.reset_password(db, body.token, body.password, settings)
    return message_response("Password reset successfully")


@router.get("/me", response_model=CurrentUser)
def me(current_user: Principal) -> CurrentUser:
    """The authenticated principal as seen by the permission checks."""
    return current_user
