"""
Authentication routes: registration, login, password reset and logout.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..core.mail import MailDispatcher, get_mailer
from ..database import get_db
from .dependencies import CurrentUser, get_optional_current_user
from .schemas import (
    RegisterRequest, RegisterResponse, LoginRequest, LoginResponse,
    PasswordResetRequest, PasswordResetConfirm, MessageResponse,
)
from .service import register_user, login_user, request_password_reset, confirm_password_reset

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(tags=["Authentication"])

@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user and return an access token",
)
async def register_route(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    mailer: MailDispatcher = Depends(get_mailer),
):
    """
    Registration endpoint.

    Creates the user and its Patient or Professional record. Patients receive
    a welcome email with their username and temporary password.

    Returns:
        RegisterResponse with the created user and an access token

    Raises:
        HTTPException: 400 on password mismatch or duplicate username/email, 500 on storage failure
    """
    return await register_user(db=db, mailer=mailer, data=data)

@router.post("/users/login", response_model=LoginResponse, summary="User Login")
def login_route(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    User login endpoint.

    Raises:
        HTTPException: 404 if the username is unknown, 401 if the password is wrong
    """
    return login_user(db=db, user_name=login_data.user_name, password=login_data.password)

@router.post(
    "/users/reset-password-request",
    response_model=MessageResponse,
    summary="Request Password Reset",
)
@router.post("/users/reset-password", response_model=MessageResponse, include_in_schema=False)
async def reset_password_request_route(
    reset_data: PasswordResetRequest,
    request: Request,
    db: Session = Depends(get_db),
    mailer: MailDispatcher = Depends(get_mailer),
):
    """
    Send password reset instructions to the account email.

    The link points at the frontend that made the request when it is a
    known origin, otherwise at the production frontend.
    """
    return await request_password_reset(
        db=db,
        mailer=mailer,
        email=reset_data.email,
        origin=request.headers.get("Origin"),
    )

@router.post(
    "/users/reset-password-confirm",
    response_model=MessageResponse,
    summary="Reset Password with Token",
)
def reset_password_confirm_route(
    confirm_data: PasswordResetConfirm,
    db: Session = Depends(get_db),
):
    """
    Reset password endpoint.

    Raises:
        HTTPException: 400 if the passwords differ or the token is unknown or expired
    """
    return confirm_password_reset(
        db=db,
        reset_token=confirm_data.reset_token,
        new_password=confirm_data.new_password,
        confirm_password=confirm_data.confirm_password,
    )

@router.get("/logout", summary="User Logout")
async def logout_route(current_user: Optional[CurrentUser] = Depends(get_optional_current_user)):
    """
    Logout endpoint.

    Tokens are stateless, so the client just discards its token; this
    redirects back to the root.
    """
    if current_user:
        logger.info(f"User {current_user.user_id} logged out")
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
