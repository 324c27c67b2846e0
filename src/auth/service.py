"""
Authentication service layer for business logic.
"""
import logging
from typing import Dict, Any, Optional, Tuple
from urllib.parse import urlparse

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..core.mail import MailDispatcher, MailDeliveryError
from ..core.security import (
    hash_password,
    verify_password,
    create_access_token,
    generate_temporary_password,
    generate_reset_token,
    is_token_expired,
    get_token_expiry_time,
)
from ..exceptions import NotFoundException, DependencyFailureException
from ..patients.models import Patient
from ..professionals.models import Professional
from .exceptions import (
    InvalidCredentialsException,
    UserAlreadyExistsException,
    PasswordMismatchException,
    InvalidResetTokenException,
)
from .models import User, UserRole
from .schemas import RegisterRequest, UserResponse, LoginData

# Set up logging
logger = logging.getLogger(__name__)

def create_role_record(db: Session, user: User):
    """
    Add the Patient or Professional row matching the user's role.

    Args:
        db: Database session (caller commits)
        user: Flushed user with a primary key

    Returns:
        The new Patient or Professional
    """
    if user.role == UserRole.PATIENT:
        record = Patient(user_id=user.id)
    else:
        record = Professional(user_id=user.id)
    db.add(record)
    db.flush()
    return record

def create_account(db: Session, data: RegisterRequest) -> Tuple[User, Optional[str]]:
    """
    Store a new user and its role record in one transaction.

    Blocking (bcrypt and database); callers on the event loop run it in the threadpool.

    Args:
        db: Database session
        data: Validated registration payload

    Returns:
        The stored user and the generated temporary password, or None if the
        user chose a password

    Raises:
        PasswordMismatchException: If password and confirmation differ
        UserAlreadyExistsException: If username or email is taken
        DependencyFailureException: If the database write fails
    """
    if (data.password or data.confirm_password) and data.password != data.confirm_password:
        raise PasswordMismatchException()

    existing_user = db.query(User).filter(
        or_(User.user_name == data.user_name, User.email == data.email)
    ).first()
    if existing_user:
        logger.warning(f"Registration failed: {data.user_name} / {data.email} already registered")
        raise UserAlreadyExistsException()

    temp_password = None if data.password else generate_temporary_password()
    profile = data.model_dump(exclude={"password", "confirm_password"})

    user = User(**profile, password_hash=hash_password(data.password or temp_password))

    try:
        db.add(user)
        db.flush()
        create_role_record(db, user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Registration rolled back for {data.user_name}: {str(e)}")
        raise DependencyFailureException("Error creating user", cause=e)
    db.refresh(user)
    logger.info(f"User account created: {user.id} ({user.role.value})")
    return user, temp_password

async def register_user(
    db: Session,
    mailer: MailDispatcher,
    data: RegisterRequest,
) -> Dict[str, Any]:
    """
    Register a new user together with its role record.

    The welcome email is sent after commit and its failure does not undo
    the registration.

    Args:
        db: Database session
        mailer: Mail dispatcher for the welcome email
        data: Validated registration payload

    Returns:
        Dict with the created user and an access token

    Raises:
        PasswordMismatchException: If password and confirmation differ
        UserAlreadyExistsException: If username or email is taken
        DependencyFailureException: If the database write fails
    """
    logger.info(f"Registration attempt for username: {data.user_name} ({data.role.value})")

    user, temp_password = await run_in_threadpool(create_account, db, data)

    if user.role == UserRole.PATIENT:
        try:
            await mailer.send_welcome(user.full_name, user.email, user.user_name, temp_password)
        except MailDeliveryError as e:
            logger.error(f"Welcome email to {user.email} failed, account kept: {str(e)}")

    token = create_access_token({
        "user_id": user.id,
        "email": user.email,
        "full_name": user.full_name,
        "role": user.role.value,
    })

    return {
        "message": "Usuário criado com sucesso!",
        "user": UserResponse.model_validate(user),
        "token": token,
    }

def login_user(db: Session, user_name: str, password: str) -> Dict[str, Any]:
    """
    Authenticate a user and generate access token.

    Args:
        db: Database session
        user_name: Login name (exact match)
        password: User's password

    Returns:
        Dict with access token and user information

    Raises:
        NotFoundException: If no user has this username
        InvalidCredentialsException: If the password is wrong
    """
    user = db.query(User).filter(User.user_name == user_name).first()
    if not user:
        logger.warning(f"Login failed: unknown username {user_name}")
        raise NotFoundException()

    if not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: invalid credentials for {user_name}")
        raise InvalidCredentialsException()

    token = create_access_token({
        "user_id": user.id,
        "full_name": user.full_name,
        "role": user.role.value,
    })
    logger.info(f"Login successful: User {user.id} ({user_name})")

    return {
        "message": "User logged in successfully!",
        "data": LoginData(token=token, name=user.full_name, role=user.role, user_id=user.id),
    }

def resolve_frontend_url(origin: Optional[str]) -> str:
    """
    Pick the frontend that should receive the reset link.

    The request origin is matched by hostname against the known frontends;
    anything else falls back to the production frontend.

    Args:
        origin: Value of the request's Origin header

    Returns:
        str: Frontend base URL without trailing slash
    """
    if origin:
        hostname = urlparse(origin).hostname
        for known in settings.frontend_origins:
            if hostname and urlparse(known).hostname == hostname:
                return known.rstrip("/")
    return settings.frontend_url.rstrip("/")

def store_reset_token(db: Session, email: str) -> str:
    """
    Issue a reset token for the account with this email and store it with its expiry.

    Raises:
        NotFoundException: If no user has this email
        DependencyFailureException: If the token cannot be stored
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        logger.warning(f"Password reset failed: Email {email} not found")
        raise NotFoundException()

    reset_token = generate_reset_token()
    user.reset_password_token = reset_token
    user.reset_password_expires = get_token_expiry_time(settings.reset_token_expire_minutes)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise DependencyFailureException("Error requesting password reset", cause=e)
    return reset_token

async def request_password_reset(
    db: Session,
    mailer: MailDispatcher,
    email: str,
    origin: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Phase A: store a reset token and email the reset link.

    Args:
        db: Database session
        mailer: Mail dispatcher
        email: Account email
        origin: Origin header of the request, used to build the link

    Returns:
        Dict with a confirmation message

    Raises:
        NotFoundException: If no user has this email
        DependencyFailureException: If the token cannot be stored or the email sent
    """
    reset_token = await run_in_threadpool(store_reset_token, db, email)

    reset_link = f"{resolve_frontend_url(origin)}/reset-password-confirm/{reset_token}"
    try:
        await mailer.send_reset_instructions(email, reset_link)
    except MailDeliveryError as e:
        raise DependencyFailureException("Error requesting password reset", cause=e)

    logger.info(f"Password reset email sent to {email}")
    return {"message": "Password reset instructions sent to email"}

def confirm_password_reset(
    db: Session,
    reset_token: str,
    new_password: str,
    confirm_password: str,
) -> Dict[str, Any]:
    """
    Phase B: replace the password using a valid reset token.

    Args:
        db: Database session
        reset_token: Token received via email
        new_password: New password
        confirm_password: Must equal new_password

    Returns:
        Dict with password reset success message

    Raises:
        PasswordMismatchException: If the passwords differ
        InvalidResetTokenException: If the token is unknown or expired
        DependencyFailureException: If the database write fails
    """
    if new_password != confirm_password:
        raise PasswordMismatchException()

    user = db.query(User).filter(User.reset_password_token == reset_token).first()
    if not user:
        logger.warning("Password reset failed: unknown token")
        raise InvalidResetTokenException()

    if not user.reset_password_expires or is_token_expired(user.reset_password_expires):
        logger.warning(f"Password reset failed: expired token for user {user.id}")
        user.reset_password_token = None
        user.reset_password_expires = None
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise DependencyFailureException("Error resetting password", cause=e)
        raise InvalidResetTokenException()

    user.password_hash = hash_password(new_password)
    user.reset_password_token = None
    user.reset_password_expires = None
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise DependencyFailureException("Error resetting password", cause=e)

    logger.info(f"Password reset successful for user {user.id}")
    return {"message": "Password reset successfully"}
