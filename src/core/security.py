"""
Core security utilities for authentication and password handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
import secrets
import string
import logging

from ..config import settings
from ..auth.exceptions import TokenExpiredException, InvalidTokenException

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt with a fresh salt.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(
    data: Dict[str, Any],
    secret: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        data: Claims to encode in the token
        secret: Signing secret (defaults to the configured JWT secret)
        expires_delta: Token lifetime (defaults to access_token_expire_minutes)
        issued_at: Issue instant, defaults to now

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()

    now = issued_at or datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    to_encode.update({"iat": now, "exp": expire})

    return jwt.encode(to_encode, secret or settings.jwt_secret, algorithm=settings.algorithm)

def decode_access_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token string
        secret: Verification secret (defaults to the configured JWT secret)

    Returns:
        Dict containing the token claims

    Raises:
        TokenExpiredException: If the token is past its expiry
        InvalidTokenException: If the signature or format is invalid
    """
    try:
        return jwt.decode(token, secret or settings.jwt_secret, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        raise TokenExpiredException()
    except JWTError as e:
        logger.debug(f"Token rejected: {str(e)}")
        raise InvalidTokenException()

def generate_temporary_password(length: int = 10) -> str:
    """
    Generate a random, human-typable password containing at least one digit.

    Args:
        length: Password length (default: 10)

    Returns:
        str: Temporary password
    """
    while True:
        password = ''.join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
        if any(c.isdigit() for c in password):
            return password

def generate_reset_token() -> str:
    """
    Generate a password reset token.

    Returns:
        str: 40 hexadecimal characters
    """
    return secrets.token_hex(20)

def is_token_expired(expiry_time: datetime) -> bool:
    """
    Check if a token has expired.

    Args:
        expiry_time: Token expiration time (naive values are taken as UTC)

    Returns:
        bool: True if token has expired
    """
    if expiry_time.tzinfo is None:
        expiry_time = expiry_time.replace(tzinfo=timezone.utc)
    return datetime.now(timezone.utc) > expiry_time

def get_token_expiry_time(minutes: int = 60) -> datetime:
    """
    Get token expiration time.

    Args:
        minutes: Minutes until expiration

    Returns:
        datetime: Expiration time
    """
    return datetime.now(timezone.utc) + timedelta(minutes=minutes)
