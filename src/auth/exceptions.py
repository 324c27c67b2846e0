"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status

class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class InvalidCredentialsException(AuthException):
    """Exception raised when credentials are invalid."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class UserAlreadyExistsException(AuthException):
    """Exception raised when the username or email is already registered."""
    def __init__(self, detail: str = "Username or email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class TokenExpiredException(AuthException):
    """Exception raised when token has expired."""
    def __init__(self, detail: str = "Token has expired"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class InvalidTokenException(AuthException):
    """Exception raised when token is invalid."""
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class PasswordMismatchException(AuthException):
    """Exception raised when a password and its confirmation differ."""
    def __init__(self, detail: str = "Passwords do not match"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidResetTokenException(AuthException):
    """Exception raised when a reset token is unknown or expired."""
    def __init__(self, detail: str = "Invalid or expired reset token"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
