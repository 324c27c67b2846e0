"""
User Schemas - Pydantic models for user data validation and serialization.

JSON bodies use the camelCase keys of the public API (fullName, userName,
dataNasc, ...); Python code uses the snake_case attribute names.
"""
from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from .models import UserRole

class CamelModel(BaseModel):
    """Base schema accepting and emitting camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class UserProfile(CamelModel):
    """
    Profile fields shared by registration and responses

    Fields:
    - full_name: User's full name
    - cpf: National identity number
    - date_of_birth: Date of birth ("dataNasc")
    - gender, phone, email: Personal and contact data
    - street, number, complement, district, city, state, cep: Postal address
    """
    full_name: str
    cpf: Optional[str] = None
    date_of_birth: Optional[date] = Field(None, alias="dataNasc")
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: EmailStr
    street: Optional[str] = None
    number: Optional[int] = None
    complement: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    cep: Optional[str] = None

class RegisterRequest(UserProfile):
    """
    Registration Schema - Used by POST /register

    Extends UserProfile with:
    - role: Paciente or Profissional
    - user_name: Unique login name
    - password / confirm_password: Optional chosen password; a temporary
      password is generated when omitted
    """
    role: UserRole
    user_name: str = Field(..., min_length=1)
    password: Optional[str] = None
    confirm_password: Optional[str] = None

class LoginRequest(CamelModel):
    """
    Login Schema - Used for authentication

    Fields:
    - user_name: Login name
    - password: Plain text password
    """
    user_name: str
    password: str

class PasswordResetRequest(CamelModel):
    """
    Phase A of the password reset: where to send the link.

    Any string is accepted; an address with no account is reported as not found.
    """
    email: str

class PasswordResetConfirm(CamelModel):
    """
    Phase B of the password reset

    Fields:
    - reset_token: Token received via email
    - new_password: New password
    - confirm_password: Must equal new_password
    """
    reset_token: str
    new_password: str = Field(..., min_length=1)
    confirm_password: str

class RoleRecordResponse(CamelModel):
    """Patient or Professional record attached to a user."""
    id: int
    user_id: int

class UserResponse(UserProfile):
    """
    User Response Schema - Used when returning user data

    Never carries the password hash or the reset token.
    """
    id: int
    email: str
    role: UserRole
    user_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class UserDetailResponse(UserResponse):
    """User with its role record, returned by GET /users/{id}."""
    patient: Optional[RoleRecordResponse] = None
    professional: Optional[RoleRecordResponse] = None

class LoginData(CamelModel):
    token: str
    name: str
    role: UserRole
    user_id: int

class LoginResponse(CamelModel):
    """
    Login Response Schema - Returned after successful authentication
    """
    message: str
    data: LoginData

class RegisterResponse(CamelModel):
    message: str
    user: UserResponse
    token: str

class MessageResponse(CamelModel):
    message: str
