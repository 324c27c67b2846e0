"""
User update schema.

Only the fields named here can be changed through PUT /users/{id}; unknown
keys are rejected. The username and role are fixed at registration.
"""
from typing import Optional
from datetime import date
from pydantic import EmailStr, Field, field_validator
from ..auth.schemas import CamelModel, UserResponse, UserDetailResponse

class UserUpdate(CamelModel):
    """
    User Update Schema - Every field is optional; only the fields sent are applied

    A new password is hashed before storage.
    """
    full_name: Optional[str] = None
    cpf: Optional[str] = None
    date_of_birth: Optional[date] = Field(None, alias="dataNasc")
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    street: Optional[str] = None
    number: Optional[int] = None
    complement: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    cep: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)

    class Config:
        extra = "forbid"

    @field_validator("full_name", "email", "password")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

class UserListResponse(CamelModel):
    users: list[UserResponse]

class UserEnvelope(CamelModel):
    user: UserDetailResponse

class UserUpdateResponse(CamelModel):
    message: str
    user: UserResponse
