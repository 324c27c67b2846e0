"""
User Model - Stores identity, contact and credential information for every account.

Role-specific data lives in the Patient and Professional models, one-to-one with User.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles.

    Roles:
    - PATIENT: Person being assessed; receives a welcome email with a temporary password
    - PROFESSIONAL: Health professional performing assessments
    """
    PATIENT = "Paciente"
    PROFESSIONAL = "Profissional"

class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - full_name: User's complete name
    - cpf: National identity number
    - date_of_birth: Date of birth
    - gender, phone, email: Personal and contact data (email is unique)
    - street, number, complement, district, city, state, cep: Postal address
    - role: Paciente or Profissional
    - user_name: Unique login name
    - password_hash: Securely hashed password (never store raw passwords)
    - reset_password_token: Pending password reset token, if any
    - reset_password_expires: When the pending reset token stops being valid
    - created_at / updated_at: Audit timestamps
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    cpf = Column(String, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, unique=True, index=True, nullable=False)
    street = Column(String, nullable=True)
    number = Column(Integer, nullable=True)
    complement = Column(String, nullable=True)
    district = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    cep = Column(String, nullable=True)
    role = Column(Enum(UserRole, values_callable=lambda roles: [r.value for r in roles]), nullable=False)
    user_name = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    reset_password_token = Column(String, nullable=True, index=True)
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient = relationship("Patient", back_populates="user", uselist=False, cascade="all, delete-orphan")
    professional = relationship("Professional", back_populates="user", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, user_name='{self.user_name}', role='{self.role}')>"
