"""
Professional Model - Role record for users registered as Profissional.
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base

class Professional(Base):
    """
    Professional Model - One-to-one extension of User

    Fields:
    - id: Primary key for professional profile
    - user_id: Foreign key to User model
    - created_at: When the professional profile was created
    """
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="professional")

    def __repr__(self):
        return f"<Professional(id={self.id}, user_id={self.user_id})>"
