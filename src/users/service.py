"""
User Service - Read, update and delete operations on user accounts.
"""
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload
import logging

from ..auth.exceptions import UserAlreadyExistsException
from ..auth.models import User
from ..core.security import hash_password
from ..exceptions import NotFoundException, DependencyFailureException
from .schemas import UserUpdate

# Set up logging
logger = logging.getLogger(__name__)

def get_users(db: Session) -> List[User]:
    """Return every user ordered by id."""
    try:
        return db.query(User).order_by(User.id).all()
    except SQLAlchemyError as e:
        raise DependencyFailureException("Error listing users", cause=e)

def get_user(db: Session, user_id: int) -> User:
    """
    Get a user by ID with its role record loaded.

    Raises:
        NotFoundException: If the user does not exist
    """
    user = (
        db.query(User)
        .options(joinedload(User.patient), joinedload(User.professional))
        .filter(User.id == user_id)
        .first()
    )
    if not user:
        raise NotFoundException()
    return user

def update_user(db: Session, user_id: int, update_data: UserUpdate) -> User:
    """
    Apply the fields present in update_data to a user.

    Args:
        db: Database session
        user_id: ID of the user to update
        update_data: Allow-listed fields; only explicitly sent fields are applied

    Returns:
        User: Updated user

    Raises:
        NotFoundException: If the user does not exist
        UserAlreadyExistsException: If the new email belongs to another user
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundException()

    changes = update_data.model_dump(exclude_unset=True)

    if "email" in changes and changes["email"] != user.email:
        taken = db.query(User).filter(User.email == changes["email"], User.id != user.id).first()
        if taken:
            raise UserAlreadyExistsException("Email already registered")

    password = changes.pop("password", None)
    if password:
        user.password_hash = hash_password(password)

    for field, value in changes.items():
        setattr(user, field, value)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise DependencyFailureException("Error updating user", cause=e)
    db.refresh(user)

    logger.info(f"User {user.id} updated fields: {sorted(changes) + (['password'] if password else [])}")
    return user

def delete_user(db: Session, user_id: int) -> None:
    """
    Delete a user; the Patient or Professional record goes with it.

    Raises:
        NotFoundException: If the user does not exist
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundException()

    try:
        db.delete(user)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise DependencyFailureException("Error deleting user", cause=e)
    logger.info(f"User {user_id} deleted")
