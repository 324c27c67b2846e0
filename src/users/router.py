"""
User Router - API endpoints for listing, reading, updating and deleting users.

Registration, login and password reset live in the auth router.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..auth.dependencies import CurrentUser, get_current_user
from ..auth.schemas import MessageResponse
from ..database import get_db
from ..exceptions import NotFoundException
from .schemas import UserListResponse, UserEnvelope, UserUpdate, UserUpdateResponse
from .service import get_users, get_user, update_user, delete_user

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("", response_model=UserListResponse)
def list_users(db: Session = Depends(get_db)):
    """
    Get every registered user.
    """
    return {"users": get_users(db)}

@router.get("/me", response_model=UserEnvelope)
def get_my_profile(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get the profile of the user owning the bearer token.
    """
    return {"user": get_user(db, current_user.user_id)}

@router.get("/{user_id}", response_model=UserEnvelope)
def get_user_by_id(user_id: int, db: Session = Depends(get_db)):
    """
    Get a user by ID, including its Patient or Professional record.
    """
    return {"user": get_user(db, user_id)}

@router.put("/{user_id}", response_model=UserUpdateResponse)
def update_user_route(user_id: int, update_data: UserUpdate, db: Session = Depends(get_db)):
    """
    Update a user's profile.

    Only allow-listed fields are accepted; a password is hashed before storage.
    """
    user = update_user(db, user_id, update_data)
    return {"message": "User updated successfully!", "user": user}

@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user_route(user_id: int, db: Session = Depends(get_db)):
    """
    Delete a user and its role record.

    A missing user is reported as 400, as the frontend expects.
    """
    try:
        delete_user(db, user_id)
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.detail)
    return {"message": "User deleted successfully!"}
