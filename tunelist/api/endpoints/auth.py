# ============================================================================
# FILE: tunelist/api/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from tunelist.api.dependencies import get_user_service
from tunelist.schemas.user import UserCreate, UserLogin
from tunelist.services.user_service import UserService
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    users: UserService = Depends(get_user_service)
):
    """
    Register a new user account
    Returns the user without password data
    """
    user = users.create_user(
        user_data.username,
        user_data.password,
        user_data.first_name,
        user_data.image_url,
    )
    return {
        "success": True,
        "message": "User registered successfully",
        "user": user.to_public()
    }


@router.post("/login")
def login(
    credentials: UserLogin,
    users: UserService = Depends(get_user_service)
):
    """
    Login with username (case-insensitive) and password
    """
    user = users.authenticate_user(credentials.username, credentials.password)
    logger.info(f"User logged in: {user.id}")
    return {
        "success": True,
        "message": "Login successful",
        "user": user.to_public()
    }


@router.post("/logout")
def logout():
    """Acknowledge logout; the client owns the session state"""
    return {"success": True, "message": "Logout successful"}


@router.get("/check-username/{username}")
def check_username(
    username: str,
    users: UserService = Depends(get_user_service)
):
    return {"success": True, "exists": users.username_exists(username)}
