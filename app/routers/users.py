# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# POST /users     register
# GET  /users/me  current user
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status

from app.auth import get_current_session
from app.dependencies import ServicesDep
from core.models.session import AuthSession
from core.models.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(request: UserCreate, services: ServicesDep) -> UserResponse:
    """
    Register a new user.

    Raises:
        400: Missing email, missing password, or email already registered
    """
    user = services.users.register(request.email, request.password)
    return UserResponse.from_record(user)


@router.get("/me", response_model=UserResponse)
def get_me(session: AuthSession = Depends(get_current_session)) -> UserResponse:
    """
    Get the user behind the X-Token.

    Raises:
        401: If not authenticated
    """
    return UserResponse.from_record(session.user)
