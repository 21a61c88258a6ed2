"""User endpoints: current token claims and partial updates."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.v1.auth import get_auth_service, get_current_user
from app.schemas.auth import CurrentUser, UserResponse, UserUpdateRequest
from app.services.auth import AuthService

router = APIRouter()


@router.get("/me", response_model=CurrentUser)
def read_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    return current_user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UserUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """
    Update the fields present in the body.
    Requires canManageUser, or canManageMyAccount when updating yourself.
    """
    allowed = "canManageUser" in current_user.permissions or (
        user_id == current_user.user_id and "canManageMyAccount" in current_user.permissions
    )
    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Permission required: canManageUser",
        )
    fields = body.model_dump(exclude_unset=True)
    if "role_id" in fields and "canManageUser" not in current_user.permissions:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Permission required: canManageUser",
        )
    user = service.update_user(user_id, fields)
    return UserResponse(message="User updated successfully", data=user)
