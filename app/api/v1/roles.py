"""Role creation endpoint (requires canManageRole)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.auth import get_auth_service, require_permission
from app.schemas.auth import CurrentUser, RoleCreateRequest, RoleResponse
from app.services.auth import AuthService

router = APIRouter()


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
def create_role(
    body: RoleCreateRequest,
    _user: Annotated[CurrentUser, Depends(require_permission("canManageRole"))],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> RoleResponse:
    flags = body.model_dump(exclude={"name"})
    role = service.create_role(body.name, **flags)
    return RoleResponse(message="Role created successfully", data=role)
