"""Admin user management endpoints"""
from fastapi import APIRouter, Depends, status

from userauth.core.dependencies import get_auth_flow
from userauth.middleware.auth import require_admin
from userauth.schemas.auth_schemas import UserCreate, MessageResponse, TokenClaims
from userauth.services.auth_service import AuthFlow

router = APIRouter()


@router.post("/admin/add-user", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_user(
    user_data: UserCreate,
    current_user: TokenClaims = Depends(require_admin),
    flow: AuthFlow = Depends(get_auth_flow)
):
    """
    ## Create a USER or ADMIN account

    **Role:** ADMIN only.

    **Auth:** `Authorization: Bearer <token>` header required.

    Bypasses the OTP email step used by **POST /sign-up**.

    - HTTP 409 → "Username already exists".
    - HTTP 403 → caller is not an admin.
    """
    message = flow.admin_add_user(
        username=user_data.username,
        password=user_data.password,
        mobile=user_data.mobile,
        email=user_data.email,
        role=user_data.role,
        added_by=current_user.username,
    )
    return MessageResponse(message=message)


@router.delete("/delete-user/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: TokenClaims = Depends(require_admin),
    flow: AuthFlow = Depends(get_auth_flow)
):
    """
    ## Delete a user account (hard delete)

    **Role:** ADMIN only.

    Tokens already issued to the deleted user stay valid until they expire.

    - HTTP 404 → "User not found".
    """
    return MessageResponse(message=flow.delete_user(user_id, deleted_by=current_user.username))
