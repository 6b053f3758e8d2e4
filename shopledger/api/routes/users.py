"""Authentication and user management endpoints."""

from fastapi import APIRouter, Depends, status

from shopledger.api.dependencies import (
    get_accounts,
    get_change_password_use_case,
    get_login_use_case,
    get_setup_admin_use_case,
)
from shopledger.application.dto.requests import (
    ChangePasswordRequest,
    CreateUserRequest,
    LoginRequest,
    SetupAdminRequest,
    UpdateRoleRequest,
)
from shopledger.application.dto.responses import (
    ErrorResponse,
    SetupStatusResponse,
    UserResponse,
)
from shopledger.application.use_cases import (
    ChangePasswordUseCase,
    LoginUserUseCase,
    SetupAdminUseCase,
)
from shopledger.application.use_cases.setup_admin import user_to_response
from shopledger.core.entities.account import User
from shopledger.core.exceptions import UserNotFoundError
from shopledger.infrastructure.storage.sqlite import SQLiteUserStore

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/auth/setup", response_model=SetupStatusResponse)
async def check_setup_required(
    use_case: SetupAdminUseCase = Depends(get_setup_admin_use_case),
) -> SetupStatusResponse:
    """Whether the first administrator still has to be created."""
    return SetupStatusResponse(setup_required=await use_case.is_setup_required())


@router.post(
    "/auth/setup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def setup_admin(
    request: SetupAdminRequest,
    use_case: SetupAdminUseCase = Depends(get_setup_admin_use_case),
) -> UserResponse:
    """Create the first super admin."""
    user = await use_case.execute(request)
    return use_case.to_response(user)


@router.post(
    "/auth/login",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: LoginUserUseCase = Depends(get_login_use_case),
) -> UserResponse:
    """Authenticate and return the user."""
    user = await use_case.execute(request)
    return use_case.to_response(user)


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    store: SQLiteUserStore = Depends(get_accounts),
) -> list[UserResponse]:
    """List all users."""
    return [user_to_response(u) for u in await store.list_users()]


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_user(
    request: CreateUserRequest,
    store: SQLiteUserStore = Depends(get_accounts),
) -> UserResponse:
    """Create a user."""
    user = await store.create(User(username=request.username, role=request.role), request.password)
    return user_to_response(user)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_user(
    user_id: int,
    store: SQLiteUserStore = Depends(get_accounts),
) -> None:
    """Delete a user."""
    if not await store.delete(user_id):
        raise UserNotFoundError(user_id)


@router.put(
    "/users/{user_id}/role",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_role(
    user_id: int,
    request: UpdateRoleRequest,
    store: SQLiteUserStore = Depends(get_accounts),
) -> UserResponse:
    """Change a user's role."""
    if not await store.update_role(user_id, request.role):
        raise UserNotFoundError(user_id)
    user = await store.get(user_id)
    return user_to_response(user)  # type: ignore[arg-type]


@router.put(
    "/users/{user_id}/password",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def change_password(
    user_id: int,
    request: ChangePasswordRequest,
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
) -> None:
    """Change a user's password."""
    await use_case.execute(user_id, request)
