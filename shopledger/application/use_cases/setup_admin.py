"""Setup Admin Use Case: create the first super admin of a fresh install."""

from shopledger.application.dto.requests import SetupAdminRequest
from shopledger.application.dto.responses import UserResponse
from shopledger.config import get_logger
from shopledger.core.entities.account import User
from shopledger.core.interfaces.storage import IUserStore

logger = get_logger(__name__)


def user_to_response(user: User) -> UserResponse:
    """Convert a User to its API representation."""
    return UserResponse(
        id=user.id,  # type: ignore[arg-type]
        username=user.username,
        role=user.role.value,
        created_at=user.created_at,
    )


class SetupAdminUseCase:
    """Create the first user. Refused once any account exists."""

    def __init__(self, user_store: IUserStore | None = None):
        self._user_store = user_store

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from shopledger.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    async def is_setup_required(self) -> bool:
        """True while no user accounts exist."""
        store = await self._get_user_store()
        return await store.count() == 0

    async def execute(self, request: SetupAdminRequest) -> User:
        """Execute setup admin use case."""
        logger.info("setup_admin_started", username=request.username)

        store = await self._get_user_store()
        user = await store.create_first_admin(request.username, request.password)

        logger.info("setup_admin_complete", user_id=user.id)
        return user

    def to_response(self, user: User) -> UserResponse:
        """Convert result to API response."""
        return user_to_response(user)
