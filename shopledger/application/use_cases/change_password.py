"""Change Password Use Case."""

from shopledger.application.dto.requests import ChangePasswordRequest
from shopledger.config import get_logger
from shopledger.core.exceptions import (
    AuthenticationError,
    UserNotFoundError,
    ValidationError,
)
from shopledger.core.interfaces.storage import IUserStore

logger = get_logger(__name__)


class ChangePasswordUseCase:
    """Replace a user's password, verifying the current one unless a super admin resets it."""

    def __init__(self, user_store: IUserStore | None = None):
        self._user_store = user_store

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from shopledger.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    async def execute(self, user_id: int, request: ChangePasswordRequest) -> None:
        """Execute change password use case."""
        store = await self._get_user_store()

        if await store.get(user_id) is None:
            raise UserNotFoundError(user_id)

        if not request.is_super_admin:
            if not request.current_password:
                raise ValidationError(
                    "Current password is required", field="current_password"
                )
            if not await store.verify_password(user_id, request.current_password):
                raise AuthenticationError("Current password is incorrect")

        await store.set_password(user_id, request.new_password)
        logger.info(
            "change_password_complete",
            user_id=user_id,
            reset_by_admin=request.is_super_admin,
        )
