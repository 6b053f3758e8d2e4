"""Login Use Case."""

from shopledger.application.dto.requests import LoginRequest
from shopledger.application.dto.responses import UserResponse
from shopledger.application.use_cases.setup_admin import user_to_response
from shopledger.config import get_logger
from shopledger.core.entities.account import User
from shopledger.core.exceptions import AuthenticationError
from shopledger.core.interfaces.storage import IUserStore

logger = get_logger(__name__)


class LoginUserUseCase:
    """Check credentials and return the matching user."""

    def __init__(self, user_store: IUserStore | None = None):
        self._user_store = user_store

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from shopledger.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    async def execute(self, request: LoginRequest) -> User:
        """Execute login use case."""
        store = await self._get_user_store()
        user = await store.authenticate(request.username, request.password)
        if user is None:
            logger.warning("login_failed", username=request.username)
            raise AuthenticationError()

        logger.info("login_succeeded", user_id=user.id, role=user.role.value)
        return user

    def to_response(self, user: User) -> UserResponse:
        """Convert result to API response."""
        return user_to_response(user)
