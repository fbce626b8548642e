# eventpro/services/users.py
from loguru import logger

from eventpro.exceptions import AuthenticationError, ConflictError, NotFoundError
from eventpro.repository import Repository
from eventpro.utils.auth_utils import get_password_hash, verify_password

UNIQUE_USER_FIELDS = ("email", "cpf")


class UserService:
    def __init__(self, users: Repository) -> None:
        self._users = users

    async def _check_unique(self, data: dict, user_id: str = None) -> None:
        for field in UNIQUE_USER_FIELDS:
            if field not in data:
                continue
            existing = await self._users.find_one({field: data[field]})
            if existing and existing["id"] != user_id:
                raise ConflictError(f"The field '{field}' is already in use.")

    async def register(self, data: dict) -> dict:
        await self._check_unique(data)
        data["password"] = get_password_hash(data["password"])

        user = await self._users.insert(data)
        logger.info(f"User {user['id']} registered")
        return user

    async def login(self, email: str, password: str) -> dict:
        """Check the credentials. No session or token is issued."""
        user = await self._users.find_one({"email": email})
        if not user:
            raise NotFoundError("User not found.")
        if not verify_password(password, user.get("password")):
            logger.warning(f"Invalid password for user {user['id']}")
            raise AuthenticationError("Invalid password.")
        return user

    async def list_users(self) -> list[dict]:
        return await self._users.find()

    async def get_user(self, user_id: str) -> dict:
        user = await self._users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found.")
        return user

    async def update_user(self, user_id: str, changes: dict) -> dict:
        await self.get_user(user_id)
        await self._check_unique(changes, user_id)
        if changes.get("password"):
            changes["password"] = get_password_hash(changes["password"])

        user = await self._users.update(user_id, changes)
        if not user:
            raise NotFoundError("User not found.")
        return user

    async def delete_user(self, user_id: str) -> None:
        if not await self._users.delete(user_id):
            raise NotFoundError("User not found.")
        logger.info(f"User {user_id} deleted")
