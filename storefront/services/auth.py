import logging
from typing import Optional, Tuple

from storefront.core.errors import Conflict
from storefront.core.security import create_access_token, get_password_hash, verify_password
from storefront.db.storage import Storage
from storefront.models import User, UserCreate

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def register_user(self, user_in: UserCreate) -> User:
        if self.storage.get_user_by_username(user_in.username):
            raise Conflict("Username already exists")

        user = self.storage.create_user(user_in, get_password_hash(user_in.password))
        logger.info("user.registered", extra={"user_id": user.id})
        return user

    def authenticate_user(self, username: str, password: str) -> Tuple[Optional[User], Optional[str]]:
        user = self.storage.get_user_by_username(username)
        if not user:
            return None, "Incorrect username or password"
        if not verify_password(password, user.password_hash):
            return None, "Incorrect username or password"
        return user, None

    def issue_token(self, user: User) -> str:
        return create_access_token(data={"sub": user.username})
