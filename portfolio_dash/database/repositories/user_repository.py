from typing import Optional
from ..database import MemoryDatabase
from ...entities.user import User
from ...core.logger import logger


class UserRepository:
    def __init__(self, db: MemoryDatabase):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.tables["users"].get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next(
            (user for user in self.db.tables["users"].values() if user.username == username),
            None
        )

    def create(self, username: str, password: str) -> User:
        user = User(id=self.db.next_id("users"), username=username, password=password)
        self.db.put("users", user.id, user)
        logger.info(f"User created: {username}")
        return user

    def get_or_create(self, username: str, password: str) -> User:
        with self.db.lock:
            user = self.get_by_username(username)
            if user:
                return user
            return self.create(username, password)
