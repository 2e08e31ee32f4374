from typing import List

from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFoundError
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def list_users(self) -> List[UserModel]:
        return self.repo.list_users()

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def set_role(self, user_id: int, role: str) -> UserModel:
        user = self.get_user(user_id)
        updated = self.repo.update_role(user, role)
        logger.info(f"User {user_id} role -> {role}")
        return updated
