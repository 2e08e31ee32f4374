# storefront/api/deps.py
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.errors import PermissionDeniedError, UnauthenticatedError
from storefront.services.auth_service import AuthService
from storefront.services.session_store import TokenRevocationStore
from storefront.utils.settings import AUTH_COOKIE_NAME


@lru_cache
def get_revocation_store() -> TokenRevocationStore:
    return TokenRevocationStore()


def get_auth_service(
    db: Session = Depends(get_db),
    revocations: TokenRevocationStore = Depends(get_revocation_store),
) -> AuthService:
    return AuthService(db, revocations)


def get_current_user(
    request: Request,
    auth: AuthService = Depends(get_auth_service),
) -> UserModel:
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        raise UnauthenticatedError("Not authenticated")
    return auth.authenticate(token)


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if user.role != "admin":
        raise PermissionDeniedError("Admin access required")
    return user
