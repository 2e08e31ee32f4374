# storefront/services/auth_service.py
import uuid
from datetime import datetime, timezone, timedelta
from typing import Any, Dict, Tuple

import bcrypt
import jwt
from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import ConflictError, InvalidArgumentError, UnauthenticatedError
from storefront.domain.schemas import RegisterIn
from storefront.repos.user_repo import UserRepo
from storefront.services.session_store import TokenRevocationStore
from storefront.utils.settings import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_SECRET, JWT_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# bcrypt only looks at the first 72 bytes
_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class AuthService:
    """
    Register / login / logout and session token handling.
    Tokens are HS256 JWTs carrying the user id, role and name.
    """

    def __init__(self, db: Session, revocations: TokenRevocationStore):
        self.repo = UserRepo(db)
        self.revocations = revocations

    def register(self, payload: RegisterIn) -> UserModel:
        email = payload.email.lower()
        self._check_password(payload.password)

        if self.repo.get_by_email(email):
            raise ConflictError("Email already in use")

        user = UserModel(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            role="user",
        )
        created = self.repo.create_user(user)

        logger.info(f"Registered user {created.id} <{email}>")
        return created

    def login(self, email: str, password: str) -> Tuple[UserModel, str]:
        user = self.repo.get_by_email(email.lower())

        if not user or len(password.encode("utf-8")) > _MAX_PASSWORD_BYTES or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for <{email}>")
            raise UnauthenticatedError("Invalid email or password")

        logger.info(f"User {user.id} logged in")
        return user, self.issue_token(user)

    def logout(self, token: str | None) -> None:
        if not token:
            return

        try:
            claims = self.decode_token(token)
        except UnauthenticatedError:
            # nothing to revoke, the token is already unusable
            return

        ttl = int(claims["exp"] - datetime.now(timezone.utc).timestamp())
        try:
            self.revocations.revoke(claims["jti"], ttl)
        except RedisError as e:
            logger.warning(f"Could not revoke session {claims['jti']}: {e}")
            return

        logger.info(f"User {claims['sub']} logged out")

    def authenticate(self, token: str) -> UserModel:
        claims = self.decode_token(token)

        if self.revocations.is_revoked(claims["jti"]):
            raise UnauthenticatedError("Session has been revoked")

        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError):
            raise UnauthenticatedError("Invalid session")

        user = self.repo.get_user(user_id)
        if not user:
            raise UnauthenticatedError("Invalid session")
        return user

    # =====================================================
    # TOKENS
    # =====================================================
    @staticmethod
    def issue_token(user: UserModel) -> str:
        now = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": str(user.id),
            "role": user.role,
            "name": user.name,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + timedelta(seconds=JWT_TTL_SECONDS),
        }
        return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                JWT_SECRET,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "jti", "exp"]},
            )
        except jwt.InvalidTokenError as e:
            raise UnauthenticatedError("Invalid or expired session") from e

    @staticmethod
    def _check_password(password: str) -> None:
        if len(password.encode("utf-8")) > _MAX_PASSWORD_BYTES:
            raise InvalidArgumentError(f"Password must be at most {_MAX_PASSWORD_BYTES} bytes")
