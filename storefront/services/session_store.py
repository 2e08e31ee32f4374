import redis
from storefront.utils.settings import REDIS_URL
from storefront.utils.retry import redis_retry
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class TokenRevocationStore:
    """
    Denylist of logged-out session tokens, keyed by the token's jti.
    Keys expire together with the token, so nothing has to be cleaned up by hand.
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(jti: str) -> str:
        return f"session:{jti}:revoked"

    @redis_retry()
    def revoke(self, jti: str, ttl: int) -> None:
        key = self._key(jti)
        logger.info(f"Revoke session {key} for {ttl}s")
        self.redis.set(name=key, value="1", ex=max(ttl, 1))

    @redis_retry()
    def is_revoked(self, jti: str) -> bool:
        return bool(self.redis.exists(self._key(jti)))
