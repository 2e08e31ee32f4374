# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

JWT_SECRET = os.getenv("JWT_SECRET", "default_secret_key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_TTL_SECONDS = int(os.getenv("JWT_TTL_SECONDS", 30 * 24 * 60 * 60))

AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "token")
AUTH_COOKIE_SECURE = os.getenv("AUTH_COOKIE_SECURE", "true").lower() == "true"

ORPHAN_SWEEP_SECONDS = float(os.getenv("ORPHAN_SWEEP_SECONDS", 60 * 60))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))
