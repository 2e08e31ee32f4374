import os
import tempfile
from decimal import Decimal

# configure before anything from storefront is imported
_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AUTH_COOKIE_SECURE"] = "false"

import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_revocation_store
from storefront.celery_worker import celery_app
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import ProductModel, UserModel
from storefront.main import app
from storefront.services.auth_service import hash_password

PASSWORD = "password123"


class InMemoryRevocationStore:
    def __init__(self):
        self.revoked = {}

    def revoke(self, jti, ttl):
        self.revoked[jti] = ttl

    def is_revoked(self, jti):
        return jti in self.revoked


@pytest.fixture(scope="session", autouse=True)
def eager_celery():
    celery_app.conf.task_always_eager = True
    celery_app.conf.task_store_eager_result = False
    yield


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def revocations():
    store = InMemoryRevocationStore()
    app.dependency_overrides[get_revocation_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_revocation_store, None)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="user", email=None, name="Test User"):
        counter["n"] += 1
        user = UserModel(
            name=name,
            email=email or f"user{counter['n']}@example.com",
            password_hash=hash_password(PASSWORD),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_product(db):
    def _make(name="Azure Ceramic Vase", price="49.99", stock=10, category="living-room", featured=False, description="A vase"):
        product = ProductModel(
            name=name,
            description=description,
            price=Decimal(price),
            stock_quantity=stock,
            category=category,
            featured=featured,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def client(revocations):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login_client(revocations):
    """Returns a factory for clients that carry the session cookie of the given user."""
    clients = []

    def _login(user):
        c = TestClient(app)
        clients.append(c)
        response = c.post("/auth/login", json={"email": user.email, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return c

    yield _login

    for c in clients:
        c.close()


@pytest.fixture
def user_client(make_user, login_client):
    user = make_user()
    return user, login_client(user)


@pytest.fixture
def admin_client(make_user, login_client):
    admin = make_user(role="admin", email="admin@example.com", name="Admin User")
    return admin, login_client(admin)
