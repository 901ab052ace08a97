import os
import tempfile

# Point the service at a throwaway database before any application module loads settings
_db_dir = tempfile.mkdtemp(prefix="cerberus-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from cerberus_platform.account_service.auth import generate_access_token, hash_password
from cerberus_platform.account_service.db import Base, engine
from cerberus_platform.account_service.main import app
from cerberus_platform.account_service.models import User, UserStatus


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session():
    session = Session(bind=engine)
    yield session
    session.close()


@pytest.fixture
def create_user(db_session):
    """Factory inserting a user with the given status directly through the ORM."""
    def _create_user(
        email="owner@example.com",
        password="Secret123!",  # pragma: allowlist secret
        user_status=UserStatus.APPROVED,
    ):
        user = User(
            first_name="Olive",
            last_name="Walker",
            email=email,
            password=hash_password(password),
            user_status=user_status,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def auth_header():
    def _auth_header(user):
        return {"Authorization": f"Bearer {generate_access_token(user)}"}

    return _auth_header
