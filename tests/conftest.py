import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import catalog.models as models
from catalog.auth import password_hasher
from catalog.database import Base, get_db
from catalog.main import app
from catalog.rate_limiter import limiter

CSRF_HEADERS = {"X-Requested-With": "XMLHttpRequest"}
PASSWORD = "s3cret"


@pytest.fixture
def engine():
    # Одно соединение на все сессии, иначе in-memory база у каждой своя
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(autouse=True)
def reset_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def make_client(session_factory):
    """Новый клиент со своими cookie; по умолчанию шлет CSRF-заголовок"""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    def _make_client(csrf: bool = True) -> TestClient:
        return TestClient(app, headers=CSRF_HEADERS if csrf else {})

    yield _make_client
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def login_as(make_client):
    """Зарегистрировать пользователя и вернуть (клиент с сессией, пользователь)"""

    def _login_as(username: str, password: str = PASSWORD):
        user_client = make_client()
        response = user_client.post("/api/auth/register", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        response = user_client.post("/api/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return user_client, response.json()

    return _login_as


@pytest.fixture
def make_user(db):
    """Пользователь напрямую в БД, без HTTP"""

    def _make_user(username: str, password: str = PASSWORD) -> models.User:
        user = models.User(username=username, password_hash=password_hasher.hash(password))
        db.add(user)
        db.commit()
        return user

    return _make_user
