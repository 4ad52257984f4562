from __future__ import annotations

import copy
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from tailorshop.app import create_app, get_container
from tailorshop.application.services.token_service import JwtTokenService
from tailorshop.domain.requisitions.entities import Requisition, RequisitionStatus
from tailorshop.domain.requisitions.repositories import RequisitionRepository
from tailorshop.domain.users.entities import User
from tailorshop.domain.users.exceptions import DuplicateIdentityError, UserNotFoundError
from tailorshop.domain.users.repositories import PasswordHasher, UserRepository
from tailorshop.shared.config import AppConfig, AuthConfig, DatabaseConfig, SecurityConfig

TEST_SECRET = "test-secret-key-for-signing-tokens-0123456789"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class InMemoryUserRepository(UserRepository):
    def __init__(self, clock: FakeClock | None = None) -> None:
        self._users: dict[int, User] = {}
        self._seq = count(1)
        self._clock = clock or FakeClock()

    def _taken(self, *, email: str | None, phone: str | None, exclude: int | None = None) -> bool:
        return any(
            user.id != exclude and user.matches_identity(email=email, phone=phone)
            for user in self._users.values()
        )

    def find_by_identity(self, *, email: str | None, phone: str | None) -> User | None:
        for user in self._users.values():
            if user.matches_identity(email=email, phone=phone):
                return user
        return None

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, *, name: str, email: str | None, phone: str | None, password_hash: str) -> User:
        if self._taken(email=email, phone=phone):
            raise DuplicateIdentityError()
        user = User(
            id=next(self._seq),
            name=name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            created_at=self._clock(),
        )
        self._users[user.id] = user
        return user

    def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
    ) -> User:
        current = self._users.get(user_id)
        if current is None:
            raise UserNotFoundError(user_id)
        if self._taken(email=email, phone=phone, exclude=user_id):
            raise DuplicateIdentityError()
        updated = User(
            id=current.id,
            name=name if name is not None else current.name,
            email=email if email is not None else current.email,
            phone=phone if phone is not None else current.phone,
            password_hash=current.password_hash,
            created_at=current.created_at,
            last_login_at=current.last_login_at,
        )
        self._users[user_id] = updated
        return updated

    def set_password_hash(self, user_id: int, password_hash: str) -> None:
        current = self._users[user_id]
        self._users[user_id] = User(
            id=current.id,
            name=current.name,
            email=current.email,
            phone=current.phone,
            password_hash=password_hash,
            created_at=current.created_at,
            last_login_at=current.last_login_at,
        )

    def touch_last_login(self, user_id: int) -> User:
        current = self._users[user_id]
        updated = User(
            id=current.id,
            name=current.name,
            email=current.email,
            phone=current.phone,
            password_hash=current.password_hash,
            created_at=current.created_at,
            last_login_at=self._clock(),
        )
        self._users[user_id] = updated
        return updated

    def delete(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemoryRequisitionRepository(RequisitionRepository):
    def __init__(self) -> None:
        self._rows: dict[int, Requisition] = {}
        self._seq = count(1)

    def add(self, requisition: Requisition) -> Requisition:
        stored = copy.deepcopy(requisition)
        stored.id = next(self._seq)
        self._rows[stored.id] = stored
        return copy.deepcopy(stored)

    def get_for_owner(self, owner_id: int, requisition_id: int) -> Requisition | None:
        row = self._rows.get(requisition_id)
        if row is None or row.owner_id != owner_id:
            return None
        return copy.deepcopy(row)

    def list_for_owner(
        self,
        owner_id: int,
        *,
        status: RequisitionStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[Requisition], int]:
        rows = [
            row
            for row in sorted(self._rows.values(), key=lambda r: r.id or 0, reverse=True)
            if row.owner_id == owner_id and (status is None or row.status == status)
        ]
        return [copy.deepcopy(row) for row in rows[offset : offset + limit]], len(rows)

    def save(self, requisition: Requisition) -> Requisition:
        self._rows[requisition.id] = copy.deepcopy(requisition)
        return copy.deepcopy(requisition)

    def delete_for_owner(self, owner_id: int, requisition_id: int) -> bool:
        row = self._rows.get(requisition_id)
        if row is None or row.owner_id != owner_id:
            return False
        del self._rows[requisition_id]
        return True


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def users(clock: FakeClock) -> InMemoryUserRepository:
    return InMemoryUserRepository(clock)


@pytest.fixture()
def requisitions() -> InMemoryRequisitionRepository:
    return InMemoryRequisitionRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def tokens(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(secret=TEST_SECRET, ttl=timedelta(days=7), clock=clock)


def make_config(
    tmp_path: Path, *, rate_limit: bool = False, min_password_length: int = 6
) -> AppConfig:
    return AppConfig(
        APP_ENV="test",
        SECRET_KEY=TEST_SECRET,
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'tailorshop.db'}"),
        # Fast hashes keep the HTTP tests quick; hashing itself is covered separately
        auth=AuthConfig(
            PASSWORD_HASH_METHOD="pbkdf2:sha256:1000",
            MIN_PASSWORD_LENGTH=min_password_length,
        ),
        security=SecurityConfig(ENABLE_RATE_LIMIT=rate_limit, RL_LIMIT=3, RL_WINDOW=60),
    )


@pytest.fixture()
def config_factory(tmp_path: Path):
    def _factory(*, rate_limit: bool = False, min_password_length: int = 6) -> AppConfig:
        return make_config(
            tmp_path, rate_limit=rate_limit, min_password_length=min_password_length
        )

    return _factory


@pytest.fixture()
def app(tmp_path: Path) -> Iterator[Flask]:
    flask_app = create_app(make_config(tmp_path))
    flask_app.config["TESTING"] = True
    yield flask_app
    get_container(flask_app).dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


ADA = {"name": "Ada", "email": "ada@example.com", "password": "secret1"}


@pytest.fixture()
def ada_token(client: FlaskClient) -> str:
    response = client.post("/api/auth/register", json=ADA)
    assert response.status_code == 201
    return response.get_json()["data"]["token"]


@pytest.fixture()
def auth_headers(ada_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {ada_token}"}
