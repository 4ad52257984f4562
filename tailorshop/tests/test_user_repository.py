from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path
from threading import Barrier

import pytest
from sqlalchemy import func, select

from tailorshop.domain.requisitions.entities import Requisition, RequisitionStatus
from tailorshop.domain.users.exceptions import DuplicateIdentityError
from tailorshop.infrastructure.db import create_db_engine, create_session_factory, init_db
from tailorshop.infrastructure.db import models
from tailorshop.infrastructure.db.session import SessionFactory, session_scope
from tailorshop.infrastructure.repositories.requisitions import SqlAlchemyRequisitionRepository
from tailorshop.infrastructure.repositories.users import SqlAlchemyUserRepository
from tailorshop.shared.config import DatabaseConfig


@pytest.fixture()
def session_factory(tmp_path: Path) -> Iterator[SessionFactory]:
    engine = create_db_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'store.db'}"))
    init_db(engine)
    factory = create_session_factory(engine)
    yield factory
    engine.dispose()


@pytest.fixture()
def user_repo(session_factory: SessionFactory) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(session_factory)


def _count_users(session_factory: SessionFactory) -> int:
    with session_scope(session_factory) as session:
        return session.scalar(select(func.count(models.User.id)))


def test_add_and_find(user_repo: SqlAlchemyUserRepository) -> None:
    created = user_repo.add(name="Ada", email="ada@example.com", phone=None, password_hash="h")

    assert created.id > 0
    assert created.created_at.tzinfo is not None
    assert user_repo.find_by_id(created.id) == created
    assert user_repo.find_by_identity(email="ada@example.com", phone=None) == created
    assert user_repo.find_by_identity(email=None, phone="08012345678") is None
    assert user_repo.find_by_identity(email=None, phone=None) is None


def test_database_rejects_duplicate_email(user_repo: SqlAlchemyUserRepository) -> None:
    user_repo.add(name="Ada", email="ada@example.com", phone=None, password_hash="h")

    with pytest.raises(DuplicateIdentityError):
        user_repo.add(name="Eve", email="ada@example.com", phone=None, password_hash="h")


def test_users_without_phone_do_not_collide(user_repo: SqlAlchemyUserRepository) -> None:
    user_repo.add(name="Ada", email="ada@example.com", phone=None, password_hash="h")
    user_repo.add(name="Bola", email="bola@example.com", phone=None, password_hash="h")

    assert user_repo.find_by_identity(email="bola@example.com", phone=None) is not None


def test_update_to_taken_phone_rejected(user_repo: SqlAlchemyUserRepository) -> None:
    user_repo.add(name="Ada", email=None, phone="08011111111", password_hash="h")
    bola = user_repo.add(name="Bola", email=None, phone="08022222222", password_hash="h")

    with pytest.raises(DuplicateIdentityError):
        user_repo.update(bola.id, phone="08011111111")

    assert user_repo.find_by_id(bola.id).phone == "08022222222"


def test_touch_last_login_and_password(user_repo: SqlAlchemyUserRepository) -> None:
    user = user_repo.add(name="Ada", email="ada@example.com", phone=None, password_hash="h")

    touched = user_repo.touch_last_login(user.id)
    user_repo.set_password_hash(user.id, "h2")

    assert touched.last_login_at is not None
    assert user_repo.find_by_id(user.id).password_hash == "h2"


def test_delete_cascades_to_requisitions(
    user_repo: SqlAlchemyUserRepository, session_factory: SessionFactory
) -> None:
    user = user_repo.add(name="Ada", email="ada@example.com", phone=None, password_hash="h")
    requisitions = SqlAlchemyRequisitionRepository(session_factory)
    now = datetime.now(UTC)
    requisitions.add(
        Requisition(id=None, owner_id=user.id, name="Obi", description="", created_at=now, updated_at=now)
    )

    user_repo.delete(user.id)

    assert user_repo.find_by_id(user.id) is None
    with session_scope(session_factory) as session:
        assert session.scalar(select(func.count(models.Requisition.id))) == 0


def test_concurrent_registration_creates_one_user(
    user_repo: SqlAlchemyUserRepository, session_factory: SessionFactory
) -> None:
    workers = 4
    barrier = Barrier(workers)

    def register(index: int) -> str:
        barrier.wait()
        try:
            user_repo.add(
                name=f"Racer {index}",
                email="race@example.com",
                phone=None,
                password_hash="h",
            )
        except DuplicateIdentityError:
            return "duplicate"
        return "created"

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(register, range(workers)))

    assert outcomes.count("created") == 1
    assert outcomes.count("duplicate") == workers - 1
    assert _count_users(session_factory) == 1


def test_requisition_round_trip_keeps_notes_and_status(session_factory: SessionFactory) -> None:
    users = SqlAlchemyUserRepository(session_factory)
    owner = users.add(name="Ada", email="ada@example.com", phone=None, password_hash="h")
    repo = SqlAlchemyRequisitionRepository(session_factory)
    now = datetime.now(UTC)

    created = repo.add(
        Requisition(
            id=None,
            owner_id=owner.id,
            name="Obi",
            description="Kaftan",
            measurements={"chest": 40},
            created_at=now,
            updated_at=now,
        )
    )
    created.add_note("First fitting", now=now)
    created.change_status(RequisitionStatus.IN_PROGRESS, now=now)
    repo.save(created)

    stored = repo.get_for_owner(owner.id, created.id)

    assert stored.status is RequisitionStatus.IN_PROGRESS
    assert [note.text for note in stored.notes] == ["First fitting"]
    assert stored.notes[0].created_at == created.notes[0].created_at
    assert repo.get_for_owner(owner.id + 1, created.id) is None
    items, total = repo.list_for_owner(owner.id, status=RequisitionStatus.PENDING)
    assert (items, total) == ([], 0)
