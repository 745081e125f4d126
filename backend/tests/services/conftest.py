"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_current_user overridden; tests pick the caller with `login_as`
    - db_manager initialized for the readiness probe

Design Decisions:
    - SQLite in-memory with StaticPool: every session sees the same database
      (PostgreSQL-specific row locking is a no-op there)
"""

import pytest
from datetime import date
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from scouting.api.dependencies import get_current_user
from scouting.db.base import Base
from scouting.infrastructure.database import get_db, DatabaseSessionManager
from scouting.infrastructure.firebase import VerifiedIdentity
import scouting.infrastructure.database as db_module
import scouting.models  # noqa: F401
from scouting.models.club import Club
from scouting.models.player_profile import PlayerProfile
from scouting.models.user import User
from scouting.main import app

INTERNAL_KEY = "test-internal-key"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def caller():
    """Mutable holder for the identity the overridden auth dependency returns."""
    return {"identity": VerifiedIdentity(uid="user-1", email="ana@example.com")}


@pytest.fixture
def login_as(caller):
    def _login(uid: str, email: str | None = None):
        caller["identity"] = VerifiedIdentity(uid=uid, email=email)
    return _login


@pytest.fixture
async def client(test_engine, test_session_factory, caller):
    """FastAPI test client with DB and auth dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def override_current_user():
        return caller["identity"]

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_current_user

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def internal_headers():
    return {"x-api-key": INTERNAL_KEY}


@pytest.fixture
async def seed_user(test_db):
    """Regular user with one credit (the caller by default)."""
    user = User(id="user-1", name="Ana", email="ana@example.com", credits=1)
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def seed_other_user(test_db):
    user = User(
        id="user-2", name="Ben", email="ben@example.com",
        phone="+44 7000 000000", profile_type="Scout", credits=0,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def seed_profile(test_db, seed_user):
    """Player profile owned by user-1."""
    profile = PlayerProfile(
        user_id=seed_user.id,
        first_name="Ana",
        last_name="Silva",
        date_of_birth=date(2005, 3, 15),
        primary_position="Winger",
        club="Riverside FC",
        city="Leeds",
        state="West Yorkshire",
        country="England",
    )
    test_db.add(profile)
    await test_db.commit()
    await test_db.refresh(profile)
    return profile


@pytest.fixture
async def seed_club(test_db):
    club = Club(
        name="Riverside FC",
        country="England",
        logo_url="https://cdn.example.com/logo.png",
        thumb_profile_url="https://cdn.example.com/profile.png",
    )
    test_db.add(club)
    await test_db.commit()
    await test_db.refresh(club)
    return club
