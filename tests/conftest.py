"""
Test configuration and fixtures
Async SQLAlchemy over an in-memory SQLite database
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable
from datetime import date, datetime, time, timedelta
import os

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

# Set test environment
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-with-at-least-32-characters"
os.environ["PROMETHEUS_ENABLED"] = "false"

# Import all models BEFORE creating fixtures (critical for create_all to work)
from roomescape.core.database import Base
from roomescape.models import (
    Member,
    MemberEmail,
    MemberName,
    MemberPassword,
    MemberRole,
    Reservation,
    ReservationDate,
    ReservationTime,
    Theme,
)
from roomescape.config import settings
from roomescape.core.security import create_access_token
from roomescape.repositories import ReservationRepository
from roomescape.services.waiting_service import WaitingService


@pytest_asyncio.fixture(scope="function")
async def test_db():
    """Create async database engine with a fresh schema"""
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async_session_maker = async_sessionmaker(
        test_db,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with the session dependency overridden"""
    from roomescape.main import app
    from roomescape.core.database import get_session

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    try:
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


def build_member(name: str, email: str, role: MemberRole = MemberRole.USER) -> Member:
    # Pre-encoded credential keeps bcrypt out of the hot path
    return Member(MemberName(name), MemberEmail(email), MemberPassword("encoded-password"), role)


@pytest_asyncio.fixture
async def members(db_session):
    """Three plain users"""
    created = [
        build_member("Potato", "111@aaa.com"),
        build_member("Sweet Potato", "222@aaa.com"),
        build_member("Pumpkin", "333@aaa.com"),
    ]
    db_session.add_all(created)
    await db_session.commit()
    return created


@pytest_asyncio.fixture
async def admin(db_session):
    member = build_member("Admin", "admin@aaa.com", MemberRole.ADMIN)
    db_session.add(member)
    await db_session.commit()
    return member


@pytest_asyncio.fixture
async def reservation_time(db_session):
    reservation_time = ReservationTime(start_at=time(10, 0))
    db_session.add(reservation_time)
    await db_session.commit()
    return reservation_time


@pytest_asyncio.fixture
async def theme(db_session):
    theme = Theme(name="Haunted Mansion", description="Escape before midnight", thumbnail="mansion.png")
    db_session.add(theme)
    await db_session.commit()
    return theme


@pytest.fixture
def tomorrow() -> str:
    return (date.today() + timedelta(days=1)).isoformat()


@pytest.fixture
def yesterday() -> str:
    return (date.today() - timedelta(days=1)).isoformat()


@pytest.fixture
def make_reservation(db_session) -> Callable:
    """Factory persisting a reservation for (member, ISO date, time, theme)"""

    async def _make(member, iso_date: str, reservation_time, theme) -> Reservation:
        reservation = Reservation(member, ReservationDate.parse(iso_date), reservation_time, theme)
        await ReservationRepository(db_session).save(reservation)
        await db_session.commit()
        return reservation

    return _make


@pytest.fixture
def waiting_service(db_session) -> WaitingService:
    return WaitingService(db_session)


def fixed_clock(moment: datetime) -> Callable[[], datetime]:
    return lambda: moment


def auth_headers(member_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(member_id)}"}
