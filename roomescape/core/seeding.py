"""
Demo data seeding for development databases
"""
from datetime import date, time, timedelta
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.core.database import async_session
from roomescape.repositories import MemberRepository, ReservationRepository
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

logger = logging.getLogger(__name__)


async def seed_demo_data(session: AsyncSession) -> bool:
    """Seed members, themes, times and one reservation. Returns False if data already exists."""
    result = await session.execute(select(Member).limit(1))
    if result.scalar_one_or_none():
        logger.info("Database already contains data, skipping seeding")
        return False

    logger.info("Empty database detected, starting seeding...")

    admin = Member(
        MemberName("Admin"),
        MemberEmail("admin@roomescape.com"),
        MemberPassword.encode("Admin123!"),
        MemberRole.ADMIN
    )
    host = Member.create_user(
        MemberName("Host"),
        MemberEmail("host@roomescape.com"),
        MemberPassword.encode("Host123!")
    )
    guest = Member.create_user(
        MemberName("Guest"),
        MemberEmail("guest@roomescape.com"),
        MemberPassword.encode("Guest123!")
    )
    member_repository = MemberRepository(session)
    for member in (admin, host, guest):
        await member_repository.save(member)

    times = [ReservationTime(start_at=time(hour, 0)) for hour in (10, 13, 16, 19)]
    session.add_all(times)

    themes = [
        Theme(
            name="Haunted Mansion",
            description="Escape the mansion before midnight",
            thumbnail="https://roomescape.com/themes/haunted-mansion.png"
        ),
        Theme(
            name="Bank Heist",
            description="Crack the vault and get out unseen",
            thumbnail="https://roomescape.com/themes/bank-heist.png"
        ),
    ]
    session.add_all(themes)

    tomorrow = ReservationDate(date.today() + timedelta(days=1))
    await ReservationRepository(session).save(Reservation(host, tomorrow, times[0], themes[0]))

    await session.commit()
    logger.info("Seeding completed successfully")
    return True


async def seed_if_empty():
    """Seed the configured database only if it has no members"""
    async with async_session() as session:
        try:
            await seed_demo_data(session)
        except Exception as e:
            await session.rollback()
            logger.error(f"Seeding failed: {e}")
            raise
