from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from roomescape.models import Reservation, ReservationDate


class ReservationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_slot(
        self,
        date: ReservationDate,
        time_id: int,
        theme_id: int
    ) -> Optional[Reservation]:
        """Find the reservation occupying a (date, time, theme) slot, with its time and theme loaded."""
        stmt = (
            select(Reservation)
            .options(joinedload(Reservation.time), joinedload(Reservation.theme))
            .where(
                Reservation.date == date.value,
                Reservation.time_id == time_id,
                Reservation.theme_id == theme_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, reservation: Reservation) -> Reservation:
        self.session.add(reservation)
        await self.session.flush()
        return reservation
