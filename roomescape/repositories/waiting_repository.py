from typing import List, Optional

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, joinedload

from roomescape.models import ReservationDate, Waiting, WaitingWithRank


class WaitingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, waiting: Waiting) -> Waiting:
        self.session.add(waiting)
        await self.session.flush()
        return waiting

    async def find_by_id(self, waiting_id: int, for_update: bool = False) -> Optional[Waiting]:
        stmt = select(Waiting).where(Waiting.id == waiting_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_member_and_slot(
        self,
        member_id: int,
        date: ReservationDate,
        time_id: int,
        theme_id: int
    ) -> bool:
        stmt = select(
            exists().where(
                Waiting.member_id == member_id,
                Waiting.date == date.value,
                Waiting.time_id == time_id,
                Waiting.theme_id == theme_id,
            )
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def find_with_rank_by_member_id(self, member_id: int) -> List[WaitingWithRank]:
        """
        Every waiting of the member, each paired with the number of waitings
        on the same slot whose id is not greater than its own.
        """
        other = aliased(Waiting)
        rank = (
            select(func.count(other.id))
            .where(
                other.date == Waiting.date,
                other.time_id == Waiting.time_id,
                other.theme_id == Waiting.theme_id,
                other.id <= Waiting.id,
            )
            .correlate(Waiting)
            .scalar_subquery()
        )
        stmt = (
            select(Waiting, rank.label("rank"))
            .options(joinedload(Waiting.time), joinedload(Waiting.theme))
            .where(Waiting.member_id == member_id)
            .order_by(Waiting.id)
        )
        result = await self.session.execute(stmt)
        return [WaitingWithRank(waiting=waiting, rank=rank) for waiting, rank in result.all()]

    async def delete(self, waiting: Waiting) -> int:
        """Delete by id and return the number of rows removed."""
        result = await self.session.execute(
            delete(Waiting).where(Waiting.id == waiting.id)
        )
        return result.rowcount
