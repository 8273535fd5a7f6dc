from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.models import Member


class MemberRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, member_id: int) -> Optional[Member]:
        return await self.session.get(Member, member_id)

    async def save(self, member: Member) -> Member:
        self.session.add(member)
        await self.session.flush()
        return member
