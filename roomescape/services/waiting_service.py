"""
Waiting queue service
Creation rules, rank lookup and ownership-checked deletion of waitings
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.core.exceptions import (
    AuthorizationError,
    DuplicateWaitingError,
    NotFoundError,
    PastSlotError,
    SelfConflictError,
    SlotNotFoundError,
    ValidationError,
)
from roomescape.models import ReservationDate, Waiting, WaitingWithRank
from roomescape.repositories import MemberRepository, ReservationRepository, WaitingRepository
from roomescape.schemas.waiting import WaitingResponse

logger = logging.getLogger(__name__)


class WaitingService:
    """
    Waitings are created only for slots that already carry a reservation,
    and a member holds at most one waiting per slot. The store's unique
    constraint on (member, date, time, theme) backs the duplicate check.
    """

    def __init__(self, session: AsyncSession, clock: Optional[Callable[[], datetime]] = None):
        self.session = session
        self.clock = clock or datetime.now
        self.member_repository = MemberRepository(session)
        self.reservation_repository = ReservationRepository(session)
        self.waiting_repository = WaitingRepository(session)

    async def save(self, date: str, time_id: int, theme_id: int, member_id: int) -> WaitingResponse:
        """
        Queue the member on an already reserved slot
        """
        reservation_date = self._parse_date(date)
        slot = {"date": reservation_date.isoformat(), "time_id": time_id, "theme_id": theme_id}

        member = await self.member_repository.find_by_id(member_id)
        if member is None:
            raise NotFoundError("Member", member_id)

        reservation = await self.reservation_repository.find_by_slot(reservation_date, time_id, theme_id)
        if reservation is None:
            logger.warning("Waiting rejected, slot has no reservation", extra={"member_id": member_id, **slot})
            raise SlotNotFoundError(details=slot)

        if reservation.is_owned_by(member_id):
            logger.warning("Waiting rejected, member owns the reservation", extra={"member_id": member_id, **slot})
            raise SelfConflictError(details=slot)

        if await self.waiting_repository.exists_by_member_and_slot(member_id, reservation_date, time_id, theme_id):
            logger.warning("Waiting rejected, duplicate request", extra={"member_id": member_id, **slot})
            raise DuplicateWaitingError(details=slot)

        if reservation.is_past(self.clock()):
            logger.warning("Waiting rejected, slot is in the past", extra={"member_id": member_id, **slot})
            raise PastSlotError(details=slot)

        waiting = Waiting(member, reservation_date, reservation.time, reservation.theme)
        try:
            await self.waiting_repository.save(waiting)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # A concurrent request for the same member and slot won the insert
            if await self.waiting_repository.exists_by_member_and_slot(
                member_id, reservation_date, time_id, theme_id
            ):
                logger.warning("Waiting rejected by unique constraint", extra={"member_id": member_id, **slot})
                raise DuplicateWaitingError(details=slot) from e
            raise

        logger.info(f"Waiting {waiting.id} created", extra={"member_id": member_id, **slot})
        return WaitingResponse.from_waiting(waiting)

    async def find_waiting_with_rank_by_member_id(self, member_id: int) -> List[WaitingWithRank]:
        """
        The member's waitings, each with its 1-based position in its slot's queue
        """
        return await self.waiting_repository.find_with_rank_by_member_id(member_id)

    async def delete_member_waiting(self, member_id: int, waiting_id: int) -> None:
        """
        Delete a waiting on behalf of its owner.
        The row stays locked from the ownership check until commit.
        """
        try:
            waiting = await self.waiting_repository.find_by_id(waiting_id, for_update=True)
            if waiting is None:
                raise NotFoundError("Waiting", waiting_id)

            if not waiting.is_owned_by(member_id):
                logger.warning(
                    "Waiting deletion refused",
                    extra={"member_id": member_id, "waiting_id": waiting_id}
                )
                raise AuthorizationError("Not authorized to delete this waiting")

            if await self.waiting_repository.delete(waiting) == 0:
                raise NotFoundError("Waiting", waiting_id)

            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"Waiting {waiting_id} deleted", extra={"member_id": member_id})

    @staticmethod
    def _parse_date(date: str) -> ReservationDate:
        try:
            return ReservationDate.parse(date)
        except ValueError as e:
            raise ValidationError(str(e), field="date") from e
