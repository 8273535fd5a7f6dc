"""
Integration tests for WaitingService
"""

import pytest
from datetime import date, datetime, time, timedelta

from roomescape.core.exceptions import (
    AuthorizationError,
    DuplicateWaitingError,
    NotFoundError,
    PastSlotError,
    SelfConflictError,
    SlotNotFoundError,
    ValidationError,
)
from roomescape.models import ReservationDate, ReservationTime, Theme, Waiting
from roomescape.services.waiting_service import WaitingService
from tests.conftest import fixed_clock


@pytest.mark.integration
@pytest.mark.asyncio
class TestCreateWaiting:
    """Test waiting creation rules"""

    async def test_save(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        """A member queues on a slot reserved by someone else"""
        owner, requester = members[0], members[1]
        await make_reservation(owner, tomorrow, reservation_time, theme)

        response = await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester.id)

        saved = await waiting_service.waiting_repository.find_by_id(response.id)
        assert saved is not None
        assert saved.member_id == requester.id
        assert response.member_id == requester.id
        assert response.date.isoformat() == tomorrow
        assert response.time.id == reservation_time.id
        assert response.time.start_at == time(10, 0)
        assert response.theme.id == theme.id
        assert response.theme.name == "Haunted Mansion"

    async def test_save_without_reservation(self, waiting_service, members, reservation_time, theme, tomorrow):
        """No reservation for the slot means nothing to wait on"""
        with pytest.raises(SlotNotFoundError) as exc_info:
            await waiting_service.save(tomorrow, reservation_time.id, theme.id, members[0].id)

        assert exc_info.value.code == "SLOT_NOT_FOUND"

    async def test_save_on_own_reservation(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        """The reservation owner cannot wait on their own slot"""
        owner = members[0]
        await make_reservation(owner, tomorrow, reservation_time, theme)

        with pytest.raises(SelfConflictError):
            await waiting_service.save(tomorrow, reservation_time.id, theme.id, owner.id)

    async def test_save_on_own_past_reservation(self, waiting_service, members, reservation_time, theme, make_reservation, yesterday):
        """Self conflict is checked before the past-slot rule"""
        owner = members[0]
        await make_reservation(owner, yesterday, reservation_time, theme)

        with pytest.raises(SelfConflictError):
            await waiting_service.save(yesterday, reservation_time.id, theme.id, owner.id)

    async def test_save_duplicate(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        """A second waiting for the same member and slot is rejected"""
        owner, requester = members[0], members[1]
        await make_reservation(owner, tomorrow, reservation_time, theme)
        await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester.id)

        with pytest.raises(DuplicateWaitingError) as exc_info:
            await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester.id)

        assert exc_info.value.status_code == 409

    async def test_save_on_past_date(self, waiting_service, members, reservation_time, theme, make_reservation, yesterday):
        """A slot dated before today cannot be waited on"""
        owner, requester = members[0], members[1]
        await make_reservation(owner, yesterday, reservation_time, theme)

        with pytest.raises(PastSlotError):
            await waiting_service.save(yesterday, reservation_time.id, theme.id, requester.id)

    async def test_save_today_after_start_time(self, db_session, members, reservation_time, theme, make_reservation):
        """Today's slot whose time of day has gone by counts as past"""
        today = date.today()
        owner, requester = members[0], members[1]
        await make_reservation(owner, today.isoformat(), reservation_time, theme)
        service = WaitingService(db_session, clock=fixed_clock(datetime.combine(today, time(12, 0))))

        with pytest.raises(PastSlotError):
            await service.save(today.isoformat(), reservation_time.id, theme.id, requester.id)

    async def test_save_today_before_start_time(self, db_session, members, reservation_time, theme, make_reservation):
        """Today's slot that has not started yet can be waited on"""
        today = date.today()
        owner, requester = members[0], members[1]
        await make_reservation(owner, today.isoformat(), reservation_time, theme)
        service = WaitingService(db_session, clock=fixed_clock(datetime.combine(today, time(9, 0))))

        response = await service.save(today.isoformat(), reservation_time.id, theme.id, requester.id)

        assert response.id is not None

    async def test_duplicate_is_checked_before_past(self, db_session, members, reservation_time, theme, make_reservation, tomorrow):
        """Rules are applied in order and the first failure wins"""
        owner, requester = members[0], members[1]
        await make_reservation(owner, tomorrow, reservation_time, theme)
        await WaitingService(db_session).save(tomorrow, reservation_time.id, theme.id, requester.id)
        day_after = datetime.combine(date.today() + timedelta(days=2), time(0, 0))
        service = WaitingService(db_session, clock=fixed_clock(day_after))

        with pytest.raises(DuplicateWaitingError):
            await service.save(tomorrow, reservation_time.id, theme.id, requester.id)

    async def test_save_with_malformed_date(self, waiting_service, members, reservation_time, theme):
        with pytest.raises(ValidationError) as exc_info:
            await waiting_service.save("2030/01/01", reservation_time.id, theme.id, members[0].id)

        assert exc_info.value.details == {"field": "date"}

    async def test_save_for_unknown_member(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        await make_reservation(members[0], tomorrow, reservation_time, theme)

        with pytest.raises(NotFoundError):
            await waiting_service.save(tomorrow, reservation_time.id, theme.id, 9999)


@pytest.mark.integration
@pytest.mark.asyncio
class TestWaitingRank:
    """Test rank lookup"""

    async def test_rank_follows_creation_order(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        owner, first, second = members
        await make_reservation(owner, tomorrow, reservation_time, theme)
        first_waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, first.id)
        second_waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, second.id)

        first_ranks = await waiting_service.find_waiting_with_rank_by_member_id(first.id)
        second_ranks = await waiting_service.find_waiting_with_rank_by_member_id(second.id)

        assert [(w.waiting.id, w.rank) for w in first_ranks] == [(first_waiting.id, 1)]
        assert [(w.waiting.id, w.rank) for w in second_ranks] == [(second_waiting.id, 2)]

    async def test_rank_is_independent_per_slot(self, db_session, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        owner, first, second = members
        other_theme = Theme(name="Bank Heist", description="Crack the vault", thumbnail="heist.png")
        other_time = ReservationTime(start_at=time(13, 0))
        db_session.add_all([other_theme, other_time])
        await db_session.commit()
        await make_reservation(owner, tomorrow, reservation_time, theme)
        await make_reservation(owner, tomorrow, reservation_time, other_theme)
        await make_reservation(owner, tomorrow, other_time, theme)

        await waiting_service.save(tomorrow, reservation_time.id, theme.id, first.id)
        await waiting_service.save(tomorrow, reservation_time.id, other_theme.id, first.id)
        await waiting_service.save(tomorrow, reservation_time.id, theme.id, second.id)
        await waiting_service.save(tomorrow, reservation_time.id, other_theme.id, second.id)
        await waiting_service.save(tomorrow, other_time.id, theme.id, second.id)

        ranks = await waiting_service.find_waiting_with_rank_by_member_id(second.id)

        assert [(w.waiting.theme_id, w.waiting.time_id, w.rank) for w in ranks] == [
            (theme.id, reservation_time.id, 2),
            (other_theme.id, reservation_time.id, 2),
            (theme.id, other_time.id, 1),
        ]

    async def test_rank_includes_past_waitings(self, db_session, waiting_service, members, reservation_time, theme, make_reservation, yesterday):
        """Rank lookup is a pure read over stored waitings"""
        owner, first, second = members
        await make_reservation(owner, yesterday, reservation_time, theme)
        slot_date = ReservationDate.parse(yesterday)
        db_session.add_all([
            Waiting(first, slot_date, reservation_time, theme),
            Waiting(second, slot_date, reservation_time, theme),
        ])
        await db_session.commit()

        ranks = await waiting_service.find_waiting_with_rank_by_member_id(second.id)

        assert len(ranks) == 1
        assert ranks[0].rank == 2
        assert ranks[0].waiting.member_id == second.id

    async def test_rank_moves_up_after_deletion(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        owner, first, second = members
        await make_reservation(owner, tomorrow, reservation_time, theme)
        first_waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, first.id)
        await waiting_service.save(tomorrow, reservation_time.id, theme.id, second.id)

        await waiting_service.delete_member_waiting(first.id, first_waiting.id)

        ranks = await waiting_service.find_waiting_with_rank_by_member_id(second.id)
        assert [w.rank for w in ranks] == [1]

    async def test_no_waitings(self, waiting_service, members):
        assert await waiting_service.find_waiting_with_rank_by_member_id(members[0].id) == []


@pytest.mark.integration
@pytest.mark.asyncio
class TestDeleteWaiting:
    """Test ownership-checked deletion"""

    async def test_delete_own_waiting(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        owner, requester = members[0], members[1]
        requester_id = requester.id
        await make_reservation(owner, tomorrow, reservation_time, theme)
        waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester_id)

        await waiting_service.delete_member_waiting(requester_id, waiting.id)

        assert await waiting_service.waiting_repository.find_by_id(waiting.id) is None
        assert await waiting_service.find_waiting_with_rank_by_member_id(requester_id) == []

    async def test_delete_missing_waiting(self, waiting_service, members):
        member_id = members[0].id

        with pytest.raises(NotFoundError) as exc_info:
            await waiting_service.delete_member_waiting(member_id, 1)

        assert exc_info.value.status_code == 404

    async def test_delete_twice(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        owner_id, requester_id = members[0].id, members[1].id
        await make_reservation(members[0], tomorrow, reservation_time, theme)
        waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester_id)
        await waiting_service.delete_member_waiting(requester_id, waiting.id)

        with pytest.raises(NotFoundError):
            await waiting_service.delete_member_waiting(requester_id, waiting.id)

    async def test_delete_other_members_waiting(self, waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
        owner_id, requester_id = members[0].id, members[1].id
        await make_reservation(members[0], tomorrow, reservation_time, theme)
        waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester_id)

        with pytest.raises(AuthorizationError) as exc_info:
            await waiting_service.delete_member_waiting(owner_id, waiting.id)

        assert exc_info.value.status_code == 403
        assert await waiting_service.waiting_repository.find_by_id(waiting.id) is not None

    async def test_admin_cannot_delete_other_members_waiting(self, waiting_service, members, admin, reservation_time, theme, make_reservation, tomorrow):
        """No role bypasses the ownership check"""
        admin_id, requester_id = admin.id, members[1].id
        await make_reservation(members[0], tomorrow, reservation_time, theme)
        waiting = await waiting_service.save(tomorrow, reservation_time.id, theme.id, requester_id)

        with pytest.raises(AuthorizationError):
            await waiting_service.delete_member_waiting(admin_id, waiting.id)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_waiting_queue_scenario(waiting_service, members, reservation_time, theme, make_reservation, tomorrow):
    """M1 reserves, M2 and M3 queue, duplicates and foreign deletes fail, M3 leaves"""
    m1_id, m2_id, m3_id = (member.id for member in members)
    time_id, theme_id = reservation_time.id, theme.id
    await make_reservation(members[0], tomorrow, reservation_time, theme)

    await waiting_service.save(tomorrow, time_id, theme_id, m2_id)
    m3_waiting = await waiting_service.save(tomorrow, time_id, theme_id, m3_id)

    assert [w.rank for w in await waiting_service.find_waiting_with_rank_by_member_id(m2_id)] == [1]
    assert [w.rank for w in await waiting_service.find_waiting_with_rank_by_member_id(m3_id)] == [2]

    with pytest.raises(DuplicateWaitingError):
        await waiting_service.save(tomorrow, time_id, theme_id, m2_id)

    with pytest.raises(AuthorizationError):
        await waiting_service.delete_member_waiting(m1_id, m3_waiting.id)

    await waiting_service.delete_member_waiting(m3_id, m3_waiting.id)

    assert await waiting_service.find_waiting_with_rank_by_member_id(m3_id) == []
