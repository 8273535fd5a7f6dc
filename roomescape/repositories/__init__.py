"""
Data access over an AsyncSession
"""

from roomescape.repositories.member_repository import MemberRepository
from roomescape.repositories.reservation_repository import ReservationRepository
from roomescape.repositories.waiting_repository import WaitingRepository

__all__ = [
    "MemberRepository",
    "ReservationRepository",
    "WaitingRepository",
]
