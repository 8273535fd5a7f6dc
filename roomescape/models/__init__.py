"""
Database models
"""

from roomescape.models.member import Member, MemberRole
from roomescape.models.reservation_time import ReservationTime
from roomescape.models.theme import Theme
from roomescape.models.reservation import Reservation, ReservationStatus
from roomescape.models.waiting import Waiting, WaitingWithRank
from roomescape.models.values import MemberName, MemberEmail, MemberPassword, ReservationDate

__all__ = [
    "Member",
    "MemberRole",
    "ReservationTime",
    "Theme",
    "Reservation",
    "ReservationStatus",
    "Waiting",
    "WaitingWithRank",
    "MemberName",
    "MemberEmail",
    "MemberPassword",
    "ReservationDate",
]
