"""
Waiting model
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from roomescape.models.base import BaseModel
from roomescape.models.reservation import is_past_slot
from roomescape.models.values import ReservationDate


class Waiting(BaseModel):
    """
    Queued request for a slot that is already reserved.
    The store-assigned id is the queue ordering key.
    """
    __tablename__ = "waitings"
    __table_args__ = (
        UniqueConstraint('member_id', 'date', 'time_id', 'theme_id', name='uq_waiting_member_slot'),
        # ids must never be reused, ranks depend on it
        {"sqlite_autoincrement": True},
    )

    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time_id = Column(Integer, ForeignKey("reservation_times.id"), nullable=False)
    theme_id = Column(Integer, ForeignKey("themes.id"), nullable=False)

    # Relationships
    member = relationship("Member")
    time = relationship("ReservationTime")
    theme = relationship("Theme")

    def __init__(self, member, date: ReservationDate, time, theme, id: Optional[int] = None):
        if member is None:
            raise ValueError("Waiting member is required")
        if date is None:
            raise ValueError("Waiting date is required")
        if time is None:
            raise ValueError("Waiting time is required")
        if theme is None:
            raise ValueError("Waiting theme is required")
        self.id = id
        self.member = member
        self.date = date.value
        self.time = time
        self.theme = theme

    @property
    def reservation_date(self) -> ReservationDate:
        return ReservationDate(self.date)

    def is_owned_by(self, member_id: int) -> bool:
        return self.member_id == member_id

    def is_past(self, now: datetime) -> bool:
        return is_past_slot(self.reservation_date, self.time, now)

    def __repr__(self):
        return (
            f"<Waiting(id={self.id}, member_id={self.member_id}, date={self.date}, "
            f"time_id={self.time_id}, theme_id={self.theme_id})>"
        )


@dataclass(frozen=True)
class WaitingWithRank:
    """A waiting paired with its 1-based position in its slot's queue"""
    waiting: Waiting
    rank: int
