"""
Reservation model
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
import enum

from roomescape.models.base import BaseModel
from roomescape.models.values import ReservationDate


class ReservationStatus(str, enum.Enum):
    RESERVATION = "reservation"


def is_past_slot(reservation_date: ReservationDate, reservation_time, now: datetime) -> bool:
    """
    True when the slot's date is before today, or it is today and the
    time of day has already gone by.
    """
    today = now.date()
    return reservation_date.is_before(today) or (
        reservation_date.is_today(today) and reservation_time.is_before(now)
    )


class Reservation(BaseModel):
    """
    Confirmed occupancy of a (date, time, theme) slot by one member
    """
    __tablename__ = "reservations"
    __table_args__ = (
        UniqueConstraint('date', 'time_id', 'theme_id', name='uq_reservation_slot'),
    )

    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time_id = Column(Integer, ForeignKey("reservation_times.id"), nullable=False)
    theme_id = Column(Integer, ForeignKey("themes.id"), nullable=False)
    status = Column(
        Enum(ReservationStatus),
        default=ReservationStatus.RESERVATION,
        nullable=False
    )

    # Relationships
    member = relationship("Member")
    time = relationship("ReservationTime")
    theme = relationship("Theme")

    def __init__(self, member, date: ReservationDate, time, theme, id: Optional[int] = None):
        if member is None:
            raise ValueError("Reservation member is required")
        if date is None:
            raise ValueError("Reservation date is required")
        if time is None:
            raise ValueError("Reservation time is required")
        if theme is None:
            raise ValueError("Reservation theme is required")
        self.id = id
        self.member = member
        self.date = date.value
        self.time = time
        self.theme = theme
        self.status = ReservationStatus.RESERVATION

    @property
    def reservation_date(self) -> ReservationDate:
        return ReservationDate(self.date)

    def is_owned_by(self, member_id: int) -> bool:
        return self.member_id == member_id

    def is_past(self, now: datetime) -> bool:
        return is_past_slot(self.reservation_date, self.time, now)

    def __repr__(self):
        return (
            f"<Reservation(id={self.id}, member_id={self.member_id}, date={self.date}, "
            f"time_id={self.time_id}, theme_id={self.theme_id}, status={self.status})>"
        )
