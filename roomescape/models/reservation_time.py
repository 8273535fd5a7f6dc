"""
ReservationTime model
"""

from datetime import datetime

from sqlalchemy import Column, Time

from roomescape.models.base import BaseModel


class ReservationTime(BaseModel):
    """
    Bookable time of day
    """
    __tablename__ = "reservation_times"

    start_at = Column(Time, unique=True, nullable=False)

    def is_before(self, now: datetime) -> bool:
        return self.start_at < now.time()

    def __repr__(self):
        return f"<ReservationTime(id={self.id}, start_at={self.start_at})>"
