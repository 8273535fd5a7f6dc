"""
Waiting schemas
"""

from datetime import date as Date, time as Time

from pydantic import Field

from roomescape.schemas.base import BaseSchema, IDSchema
from roomescape.models.waiting import Waiting, WaitingWithRank


class WaitingCreate(BaseSchema):
    """Waiting creation schema"""
    date: str = Field(..., min_length=1, examples=["2030-01-01"])
    time_id: int = Field(..., ge=1)
    theme_id: int = Field(..., ge=1)


class ReservationTimeResponse(IDSchema):
    start_at: Time


class ThemeResponse(IDSchema):
    name: str
    description: str
    thumbnail: str


class WaitingResponse(IDSchema):
    """Waiting response schema"""
    member_id: int
    date: Date
    time: ReservationTimeResponse
    theme: ThemeResponse

    @classmethod
    def from_waiting(cls, waiting: Waiting) -> "WaitingResponse":
        return cls(
            id=waiting.id,
            member_id=waiting.member_id,
            date=waiting.date,
            time=ReservationTimeResponse.model_validate(waiting.time),
            theme=ThemeResponse.model_validate(waiting.theme),
        )


class WaitingWithRankResponse(IDSchema):
    """A member's waiting together with its queue position"""
    date: Date
    time: ReservationTimeResponse
    theme: ThemeResponse
    rank: int = Field(..., ge=1)

    @classmethod
    def from_waiting_with_rank(cls, waiting_with_rank: WaitingWithRank) -> "WaitingWithRankResponse":
        waiting = waiting_with_rank.waiting
        return cls(
            id=waiting.id,
            date=waiting.date,
            time=ReservationTimeResponse.model_validate(waiting.time),
            theme=ThemeResponse.model_validate(waiting.theme),
            rank=waiting_with_rank.rank,
        )
