"""
Pydantic schemas for request and response validation
"""

from roomescape.schemas.waiting import (
    WaitingCreate,
    WaitingResponse,
    WaitingWithRankResponse,
    ReservationTimeResponse,
    ThemeResponse
)
from roomescape.schemas.response import ErrorResponse, ErrorDetail, HealthResponse

__all__ = [
    "WaitingCreate",
    "WaitingResponse",
    "WaitingWithRankResponse",
    "ReservationTimeResponse",
    "ThemeResponse",
    "ErrorResponse",
    "ErrorDetail",
    "HealthResponse",
]
