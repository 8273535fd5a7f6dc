"""
Member waiting endpoints
"""

from typing import Any, List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roomescape.config import settings
from roomescape.core.database import get_session
from roomescape.core.security import get_current_member_id
from roomescape.schemas.waiting import WaitingCreate, WaitingResponse, WaitingWithRankResponse
from roomescape.services.waiting_service import WaitingService

router = APIRouter()


def get_waiting_service(db: AsyncSession = Depends(get_session)) -> WaitingService:
    return WaitingService(db)


@router.post("", response_model=WaitingResponse, status_code=status.HTTP_201_CREATED)
async def create_waiting(
    waiting_data: WaitingCreate,
    response: Response,
    member_id: int = Depends(get_current_member_id),
    waiting_service: WaitingService = Depends(get_waiting_service)
) -> Any:
    """
    Queue the current member on an already reserved slot
    """
    waiting = await waiting_service.save(
        waiting_data.date,
        waiting_data.time_id,
        waiting_data.theme_id,
        member_id
    )
    response.headers["Location"] = f"{settings.API_PREFIX}/waitings/{waiting.id}"
    return waiting


@router.get("/mine", response_model=List[WaitingWithRankResponse])
async def get_my_waitings(
    member_id: int = Depends(get_current_member_id),
    waiting_service: WaitingService = Depends(get_waiting_service)
) -> Any:
    """
    Current member's waitings with their queue rank
    """
    waitings = await waiting_service.find_waiting_with_rank_by_member_id(member_id)
    return [WaitingWithRankResponse.from_waiting_with_rank(w) for w in waitings]


@router.delete("/{waiting_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_waiting(
    waiting_id: int,
    member_id: int = Depends(get_current_member_id),
    waiting_service: WaitingService = Depends(get_waiting_service)
) -> Response:
    """
    Delete one of the current member's waitings
    """
    await waiting_service.delete_member_waiting(member_id, waiting_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
