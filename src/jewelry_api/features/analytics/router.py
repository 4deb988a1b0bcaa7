import datetime
import logging
from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..auth.security import get_current_identity
from .schemas import AnalyticsResponse
from . import service as analytics_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
    # Any authenticated role may read analytics
    dependencies=[Depends(get_current_identity)],
)


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    start_date: Optional[datetime.datetime] = Query(
        None, alias="startDate", description="ISO-8601 start; defaults to the first day of this month"
    ),
    end_date: Optional[datetime.datetime] = Query(
        None, alias="endDate", description="ISO-8601 end; defaults to now"
    ),
):
    return await analytics_service.generate_analytics_report(start_date, end_date)
