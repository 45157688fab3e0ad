"""
Analytics endpoints for the merchant dashboard.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_analytics_service
from app.api.v1.schemas.analytics_schemas import AnalyticsResponse
from app.services.analytics import OrderAnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=AnalyticsResponse,
    summary="Get order analytics",
    description="Revenue, order counts, top products and daily revenue computed over all orders",
)
async def get_analytics(service: OrderAnalyticsService = Depends(get_analytics_service)) -> dict[str, Any]:
    """
    Compute the dashboard analytics from a fresh snapshot of all orders.

    Returns:
        Analytics metrics in minor currency units
    """
    snapshot = await service.get_snapshot()
    return snapshot.to_dict()
