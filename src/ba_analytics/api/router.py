"""Marketplace analytics endpoints.

GET /analytics/stats         — cached marketplace aggregate
GET /analytics/top-creators  — creators ranked by earnings
GET /analytics/top-buyers    — buyers ranked by spend
GET /analytics/trending      — NFTs ranked by 24h sales volume
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.ba_analytics.application.service import AnalyticsApplicationService
from src.ba_common.response import ApiResponse, success_response
from src.container import get_analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])

AnalyticsService = Annotated[AnalyticsApplicationService, Depends(get_analytics_service)]


@router.get("/stats")
async def marketplace_stats(
    request: Request,
    service: AnalyticsService,
    window_hours: int | None = Query(
        None, ge=1, alias="windowHours", description="Only count sales in the last N hours"
    ),
) -> ApiResponse:
    result = await service.marketplace_stats(window_hours)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/top-creators")
async def top_creators(
    request: Request,
    service: AnalyticsService,
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    rows = await service.top_creators(limit)
    resp = success_response({"items": [r.to_wire() for r in rows]})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/top-buyers")
async def top_buyers(
    request: Request,
    service: AnalyticsService,
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    rows = await service.top_buyers(limit)
    resp = success_response({"items": [r.to_wire() for r in rows]})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/trending")
async def trending(
    request: Request,
    service: AnalyticsService,
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    rows = await service.trending(limit)
    resp = success_response({"items": [r.to_wire() for r in rows]})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
