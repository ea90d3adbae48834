"""Creator profile and earnings endpoints.

GET /creators/rankings/{ranking_type}  — earnings | sales | nfts
GET /creators/{address}                — public creator profile
PUT /creators/{address}                — update own bio and social links
GET /creators/{address}/earnings       — lifetime earnings
GET /creators/{address}/stats          — profile + earnings + recent sales
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.ba_analytics.application.service import AnalyticsApplicationService
from src.ba_common.response import ApiResponse, success_response
from src.ba_gateway.auth.dependencies import get_current_address
from src.ba_user.application.schemas import UpdateCreatorRequest
from src.ba_user.application.service import UserApplicationService
from src.container import get_analytics_service, get_user_service

router = APIRouter(prefix="/creators", tags=["creators"])

AnalyticsService = Annotated[AnalyticsApplicationService, Depends(get_analytics_service)]


def _get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "req_unknown")


# Must be registered before /{address}/... routes.
@router.get("/rankings/{ranking_type}")
async def creator_rankings(
    ranking_type: str,
    request: Request,
    service: AnalyticsService,
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    result = await service.rankings(ranking_type, limit)
    resp = success_response(result.to_wire())
    resp.request_id = _get_request_id(request)
    return resp


@router.get("/{address}")
async def creator_profile(address: str, request: Request, service: AnalyticsService) -> ApiResponse:
    result = await service.creator_profile(address)
    resp = success_response(result.to_wire())
    resp.request_id = _get_request_id(request)
    return resp


@router.put("/{address}")
async def update_creator(
    address: str,
    body: UpdateCreatorRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_address)],
    users: Annotated[UserApplicationService, Depends(get_user_service)],
) -> ApiResponse:
    result = await users.update_profile(address, caller, body.to_profile_request())
    resp = success_response(result.to_wire(), message="Profile updated")
    resp.request_id = _get_request_id(request)
    return resp


@router.get("/{address}/earnings")
async def creator_earnings(address: str, request: Request, service: AnalyticsService) -> ApiResponse:
    result = await service.creator_earnings(address)
    resp = success_response(result.to_wire())
    resp.request_id = _get_request_id(request)
    return resp


@router.get("/{address}/stats")
async def creator_stats(address: str, request: Request, service: AnalyticsService) -> ApiResponse:
    result = await service.creator_stats(address)
    resp = success_response(result.to_wire())
    resp.request_id = _get_request_id(request)
    return resp
