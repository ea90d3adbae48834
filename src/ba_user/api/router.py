"""ba_user REST endpoints.

GET /users/{address}           — profile (created on first read)
PUT /users/{address}           — update own profile
GET /users/{address}/nfts      — NFTs owned
GET /users/{address}/listings  — active listings as seller
GET /users/{address}/sales     — sale receipts as seller
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.ba_common.address import normalize_address
from src.ba_common.response import ApiResponse, success_response
from src.ba_gateway.auth.dependencies import get_current_address
from src.ba_marketplace.application.schemas import ListingOut
from src.ba_marketplace.application.service import MarketplaceApplicationService
from src.ba_nft.application.service import NFTApplicationService
from src.ba_user.application.schemas import UpdateProfileRequest
from src.ba_user.application.service import UserApplicationService
from src.container import get_marketplace_service, get_nft_service, get_user_service

router = APIRouter(prefix="/users", tags=["users"])

UserService = Annotated[UserApplicationService, Depends(get_user_service)]


@router.get("/{address}")
async def get_profile(address: str, request: Request, service: UserService) -> ApiResponse:
    result = await service.get_profile(address)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{address}")
async def update_profile(
    address: str,
    body: UpdateProfileRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_address)],
    service: UserService,
) -> ApiResponse:
    result = await service.update_profile(address, caller, body)
    resp = success_response(result.to_wire(), message="Profile updated")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{address}/nfts")
async def list_owned_nfts(
    address: str,
    request: Request,
    service: Annotated[NFTApplicationService, Depends(get_nft_service)],
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    result = await service.list_owned(normalize_address(address), page, limit)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{address}/listings")
async def list_user_listings(
    address: str,
    request: Request,
    service: Annotated[MarketplaceApplicationService, Depends(get_marketplace_service)],
) -> ApiResponse:
    listings: list[ListingOut] = await service.list_seller_listings(normalize_address(address))
    resp = success_response({"items": [lst.to_wire() for lst in listings]})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{address}/sales")
async def list_user_sales(
    address: str,
    request: Request,
    service: Annotated[MarketplaceApplicationService, Depends(get_marketplace_service)],
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
) -> ApiResponse:
    result = await service.list_sales(normalize_address(address), page, limit)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
