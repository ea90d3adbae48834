"""ba_marketplace REST endpoints.

POST   /marketplace/listings              — create listing (auth, seller = caller)
GET    /marketplace/listings              — active listings, filter/sort/paginate
GET    /marketplace/listings/{listing_id} — detail
PUT    /marketplace/listings/{listing_id} — reprice (seller only)
DELETE /marketplace/listings/{listing_id} — cancel (seller only)
POST   /marketplace/buy                   — purchase (auth, buyer = caller)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status

from src.ba_common.enums import ListingSort, SortOrder
from src.ba_common.response import ApiResponse, success_response
from src.ba_gateway.auth.dependencies import get_current_address
from src.ba_marketplace.application.schemas import (
    CreateListingRequest,
    PurchaseRequest,
    UpdateListingRequest,
)
from src.ba_marketplace.application.service import MarketplaceApplicationService
from src.container import get_marketplace_service

router = APIRouter(prefix="/marketplace", tags=["marketplace"])

MarketplaceService = Annotated[MarketplaceApplicationService, Depends(get_marketplace_service)]
CurrentAddress = Annotated[str, Depends(get_current_address)]


def _get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "req_unknown")


@router.post("/listings", status_code=status.HTTP_201_CREATED)
async def create_listing(
    body: CreateListingRequest,
    request: Request,
    address: CurrentAddress,
    service: MarketplaceService,
) -> ApiResponse:
    result = await service.create_listing(body, address)
    resp = success_response(result.to_wire(), message="Listing created")
    resp.request_id = _get_request_id(request)
    return resp


@router.get("/listings")
async def list_listings(
    request: Request,
    service: MarketplaceService,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: ListingSort = Query(ListingSort.PRICE, alias="sortBy"),
    order: SortOrder = Query(SortOrder.ASC),
    min_price: float | None = Query(None, ge=0, alias="minPrice"),
    max_price: float | None = Query(None, ge=0, alias="maxPrice"),
) -> ApiResponse:
    result = await service.list_listings(page, limit, sort_by, order, min_price, max_price)
    resp = success_response(result.to_wire())
    resp.request_id = _get_request_id(request)
    return resp


@router.get("/listings/{listing_id}")
async def get_listing(
    listing_id: int, request: Request, service: MarketplaceService
) -> ApiResponse:
    result = await service.get_listing(listing_id)
    resp = success_response(result.to_wire())
    resp.request_id = _get_request_id(request)
    return resp


@router.put("/listings/{listing_id}")
async def update_listing(
    listing_id: int,
    body: UpdateListingRequest,
    request: Request,
    address: CurrentAddress,
    service: MarketplaceService,
) -> ApiResponse:
    result = await service.update_price(listing_id, address, body.price)
    resp = success_response(result.to_wire(), message="Listing updated")
    resp.request_id = _get_request_id(request)
    return resp


@router.delete("/listings/{listing_id}")
async def cancel_listing(
    listing_id: int,
    request: Request,
    address: CurrentAddress,
    service: MarketplaceService,
) -> ApiResponse:
    result = await service.cancel_listing(listing_id, address)
    resp = success_response(result.to_wire(), message="Listing cancelled")
    resp.request_id = _get_request_id(request)
    return resp


@router.post("/buy", status_code=status.HTTP_201_CREATED)
async def buy(
    body: PurchaseRequest,
    request: Request,
    address: CurrentAddress,
    service: MarketplaceService,
) -> ApiResponse:
    result = await service.buy(body.listing_id, body.quantity, address)
    resp = success_response(result.to_wire(), message="Purchase successful")
    resp.request_id = _get_request_id(request)
    return resp
