"""Base chain REST endpoints.

GET /base/health                — RPC client version
GET /base/account/{address}     — ETH balance
GET /base/gas                   — transfer gas, or contract-call gas when ?to= is given
GET /base/fee-breakdown         — purchase cost incl. platform fee, royalty, gas
GET /base/tx/{tx_hash}          — receipt status, optionally waiting for mining
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.ba_chain.application.schemas import GasEstimateOut
from src.ba_chain.application.service import ChainApplicationService
from src.ba_common.fees import MAX_PRICE
from src.ba_common.response import ApiResponse, success_response
from src.container import get_chain_service

router = APIRouter(prefix="/base", tags=["base"])

ChainService = Annotated[ChainApplicationService, Depends(get_chain_service)]


@router.get("/health")
async def rpc_health(request: Request, service: ChainService) -> ApiResponse:
    result = await service.health()
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/account/{address}")
async def account_balance(address: str, request: Request, service: ChainService) -> ApiResponse:
    result = await service.account_balance(address)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/gas")
async def gas_estimate(
    request: Request,
    service: ChainService,
    to: str | None = Query(None, description="Contract address; omit for a plain transfer"),
    data: str = Query("0x", pattern=r"^0x([0-9a-fA-F]{2})*$"),
    from_address: str | None = Query(None, alias="from"),
) -> ApiResponse:
    if to is None:
        estimate = await service.current_gas()
    else:
        estimate = await service.estimate_transaction(to, data, from_address)
    result = GasEstimateOut.from_domain(estimate)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/fee-breakdown")
async def fee_breakdown(
    request: Request,
    service: ChainService,
    price: float = Query(..., gt=0, le=MAX_PRICE, allow_inf_nan=False),
    royalty_percentage: float = Query(
        0, ge=0, le=100, allow_inf_nan=False, alias="royaltyPercentage"
    ),
) -> ApiResponse:
    result = await service.fee_breakdown(price, royalty_percentage)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/tx/{tx_hash}")
async def transaction_status(
    tx_hash: str,
    request: Request,
    service: ChainService,
    wait: bool = Query(False, description="Poll until mined or the poll ceiling is reached"),
) -> ApiResponse:
    result = await service.transaction_status(tx_hash, wait)
    resp = success_response(result.to_wire())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
