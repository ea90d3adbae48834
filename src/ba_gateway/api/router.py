"""Auth API router: wallet challenge and signature verification.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from config.settings import settings
from src.ba_common.response import ApiResponse, success_response
from src.ba_gateway.auth.schemas import (
    ChallengeRequest,
    ChallengeResponse,
    TokenResponse,
    VerifyRequest,
)
from src.ba_gateway.auth.service import AuthService
from src.container import get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


@router.post(
    "/challenge",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="Issue a login challenge for a wallet address",
)
async def create_challenge(
    request: Request,
    body: ChallengeRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse:
    challenge = await service.create_challenge(body.address)
    data = ChallengeResponse(
        challenge_id=challenge.id,
        message=challenge.message,
        expires_at=challenge.expires_at.isoformat(),
    )
    resp = success_response(data.to_wire(), message="Sign the message with your wallet")
    resp.request_id = _get_request_id(request)
    return resp


@router.post(
    "/verify",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Exchange a signed challenge for an access token",
)
async def verify(
    request: Request,
    body: VerifyRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse:
    address, token = await service.verify(body.challenge_id, body.signature)
    data = TokenResponse(
        access_token=token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        address=address,
    )
    resp = success_response(data.to_wire(), message="Login successful")
    resp.request_id = _get_request_id(request)
    return resp
