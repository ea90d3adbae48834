"""Pydantic request/response schemas for ba_gateway auth."""

from src.ba_common.schemas import CamelModel


class ChallengeRequest(CamelModel):
    address: str


class ChallengeResponse(CamelModel):
    challenge_id: str
    message: str
    expires_at: str


class VerifyRequest(CamelModel):
    challenge_id: str
    signature: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    address: str
