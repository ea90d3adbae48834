"""Wallet login: issue a signed-message challenge, verify it, mint a JWT.

Transport-agnostic; the router maps results to ApiResponse.
"""

import logging
import secrets
import uuid
from datetime import timedelta

from src.ba_common.address import normalize_address
from src.ba_common.datetime_utils import utc_now
from src.ba_common.errors import (
    ChallengeExpiredError,
    ChallengeNotFoundError,
    InvalidSignatureError,
)
from src.ba_gateway.auth.challenge_store import Challenge, ChallengeStoreProtocol
from src.ba_gateway.auth.jwt_handler import create_access_token
from src.ba_gateway.auth.signature import build_challenge_message, recover_signer

logger = logging.getLogger("ba.auth")


class AuthService:
    def __init__(self, store: ChallengeStoreProtocol, ttl_seconds: int) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds

    async def create_challenge(self, address: str) -> Challenge:
        address = normalize_address(address)
        now = utc_now()
        challenge = Challenge(
            id=uuid.uuid4().hex,
            address=address,
            message=build_challenge_message(address, secrets.token_hex(16), now),
            expires_at=now + timedelta(seconds=self._ttl_seconds),
        )
        await self._store.put(challenge, self._ttl_seconds)
        return challenge

    async def verify(self, challenge_id: str, signature: str) -> tuple[str, str]:
        """Return (address, access_token) if signature matches the challenge."""
        challenge = await self._store.consume(challenge_id)
        if challenge is None:
            raise ChallengeNotFoundError(challenge_id)
        if challenge.expires_at <= utc_now():
            raise ChallengeExpiredError(challenge_id)

        signer = recover_signer(challenge.message, signature)
        if signer != challenge.address:
            logger.warning(
                "challenge %s signed by %s, expected %s", challenge_id, signer, challenge.address
            )
            raise InvalidSignatureError()

        logger.info("address %s authenticated", signer)
        return signer, create_access_token(signer)
