"""EIP-191 personal_sign message construction and signer recovery."""

from datetime import datetime

from eth_account import Account
from eth_account.messages import encode_defunct

from src.ba_common.errors import InvalidSignatureError


def build_challenge_message(address: str, nonce: str, issued_at: datetime) -> str:
    """Human-readable text the wallet signs. Nonce makes each challenge unique."""
    return (
        "Sign in to BitArt Market\n"
        f"Address: {address}\n"
        f"Nonce: {nonce}\n"
        f"Issued At: {issued_at.isoformat()}"
    )


def recover_signer(message: str, signature: str) -> str:
    """Return the lowercase address that produced signature over message."""
    try:
        signer = Account.recover_message(encode_defunct(text=message), signature=signature)
    except Exception as exc:  # malformed hex / wrong length / bad curve point
        raise InvalidSignatureError() from exc
    return str(signer).lower()
