"""EVM address helpers.

Addresses are compared case-insensitively; the canonical stored form is
lowercase so that checksum and non-checksum inputs map to the same record.
"""

import re

from src.ba_common.errors import InvalidAddressError

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

ZERO_ADDRESS = "0x" + "0" * 40


def is_address(value: str) -> bool:
    return bool(_ADDRESS_RE.match(value))


def normalize_address(value: str) -> str:
    """Validate and lowercase an address; raise InvalidAddressError otherwise."""
    if not is_address(value):
        raise InvalidAddressError(value)
    return value.lower()


def same_address(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    return a.lower() == b.lower()
