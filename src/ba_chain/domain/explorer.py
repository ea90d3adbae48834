"""BaseScan deep links."""

from dataclasses import dataclass

_RESOURCES = ("tx", "address", "token", "block")


@dataclass(frozen=True)
class ExplorerLink:
    url: str
    label: str


def shorten(value: str, chars: int = 4) -> str:
    """0x1234...abcd"""
    if len(value) <= 2 * chars + 2:
        return value
    return f"{value[:chars + 2]}...{value[-chars:]}"


def explorer_url(base_url: str, resource: str, identifier: str | int) -> str:
    if resource not in _RESOURCES:
        raise ValueError(f"unknown explorer resource: {resource}")
    return f"{base_url.rstrip('/')}/{resource}/{identifier}"


def transaction_link(base_url: str, tx_hash: str) -> ExplorerLink:
    return ExplorerLink(explorer_url(base_url, "tx", tx_hash), "View on BaseScan")


def address_link(base_url: str, address: str, label: str | None = None) -> ExplorerLink:
    return ExplorerLink(explorer_url(base_url, "address", address), label or shorten(address))


def contract_link(base_url: str, contract: str) -> ExplorerLink:
    return ExplorerLink(explorer_url(base_url, "address", contract), "Contract")


def token_link(base_url: str, token: str, name: str | None = None) -> ExplorerLink:
    return ExplorerLink(explorer_url(base_url, "token", token), name or "Token")


def block_link(base_url: str, block_number: int) -> ExplorerLink:
    return ExplorerLink(explorer_url(base_url, "block", block_number), f"Block {block_number}")
