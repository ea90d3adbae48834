"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: NFT
  3xxx: Marketplace
  4xxx: User
  5xxx: Upstream (chain RPC / IPFS)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class ChallengeNotFoundError(AppError):
    def __init__(self, challenge_id: str) -> None:
        super().__init__(1002, f"Challenge not found or already used: {challenge_id}", 401)


class ChallengeExpiredError(AppError):
    def __init__(self, challenge_id: str) -> None:
        super().__init__(1003, f"Challenge expired: {challenge_id}", 401)


class InvalidSignatureError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Signature does not match challenge address", 401)


class InvalidAddressError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(1005, f"Valid Ethereum address required: {address}", 400)


class ForbiddenError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(1006, detail, 403)


# --- 2xxx: NFT ---

class NFTNotFoundError(AppError):
    def __init__(self, nft_id: int) -> None:
        super().__init__(2001, f"NFT not found: {nft_id}", 404)


class InvalidRoyaltyError(AppError):
    def __init__(self, value: object) -> None:
        super().__init__(
            2002,
            f"Invalid royalty percentage {value}. Must be between 0 and 25.",
            400,
        )


class InvalidFileTypeError(AppError):
    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            2003,
            f"Invalid file type {content_type}. Only images are allowed.",
            400,
        )


class FileTooLargeError(AppError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(2004, f"File too large: {size} bytes (limit {limit})", 413)


class MissingFieldsError(AppError):
    def __init__(self, fields: list[str]) -> None:
        super().__init__(2005, f"Missing required fields: {', '.join(fields)}", 400)


# --- 3xxx: Marketplace ---

class ListingNotFoundError(AppError):
    def __init__(self, listing_id: int) -> None:
        super().__init__(3001, f"Listing not found: {listing_id}", 404)


class ListingNotActiveError(AppError):
    def __init__(self, listing_id: int) -> None:
        super().__init__(3002, f"Listing not found or inactive: {listing_id}", 404)


class InsufficientQuantityError(AppError):
    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            3003,
            f"Insufficient quantity available: requested {requested}, available {available}",
            400,
        )


class InvalidPriceError(AppError):
    def __init__(self, price: object) -> None:
        super().__init__(3004, f"Price must be a finite number greater than 0 and at most 1e12, got {price}", 400)


class NotListingSellerError(AppError):
    def __init__(self, listing_id: int) -> None:
        super().__init__(3005, f"Unauthorized to modify listing {listing_id}", 403)


# --- 4xxx: User ---

class ProfileOwnershipError(AppError):
    def __init__(self, address: str) -> None:
        super().__init__(4001, f"Unauthorized to update profile {address}", 403)


class InvalidRankingTypeError(AppError):
    def __init__(self, ranking_type: str) -> None:
        super().__init__(
            4002,
            f"Invalid ranking type {ranking_type}. Must be: earnings, sales, or nfts",
            400,
        )


# --- 5xxx: Upstream ---

class ChainRPCError(AppError):
    def __init__(self, method: str, detail: str) -> None:
        super().__init__(5001, f"Base RPC {method} failed: {detail}", 502)


class InvalidRPCResponseError(AppError):
    def __init__(self, method: str) -> None:
        super().__init__(5002, f"Invalid {method} response", 400)


class IpfsUploadError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(5003, f"IPFS upload failed: {detail}", 502)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Too many requests, please try again later", 429)


class ValidationError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, detail, 400)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
