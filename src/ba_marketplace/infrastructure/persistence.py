"""ListingRepository / PurchaseRepository — PostgreSQL implementations.

All listing mutations are single conditional UPDATE ... RETURNING statements.
A result of 0 rows means a business constraint failed (not active, wrong
seller, insufficient quantity); the service decides which error to raise.
A sale runs the decrement and the receipt INSERT in one transaction.
"""

from collections.abc import Callable
from datetime import datetime

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.ba_marketplace.domain.models import Listing, NewListing, Purchase

# ---------------------------------------------------------------------------
# SQL: listings
# ---------------------------------------------------------------------------

_LISTING_COLUMNS = """
    id, nft_id, seller, price, quantity, listed_at, expires_at,
    status, updated_at, cancelled_at
"""

_INSERT_LISTING_SQL = text(f"""
    INSERT INTO listings (nft_id, seller, price, quantity, listed_at, expires_at, status)
    VALUES (:nft_id, :seller, :price, :quantity, :listed_at, :expires_at, 'active')
    RETURNING {_LISTING_COLUMNS}
""")

_GET_LISTING_SQL = text(f"SELECT {_LISTING_COLUMNS} FROM listings WHERE id = :listing_id")

_LIST_ACTIVE_SQL = text(f"""
    SELECT {_LISTING_COLUMNS} FROM listings WHERE status = 'active' ORDER BY id
""")

_LIST_ALL_SQL = text(f"SELECT {_LISTING_COLUMNS} FROM listings ORDER BY id")

_LIST_BY_SELLER_SQL = text(f"""
    SELECT {_LISTING_COLUMNS}
    FROM listings
    WHERE seller = :seller
      AND (NOT CAST(:active_only AS BOOLEAN) OR status = 'active')
    ORDER BY id
""")

_UPDATE_PRICE_SQL = text(f"""
    UPDATE listings
    SET price = :price,
        updated_at = :now
    WHERE id = :listing_id AND seller = :seller AND status = 'active'
    RETURNING {_LISTING_COLUMNS}
""")

_CANCEL_SQL = text(f"""
    UPDATE listings
    SET status = 'cancelled',
        cancelled_at = :now,
        updated_at = :now
    WHERE id = :listing_id AND seller = :seller AND status = 'active'
    RETURNING {_LISTING_COLUMNS}
""")

_DECREMENT_SQL = text(f"""
    UPDATE listings
    SET quantity = quantity - :quantity,
        status = CASE WHEN quantity - :quantity = 0 THEN 'sold' ELSE status END,
        updated_at = :now
    WHERE id = :listing_id AND status = 'active' AND quantity >= :quantity
    RETURNING {_LISTING_COLUMNS}
""")

# ---------------------------------------------------------------------------
# SQL: purchases
# ---------------------------------------------------------------------------

_PURCHASE_COLUMNS = """
    id, listing_id, nft_id, buyer, seller, quantity, price_per_unit,
    total_price, platform_fee, seller_amount, created_at, status
"""

_INSERT_PURCHASE_SQL = text("""
    INSERT INTO purchases
        (id, listing_id, nft_id, buyer, seller, quantity, price_per_unit,
         total_price, platform_fee, seller_amount, created_at, status)
    VALUES
        (:id, :listing_id, :nft_id, :buyer, :seller, :quantity, :price_per_unit,
         :total_price, :platform_fee, :seller_amount, :created_at, :status)
""")

_LIST_PURCHASES_SQL = text(f"SELECT {_PURCHASE_COLUMNS} FROM purchases ORDER BY created_at, id")

_LIST_PURCHASES_BY_NFT_SQL = text(f"""
    SELECT {_PURCHASE_COLUMNS} FROM purchases WHERE nft_id = :nft_id ORDER BY created_at, id
""")

_LIST_PURCHASES_BY_SELLER_SQL = text(f"""
    SELECT {_PURCHASE_COLUMNS} FROM purchases WHERE seller = :seller ORDER BY created_at, id
""")

_LIST_PURCHASES_BY_BUYER_SQL = text(f"""
    SELECT {_PURCHASE_COLUMNS} FROM purchases WHERE buyer = :buyer ORDER BY created_at, id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_listing(row: object) -> Listing:
    return Listing(
        id=row.id,  # type: ignore[attr-defined]
        nft_id=row.nft_id,  # type: ignore[attr-defined]
        seller=row.seller,  # type: ignore[attr-defined]
        price=float(row.price),  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        listed_at=row.listed_at,  # type: ignore[attr-defined]
        expires_at=row.expires_at,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
        cancelled_at=row.cancelled_at,  # type: ignore[attr-defined]
    )


def _purchase_params(purchase: Purchase) -> dict:
    return {
        "id": purchase.id,
        "listing_id": purchase.listing_id,
        "nft_id": purchase.nft_id,
        "buyer": purchase.buyer,
        "seller": purchase.seller,
        "quantity": purchase.quantity,
        "price_per_unit": purchase.price_per_unit,
        "total_price": purchase.total_price,
        "platform_fee": purchase.platform_fee,
        "seller_amount": purchase.seller_amount,
        "created_at": purchase.timestamp,
        "status": purchase.status,
    }


def _row_to_purchase(row: object) -> Purchase:
    return Purchase(
        id=row.id,  # type: ignore[attr-defined]
        listing_id=row.listing_id,  # type: ignore[attr-defined]
        nft_id=row.nft_id,  # type: ignore[attr-defined]
        buyer=row.buyer,  # type: ignore[attr-defined]
        seller=row.seller,  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        price_per_unit=float(row.price_per_unit),  # type: ignore[attr-defined]
        total_price=float(row.total_price),  # type: ignore[attr-defined]
        platform_fee=int(row.platform_fee),  # type: ignore[attr-defined]
        seller_amount=float(row.seller_amount),  # type: ignore[attr-defined]
        timestamp=row.created_at,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class ListingRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = session_factory

    async def create(self, draft: NewListing) -> Listing:
        async with self._sessions.begin() as db:
            result = await db.execute(
                _INSERT_LISTING_SQL,
                {
                    "nft_id": draft.nft_id,
                    "seller": draft.seller,
                    "price": draft.price,
                    "quantity": draft.quantity,
                    "listed_at": draft.listed_at,
                    "expires_at": draft.expires_at,
                },
            )
            return _row_to_listing(result.fetchone())

    async def get(self, listing_id: int) -> Listing | None:
        async with self._sessions.begin() as db:
            result = await db.execute(_GET_LISTING_SQL, {"listing_id": listing_id})
            row = result.fetchone()
            return _row_to_listing(row) if row else None

    async def list_active(self) -> list[Listing]:
        async with self._sessions.begin() as db:
            result = await db.execute(_LIST_ACTIVE_SQL)
            return [_row_to_listing(row) for row in result.fetchall()]

    async def list_all(self) -> list[Listing]:
        async with self._sessions.begin() as db:
            result = await db.execute(_LIST_ALL_SQL)
            return [_row_to_listing(row) for row in result.fetchall()]

    async def list_by_seller(self, seller: str, active_only: bool) -> list[Listing]:
        async with self._sessions.begin() as db:
            result = await db.execute(
                _LIST_BY_SELLER_SQL, {"seller": seller, "active_only": active_only}
            )
            return [_row_to_listing(row) for row in result.fetchall()]

    async def update_price(
        self, listing_id: int, seller: str, price: float, now: datetime
    ) -> Listing | None:
        return await self._mutate(
            _UPDATE_PRICE_SQL,
            {"listing_id": listing_id, "seller": seller, "price": price, "now": now},
        )

    async def cancel(self, listing_id: int, seller: str, now: datetime) -> Listing | None:
        return await self._mutate(
            _CANCEL_SQL, {"listing_id": listing_id, "seller": seller, "now": now}
        )

    async def record_sale(
        self,
        listing_id: int,
        quantity: int,
        now: datetime,
        build_receipt: Callable[[Listing], Purchase],
    ) -> tuple[Listing, Purchase] | None:
        async with self._sessions.begin() as db:
            result = await db.execute(
                _DECREMENT_SQL, {"listing_id": listing_id, "quantity": quantity, "now": now}
            )
            row = result.fetchone()
            if row is None:
                return None
            taken = _row_to_listing(row)
            purchase = build_receipt(taken)
            await db.execute(_INSERT_PURCHASE_SQL, _purchase_params(purchase))
            return taken, purchase

    async def _mutate(self, stmt: object, params: dict) -> Listing | None:
        async with self._sessions.begin() as db:
            result = await db.execute(stmt, params)  # type: ignore[arg-type]
            row = result.fetchone()
            return _row_to_listing(row) if row else None


class PurchaseRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = session_factory

    async def add(self, purchase: Purchase) -> Purchase:
        async with self._sessions.begin() as db:
            await db.execute(_INSERT_PURCHASE_SQL, _purchase_params(purchase))
        return purchase

    async def list_all(self) -> list[Purchase]:
        return await self._select(_LIST_PURCHASES_SQL, {})

    async def list_by_nft(self, nft_id: int) -> list[Purchase]:
        return await self._select(_LIST_PURCHASES_BY_NFT_SQL, {"nft_id": nft_id})

    async def list_by_seller(self, seller: str) -> list[Purchase]:
        return await self._select(_LIST_PURCHASES_BY_SELLER_SQL, {"seller": seller})

    async def list_by_buyer(self, buyer: str) -> list[Purchase]:
        return await self._select(_LIST_PURCHASES_BY_BUYER_SQL, {"buyer": buyer})

    async def _select(self, stmt: object, params: dict) -> list[Purchase]:
        async with self._sessions.begin() as db:
            result = await db.execute(stmt, params)  # type: ignore[arg-type]
            return [_row_to_purchase(row) for row in result.fetchall()]
