"""002: create listings table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # nft_id is not a foreign key: listings may reference NFTs minted elsewhere.
    op.execute("""
        CREATE TABLE listings (
            id              BIGSERIAL       PRIMARY KEY,
            nft_id          BIGINT          NOT NULL,
            seller          VARCHAR(42)     NOT NULL,
            price           NUMERIC(36, 18) NOT NULL,
            quantity        INT             NOT NULL,
            listed_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            expires_at      TIMESTAMPTZ     NOT NULL,
            status          VARCHAR(20)     NOT NULL DEFAULT 'active',
            updated_at      TIMESTAMPTZ,
            cancelled_at    TIMESTAMPTZ,

            CONSTRAINT ck_listings_price CHECK (price > 0),
            CONSTRAINT ck_listings_quantity CHECK (quantity >= 0),
            CONSTRAINT ck_listings_status CHECK (status IN ('active', 'sold', 'cancelled'))
        );
    """)
    op.execute("CREATE INDEX idx_listings_status ON listings (status);")
    op.execute("CREATE INDEX idx_listings_seller ON listings (seller);")
    op.execute("CREATE INDEX idx_listings_nft ON listings (nft_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS listings;")
