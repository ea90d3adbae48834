"""003: create purchases table

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE purchases (
            id              VARCHAR(64)     PRIMARY KEY,
            listing_id      BIGINT          NOT NULL REFERENCES listings (id),
            nft_id          BIGINT          NOT NULL,
            buyer           VARCHAR(42)     NOT NULL,
            seller          VARCHAR(42)     NOT NULL,
            quantity        INT             NOT NULL,
            price_per_unit  NUMERIC(36, 18) NOT NULL,
            total_price     NUMERIC(36, 18) NOT NULL,
            platform_fee    BIGINT          NOT NULL DEFAULT 0,
            seller_amount   NUMERIC(36, 18) NOT NULL,
            status          VARCHAR(20)     NOT NULL DEFAULT 'pending',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),

            CONSTRAINT ck_purchases_quantity CHECK (quantity > 0)
        );
    """)
    op.execute("CREATE INDEX idx_purchases_nft ON purchases (nft_id, created_at);")
    op.execute("CREATE INDEX idx_purchases_seller ON purchases (seller, created_at);")
    op.execute("CREATE INDEX idx_purchases_buyer ON purchases (buyer, created_at);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS purchases;")
