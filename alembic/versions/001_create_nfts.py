"""001: create nfts table

Revision ID: 001
Revises: 
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE nfts (
            id                  BIGSERIAL       PRIMARY KEY,
            name                VARCHAR(200)    NOT NULL,
            description         TEXT            NOT NULL,
            image               TEXT            NOT NULL,
            image_hash          CHAR(64)        NOT NULL,
            category            VARCHAR(64),
            royalty_percentage  NUMERIC(5, 2)   NOT NULL DEFAULT 0,
            creator             VARCHAR(42)     NOT NULL,
            owner               VARCHAR(42)     NOT NULL,
            metadata_hash       VARCHAR(128)    NOT NULL,
            metadata_uri        TEXT            NOT NULL,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),

            CONSTRAINT ck_nfts_royalty CHECK (royalty_percentage BETWEEN 0 AND 25)
        );
    """)
    op.execute("CREATE INDEX idx_nfts_category ON nfts (category);")
    op.execute("CREATE INDEX idx_nfts_creator ON nfts (creator);")
    op.execute("CREATE INDEX idx_nfts_owner ON nfts (owner);")
    op.execute("CREATE INDEX idx_nfts_image_hash ON nfts (image_hash);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS nfts;")
