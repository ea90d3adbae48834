"""004: create user_profiles table

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE user_profiles (
            address     VARCHAR(42)     PRIMARY KEY,
            bio         TEXT            NOT NULL DEFAULT '',
            avatar      TEXT            NOT NULL DEFAULT '',
            banner      TEXT            NOT NULL DEFAULT '',
            social      JSONB           NOT NULL DEFAULT '{}'::jsonb,
            verified    BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_profiles;")
