"""Create users table

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `users` table backing authentication and the user-info route.
How:   Columns mirror portico/models/user.py; username and email are unique.

Rollback: downgrade() drops the table entirely (destructive, all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users table with constraints and lookup indexes."""
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        # PBKDF2 hash: base64(salt + digest)
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'ACTIVATED'"),
        ),
        # JSON list of role names, e.g. ["USER", "ADMIN"]
        sa.Column("roles", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # Sign-in looks users up case-insensitively by username or email
    op.create_index("idx_users_username_lower", "users", [sa.text("lower(username)")])
    op.create_index("idx_users_email_lower", "users", [sa.text("lower(email)")])


def downgrade() -> None:
    """Drop the users table. Destructive: all accounts are lost."""
    op.drop_index("idx_users_email_lower", table_name="users")
    op.drop_index("idx_users_username_lower", table_name="users")
    op.drop_table("users")
