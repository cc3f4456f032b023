"""accounts with status lifecycle and credentials

Revision ID: 0001_accounts_status_lifecycle
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_accounts_status_lifecycle"
down_revision = None
branch_labels = None
depends_on = None

ACCOUNT_STATUSES = ("inactive", "active", "banned", "deleted", "suspended")


def upgrade() -> None:
    account_status = postgresql.ENUM(*ACCOUNT_STATUSES, name="account_status_enum", create_type=False)
    account_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "accounts",
        sa.Column("id", sa.BigInteger(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(100), nullable=True),
        sa.Column("status", account_status, nullable=False, server_default="inactive"),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("banned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("suspended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_accounts"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )
    op.create_index("ix_accounts_status", "accounts", ["status"])

    op.create_table(
        "credentials",
        sa.Column("account_id", sa.BigInteger(), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("password_updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("confirmation_token", sa.String(128), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("confirmation_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("unconfirmed_email", sa.String(255), nullable=True),
        sa.Column("failed_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("unlock_token", sa.String(128), nullable=True),
        sa.Column("locked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sign_in_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("current_sign_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_sign_in_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_sign_in_ip", sa.String(45), nullable=True),
        sa.Column("last_sign_in_ip", sa.String(45), nullable=True),
        sa.PrimaryKeyConstraint("account_id", name="pk_credentials"),
        sa.ForeignKeyConstraint(
            ["account_id"], ["accounts.id"],
            name="fk_credentials_account_id_accounts",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("confirmation_token", name="uq_credentials_confirmation_token"),
        sa.UniqueConstraint("unlock_token", name="uq_credentials_unlock_token"),
    )


def downgrade() -> None:
    op.drop_table("credentials")
    op.drop_index("ix_accounts_status", table_name="accounts")
    op.drop_table("accounts")
    postgresql.ENUM(name="account_status_enum").drop(op.get_bind(), checkfirst=True)
