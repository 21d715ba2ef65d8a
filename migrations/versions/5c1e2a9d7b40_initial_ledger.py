"""initial ledger

Revision ID: 5c1e2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:44.318206

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def _profile_fk(name: str, nullable: bool = False, ondelete: str = "CASCADE") -> sa.Column:
    return sa.Column(
        name, sa.Uuid(), sa.ForeignKey("profiles.id", ondelete=ondelete), nullable=nullable
    )


def upgrade() -> None:
    """Create the profile, wallet, credit and social tables."""
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.Text(), nullable=False, unique=True),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("akorfa_score", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_xp", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("last_active_date", sa.Date(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "wallets",
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("points_balance", sa.Integer(), nullable=False),
        sa.Column("coins_balance", sa.Integer(), nullable=False),
        sa.Column("total_earned", sa.Integer(), nullable=False),
        sa.Column("total_withdrawn", sa.Numeric(12, 2), nullable=False),
        sa.Column("creator_level", sa.Integer(), nullable=False),
        sa.Column("follower_count", sa.Integer(), nullable=False),
        sa.Column("can_monetize", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("points_balance >= 0", name="ck_wallets_points_non_negative"),
        sa.CheckConstraint("coins_balance >= 0", name="ck_wallets_coins_non_negative"),
        sa.CheckConstraint("creator_level BETWEEN 1 AND 4", name="ck_wallets_creator_level"),
    )

    op.create_table(
        "points_log",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id"),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("reference_id", sa.Uuid(), nullable=True),
        sa.Column("reference_type", sa.Text(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_points_log_user_id_created_at", "points_log", ["user_id", "created_at"])

    op.create_table(
        "coin_transactions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id"),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("transaction_type", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("reference_id", sa.Uuid(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index(
        "ix_coin_transactions_user_id_created_at",
        "coin_transactions",
        ["user_id", "created_at"],
    )

    op.create_table(
        "payouts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id"),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("points_converted", sa.Integer(), nullable=False),
        sa.Column("payment_method", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_payouts_user_id", "payouts", ["user_id"])

    op.create_table(
        "credit_scores",
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("tier", sa.Text(), nullable=False),
        sa.Column("credit_limit", sa.Integer(), nullable=False),
        sa.Column("total_loans_completed", sa.Integer(), nullable=False),
        sa.Column("on_time_payments", sa.Integer(), nullable=False),
        sa.Column("late_payments", sa.Integer(), nullable=False),
        sa.Column("total_loans_defaulted", sa.Integer(), nullable=False),
        _timestamp("last_calculated_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "loans",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id"),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("interest_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("total_due", sa.Integer(), nullable=False),
        sa.Column("term_days", sa.Integer(), nullable=False),
        _timestamp("due_date"),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("amount_repaid", sa.Integer(), nullable=False),
        _timestamp("repaid_at", nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_loans_user_id_status", "loans", ["user_id", "status"])

    op.create_table(
        "loan_repayments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "loan_id", sa.Uuid(), sa.ForeignKey("loans.id", ondelete="CASCADE"), nullable=False
        ),
        _profile_fk("user_id"),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("is_late", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_loan_repayments_loan_id", "loan_repayments", ["loan_id"])

    op.create_table(
        "follows",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("follower_id"),
        _profile_fk("following_id"),
        _timestamp("created_at"),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
    )
    op.create_index("ix_follows_following_id", "follows", ["following_id"])

    op.create_table(
        "gifts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("sender_id"),
        _profile_fk("receiver_id"),
        sa.Column("post_id", sa.Uuid(), nullable=True),
        sa.Column("gift_type", sa.Text(), nullable=False),
        sa.Column("coin_amount", sa.Integer(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("ix_gifts_sender_id", "gifts", ["sender_id"])
    op.create_index("ix_gifts_receiver_id", "gifts", ["receiver_id"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id"),
        _profile_fk("actor_id", nullable=True, ondelete="SET NULL"),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("reference_id", sa.Uuid(), nullable=True),
        sa.Column("reference_type", sa.Text(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])

    op.create_table(
        "user_events",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id"),
        sa.Column("event_type", sa.Text(), nullable=False),
        sa.Column("points_earned", sa.Integer(), nullable=False),
        sa.Column("metadata", sa.JSON(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_user_events_user_id_created_at", "user_events", ["user_id", "created_at"])

    op.create_table(
        "assessments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _profile_fk("user_id", nullable=True),
        sa.Column("layer_scores", sa.JSON(), nullable=False),
        sa.Column("overall_score", sa.Float(), nullable=False),
        sa.Column("insights", sa.Text(), nullable=True),
        _timestamp("created_at"),
    )


def downgrade() -> None:
    """Drop every ledger table."""
    for table in (
        "assessments",
        "user_events",
        "notifications",
        "gifts",
        "follows",
        "loan_repayments",
        "loans",
        "credit_scores",
        "payouts",
        "coin_transactions",
        "points_log",
        "wallets",
        "profiles",
    ):
        op.drop_table(table)
