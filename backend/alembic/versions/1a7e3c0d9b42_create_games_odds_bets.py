"""create nfl_games, odds and bets

Revision ID: 1a7e3c0d9b42
Revises:
Create Date: 2025-12-22 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1a7e3c0d9b42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "nfl_games",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("external_id", sa.Text(), nullable=False),
        sa.Column("home_team", sa.Text(), nullable=False),
        sa.Column("away_team", sa.Text(), nullable=False),
        sa.Column("commence_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("home_score", sa.Integer(), nullable=True),
        sa.Column("away_score", sa.Integer(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_id", name="uq_game_external_id"),
    )
    op.create_table(
        "odds",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("home_moneyline", sa.Integer(), nullable=True),
        sa.Column("away_moneyline", sa.Integer(), nullable=True),
        sa.Column("home_spread", sa.Float(), nullable=True),
        sa.Column("home_spread_odds", sa.Integer(), nullable=True),
        sa.Column("away_spread", sa.Float(), nullable=True),
        sa.Column("away_spread_odds", sa.Integer(), nullable=True),
        sa.Column("total_over_line", sa.Float(), nullable=True),
        sa.Column("total_over_odds", sa.Integer(), nullable=True),
        sa.Column("total_under_line", sa.Float(), nullable=True),
        sa.Column("total_under_odds", sa.Integer(), nullable=True),
        sa.Column("captured_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["game_id"], ["nfl_games.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_odds_game_captured", "odds", ["game_id", "captured_at"])
    op.create_table(
        "bets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("game_id", sa.Uuid(), nullable=False),
        sa.Column("group_id", sa.Uuid(), nullable=True),
        sa.Column("bet_type", sa.Text(), nullable=False),
        sa.Column("team_bet_on", sa.Text(), nullable=False),
        sa.Column("wager_amount", sa.BigInteger(), nullable=False),
        sa.Column("odds_at_bet", sa.Integer(), nullable=False),
        sa.Column("potential_payout", sa.BigInteger(), nullable=False),
        sa.Column(
            "bet_status",
            sa.Enum("pending", "won", "lost", "cancelled", name="bet_status"),
            nullable=False,
        ),
        sa.Column("payout_amount", sa.BigInteger(), nullable=False),
        sa.Column("placed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("settled_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["game_id"], ["nfl_games.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("bets")
    op.drop_index("ix_odds_game_captured", table_name="odds")
    op.drop_table("odds")
    op.drop_table("nfl_games")
    sa.Enum(name="bet_status").drop(op.get_bind(), checkfirst=True)
