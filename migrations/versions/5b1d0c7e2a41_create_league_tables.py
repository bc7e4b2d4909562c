"""create league tables

Revision ID: 5b1d0c7e2a41
Revises:
Create Date: 2025-09-02 19:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1d0c7e2a41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("username", sa.String(), nullable=False, unique=True),
        sa.Column("email", sa.String(), nullable=True, unique=True),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
    )
    op.create_table(
        "drivers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("team_id", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_table(
        "grand_prix",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("track", sa.String(), nullable=True),
        sa.Column("has_sprint", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("quali_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("race_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sprint_quali_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sprint_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "predictions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("gp_id", sa.Integer(), sa.ForeignKey("grand_prix.id", ondelete="CASCADE"), nullable=False),
        sa.Column("pole", sa.String(), nullable=True),
        sa.Column("sprint_pole", sa.String(), nullable=True),
        sa.Column("sprint_podium", sa.JSON(), nullable=True),
        sa.Column("race_podium", sa.JSON(), nullable=True),
        sa.Column("fastest_lap", sa.String(), nullable=True),
        sa.Column("driver_of_the_day", sa.String(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_id", "gp_id", name="unique_prediction_user_gp"),
    )
    op.create_index("ix_predictions_gp_id", "predictions", ["gp_id"], unique=False)
    op.create_table(
        "official_results",
        sa.Column("gp_id", sa.Integer(), sa.ForeignKey("grand_prix.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("pole", sa.String(), nullable=True),
        sa.Column("sprint_pole", sa.String(), nullable=True),
        sa.Column("sprint_podium", sa.JSON(), nullable=True),
        sa.Column("race_podium", sa.JSON(), nullable=True),
        sa.Column("fastest_lap", sa.String(), nullable=True),
        sa.Column("driver_of_the_day", sa.String(), nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("published_sessions", sa.JSON(), nullable=False),
        sa.Column("manual_overrides", sa.JSON(), nullable=False),
    )
    op.create_table(
        "point_adjustments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("admin_id", sa.String(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_point_adjustments_user_id", "point_adjustments", ["user_id"], unique=False)
    op.create_table(
        "tournaments",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("invite_code", sa.String(), nullable=True, unique=True),
        sa.Column("creator_id", sa.String(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("member_ids", sa.JSON(), nullable=False),
        sa.Column("pending_member_ids", sa.JSON(), nullable=False),
    )
    op.create_table(
        "gp_scores",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("gp_id", sa.Integer(), sa.ForeignKey("grand_prix.id", ondelete="CASCADE"), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False),
        sa.Column("breakdown", sa.JSON(), nullable=False),
        sa.Column("computed_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_id", "gp_id", name="unique_score_user_gp"),
    )
    # Speeds the post-publish rescoring of one GP
    op.create_index("ix_gp_scores_gp", "gp_scores", ["gp_id"], unique=False)

def downgrade() -> None:
    op.drop_index("ix_gp_scores_gp", table_name="gp_scores")
    op.drop_table("gp_scores")
    op.drop_table("tournaments")
    op.drop_index("ix_point_adjustments_user_id", table_name="point_adjustments")
    op.drop_table("point_adjustments")
    op.drop_table("official_results")
    op.drop_index("ix_predictions_gp_id", table_name="predictions")
    op.drop_table("predictions")
    op.drop_table("grand_prix")
    op.drop_table("drivers")
    op.drop_table("users")
