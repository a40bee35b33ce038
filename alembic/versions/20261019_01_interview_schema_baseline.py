"""Interview records and user preferences baseline

Revision ID: 20261019_01
Revises: None
Create Date: 2026-10-19
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261019_01"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "mock_interview",
        sa.Column("mock_interview_id", sa.BigInteger(), sa.Identity(always=False), primary_key=True),
        sa.Column("mock_id", sa.Text(), nullable=False),
        sa.Column("owner_identity", sa.Text(), nullable=False),
        sa.Column("job_position", sa.Text(), nullable=False),
        sa.Column("job_description", sa.Text(), nullable=False),
        sa.Column("job_experience", sa.Text(), nullable=False),
        sa.Column("question_payload", sa.Text(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
        sa.UniqueConstraint("mock_id", name="uq_mock_interview_mock_id"),
    )
    op.create_index(
        "ix_mock_interview_owner_created",
        "mock_interview",
        ["owner_identity", sa.text("created_at_utc DESC")],
    )

    op.create_table(
        "user_answer",
        sa.Column("user_answer_id", sa.BigInteger(), sa.Identity(always=False), primary_key=True),
        sa.Column("mock_id_ref", sa.Text(), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("correct_answer", sa.Text(), nullable=True),
        sa.Column("user_answer", sa.Text(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("rating", sa.Text(), nullable=True),
        sa.Column("owner_identity", sa.Text(), nullable=False),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
    )
    op.create_index(
        "ix_user_answer_owner_created",
        "user_answer",
        ["owner_identity", sa.text("created_at_utc DESC")],
    )
    op.create_index("ix_user_answer_mock_id_ref", "user_answer", ["mock_id_ref"])

    op.create_table(
        "user_preferences",
        sa.Column("user_preferences_id", sa.BigInteger(), sa.Identity(always=False), primary_key=True),
        sa.Column("owner_identity", sa.Text(), nullable=False),
        sa.Column("dark_mode", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("notifications", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("sound", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("voice_response", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("interview_duration_minutes", sa.Integer(), nullable=False, server_default=sa.text("15")),
        sa.Column("auto_save", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("privacy_mode", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("volume", sa.Integer(), nullable=False, server_default=sa.text("80")),
        sa.Column("created_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.UniqueConstraint("owner_identity", name="uq_user_preferences_owner_identity"),
        sa.CheckConstraint("volume BETWEEN 0 AND 100", name="ck_user_preferences_volume"),
        sa.CheckConstraint("interview_duration_minutes >= 1", name="ck_user_preferences_duration"),
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("user_preferences")
    op.drop_index("ix_user_answer_mock_id_ref", table_name="user_answer")
    op.drop_index("ix_user_answer_owner_created", table_name="user_answer")
    op.drop_table("user_answer")
    op.drop_index("ix_mock_interview_owner_created", table_name="mock_interview")
    op.drop_table("mock_interview")
