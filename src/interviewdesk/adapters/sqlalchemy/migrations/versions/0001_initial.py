"""Create reference and interview tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_OUTCOMES = (
    "SCHEDULED",
    "PASSED",
    "REJECTED",
    "AWAITING_RESPONSE",
    "OFFER_RECEIVED",
    "OFFER_ACCEPTED",
    "OFFER_DECLINED",
    "WITHDREW",
)


def _reference_table(name: str, *extra: sa.Column[object]) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("remote_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        *extra,
        sa.PrimaryKeyConstraint("id", name=f"pk_{name}"),
    )
    op.create_index(f"ix_{name}_remote_id", name, ["remote_id"])


def upgrade() -> None:
    _reference_table(
        "company",
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    _reference_table("stage")
    _reference_table("stage_method")

    op.create_table(
        "interview",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("remote_id", sa.Integer(), nullable=True),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("stage_id", sa.Integer(), nullable=True),
        sa.Column("stage_method_id", sa.Integer(), nullable=True),
        sa.Column("job_title", sa.String(), nullable=False),
        sa.Column("application_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("client_company", sa.String(), nullable=True),
        sa.Column("interviewer", sa.String(), nullable=True),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "outcome",
            sa.Enum(*_OUTCOMES, name="interviewoutcome", native_enum=False, length=32),
            nullable=True,
        ),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("link", sa.String(), nullable=True),
        sa.Column("job_posting_link", sa.String(), nullable=True),
        sa.Column("metadata", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_interview"),
        sa.ForeignKeyConstraint(
            ["company_id"],
            ["company.id"],
            name="fk_interview_company_id_company",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["stage_id"],
            ["stage.id"],
            name="fk_interview_stage_id_stage",
            ondelete="SET NULL",
        ),
        sa.ForeignKeyConstraint(
            ["stage_method_id"],
            ["stage_method.id"],
            name="fk_interview_stage_method_id_stage_method",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_interview_remote_id", "interview", ["remote_id"])
    op.create_index("ix_interview_company_id", "interview", ["company_id"])
    op.create_index("ix_interview_stage_id", "interview", ["stage_id"])
    op.create_index("ix_interview_stage_method_id", "interview", ["stage_method_id"])


def downgrade() -> None:
    op.drop_index("ix_interview_stage_method_id", table_name="interview")
    op.drop_index("ix_interview_stage_id", table_name="interview")
    op.drop_index("ix_interview_company_id", table_name="interview")
    op.drop_index("ix_interview_remote_id", table_name="interview")
    op.drop_table("interview")
    for name in ("stage_method", "stage", "company"):
        op.drop_index(f"ix_{name}_remote_id", table_name=name)
        op.drop_table(name)
