"""create student ledger tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


ENUMS = {
    "account_status": ("clearance", "probation", "defaulter"),
    "enrollment_status": ("active", "deactivated", "graduated", "suspended"),
    "billing_status": ("Pending", "Partially Paid", "Paid", "Void"),
    "payment_type": ("payment", "adjustment"),
    "payment_status": ("pending", "approved", "rejected"),
    "account_group": ("Cash", "Accounts", "Bank Accounts", "Card"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps() -> list:
    return [
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        "students",
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("pay_code", sa.String(50), nullable=True),
        sa.Column("programme", sa.String(255), nullable=True),
        sa.Column("semester", sa.String(100), nullable=False),
        sa.Column("previous_balance", sa.Numeric(12, 2), nullable=False),
        sa.Column("bursary", sa.String(100), nullable=False),
        sa.Column("services", postgresql.JSONB(), nullable=False),
        sa.Column("physical_requirements", postgresql.JSONB(), nullable=False),
        sa.Column("account_status", _enum("account_status"), nullable=True),
        sa.Column("clearance_history", postgresql.JSONB(), nullable=False),
        sa.Column("status", _enum("enrollment_status"), nullable=False),
        sa.Column("enrollment_date", sa.Date(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_students_id"), "students", ["id"], unique=False)
    op.create_index(op.f("ix_students_pay_code"), "students", ["pay_code"], unique=True)
    op.create_index(op.f("ix_students_semester"), "students", ["semester"], unique=False)
    op.create_index(op.f("ix_students_status"), "students", ["status"], unique=False)

    op.create_table(
        "promotion_history",
        sa.Column("student_id", sa.UUID(), nullable=False),
        sa.Column("promoted_at", sa.DateTime(), nullable=False),
        sa.Column("from_semester", sa.String(100), nullable=False),
        sa.Column("to_semester", sa.String(100), nullable=False),
        sa.Column("previous_balance", sa.Numeric(12, 2), nullable=False),
        sa.Column("initial_previous_balance", sa.Numeric(12, 2), nullable=True),
        sa.Column("snapshot_arrears", sa.Numeric(12, 2), nullable=True),
        sa.Column("bursary_snapshot", sa.String(100), nullable=True),
        sa.Column("services_snapshot", postgresql.JSONB(), nullable=False),
        sa.Column("requirements_snapshot", postgresql.JSONB(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_promotion_history_id"), "promotion_history", ["id"], unique=False)
    op.create_index(op.f("ix_promotion_history_student_id"), "promotion_history", ["student_id"], unique=False)

    op.create_table(
        "billings",
        sa.Column("student_id", sa.UUID(), nullable=False),
        sa.Column("term", sa.String(100), nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("is_brought_forward", sa.Boolean(), nullable=True),
        sa.Column("billed_on", sa.Date(), nullable=False),
        sa.Column("service_id", sa.String(100), nullable=True),
        sa.Column("status", _enum("billing_status"), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("delete_reason", sa.String(500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_billings_id"), "billings", ["id"], unique=False)
    op.create_index(op.f("ix_billings_student_id"), "billings", ["student_id"], unique=False)
    op.create_index(op.f("ix_billings_term"), "billings", ["term"], unique=False)
    op.create_index(op.f("ix_billings_deleted_at"), "billings", ["deleted_at"], unique=False)

    op.create_table(
        "payments",
        sa.Column("student_id", sa.UUID(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("term", sa.String(100), nullable=True),
        sa.Column("method", sa.String(100), nullable=False),
        sa.Column("allocations", postgresql.JSONB(), nullable=False),
        sa.Column("reference", sa.String(255), nullable=True),
        sa.Column("receipt_number", sa.String(100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", _enum("payment_type"), nullable=False),
        sa.Column("status", _enum("payment_status"), nullable=False),
        sa.Column("paid_on", sa.Date(), nullable=False),
        sa.Column("recorded_by", sa.String(255), nullable=True),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        sa.Column("delete_reason", sa.String(500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_payments_id"), "payments", ["id"], unique=False)
    op.create_index(op.f("ix_payments_student_id"), "payments", ["student_id"], unique=False)
    op.create_index(op.f("ix_payments_term"), "payments", ["term"], unique=False)
    op.create_index(op.f("ix_payments_deleted_at"), "payments", ["deleted_at"], unique=False)

    op.create_table(
        "bursaries",
        sa.Column("id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("value", sa.Numeric(12, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "services",
        sa.Column("id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "accounts",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("group", _enum("account_group"), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_accounts_id"), "accounts", ["id"], unique=False)

    op.create_table(
        "audit_logs",
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("user", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_audit_logs_id"), "audit_logs", ["id"], unique=False)
    op.create_index(op.f("ix_audit_logs_category"), "audit_logs", ["category"], unique=False)


def downgrade() -> None:
    for table in ("audit_logs", "accounts", "services", "bursaries", "payments", "billings",
                  "promotion_history", "students"):
        op.drop_table(table)
    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
