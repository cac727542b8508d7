"""Business schema: users, companies, monthly figures and yearly targets."""

from __future__ import annotations

from alembic import context, op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _dialect_name() -> str:
    bind = op.get_bind()
    if bind is not None:
        return bind.dialect.name
    ctx = context.get_context()
    return ctx.dialect.name if ctx is not None else ""


def _money(nullable: bool = False) -> dict:
    options: dict = {"nullable": nullable}
    if not nullable:
        options["server_default"] = sa.text("0")
    return options


def upgrade() -> None:
    uuid_type = sa.CHAR(length=36)
    if _dialect_name() == "postgresql":
        uuid_type = postgresql.UUID(as_uuid=True)

    op.create_table(
        "users",
        sa.Column("user_id", uuid_type, primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("selected_company_id", uuid_type, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "companies",
        sa.Column("company_id", uuid_type, primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("capitale_sociale", sa.Numeric(14, 2), **_money()),
        sa.Column(
            "user_id",
            uuid_type,
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("capitale_sociale >= 0", name="ck_companies_capital_non_negative"),
    )
    op.create_index("companies_user_created_idx", "companies", ["user_id", "created_at"])

    op.create_table(
        "monthly_business_data",
        sa.Column("monthly_data_id", uuid_type, primary_key=True),
        sa.Column(
            "company_id",
            uuid_type,
            sa.ForeignKey("companies.company_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("ricavi", sa.Numeric(14, 2), **_money()),
        sa.Column("costi_diretti", sa.Numeric(14, 2), **_money()),
        sa.Column("costi_totali", sa.Numeric(14, 2), **_money()),
        sa.Column("compenso_imprenditore", sa.Numeric(14, 2), **_money()),
        sa.Column("margine", sa.Numeric(14, 2), **_money()),
        sa.Column("utile_netto", sa.Numeric(14, 2), **_money()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("company_id", "year", "month", name="monthly_business_data_period_key"),
        sa.CheckConstraint("month >= 1 AND month <= 12", name="ck_monthly_business_data_month"),
    )

    op.create_table(
        "business_targets",
        sa.Column("target_id", uuid_type, primary_key=True),
        sa.Column(
            "company_id",
            uuid_type,
            sa.ForeignKey("companies.company_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("target_ricavi", sa.Numeric(14, 2), **_money(nullable=True)),
        sa.Column("target_margine", sa.Numeric(14, 2), **_money(nullable=True)),
        sa.Column("target_utile_netto", sa.Numeric(14, 2), **_money(nullable=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("company_id", "year", name="business_targets_company_year_key"),
    )


def downgrade() -> None:
    op.drop_table("business_targets")
    op.drop_table("monthly_business_data")
    op.drop_index("companies_user_created_idx", table_name="companies")
    op.drop_table("companies")
    op.drop_table("users")
