"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "product",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("name", sa.String(length=1024), nullable=False),
        sa.Column("sku", sa.String(length=64), nullable=False),
        sa.Column("product_type", sa.String(length=64), nullable=False),
        sa.Column("category_id", sa.String(length=128), nullable=True),
        sa.Column("main_product_id", sa.String(length=128), nullable=True),
        sa.Column("gtin", sa.String(length=64), nullable=True),
        sa.Column("vendor", sa.String(length=128), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("can_be_purchased", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("weight", sa.Numeric(18, 4), nullable=True),
        sa.Column("max_quantity", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_product_sku", "product", ["sku"], unique=True)
    op.create_index("ix_product_main_product_id", "product", ["main_product_id"])

    op.create_table(
        "editorial_review",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("product_id", sa.String(length=128), sa.ForeignKey("product.id", ondelete="CASCADE"), nullable=False),
        sa.Column("review_type", sa.String(length=128), nullable=False),
        sa.Column("language_code", sa.String(length=64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_editorial_review_product_id", "editorial_review", ["product_id"])

    op.create_table(
        "import_run",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("file_path", sa.String(length=1024), nullable=False),
        sa.Column("data_type", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="queued"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("total_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("processed_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("error_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("errors", sa.JSON(), nullable=True),
        sa.Column("report_url", sa.String(length=1024), nullable=True),
        sa.Column("cancel_requested", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("finished_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_import_run_status", "import_run", ["status"])

def downgrade():
    op.drop_index("ix_import_run_status", table_name="import_run")
    op.drop_table("import_run")
    op.drop_index("ix_editorial_review_product_id", table_name="editorial_review")
    op.drop_table("editorial_review")
    op.drop_index("ix_product_main_product_id", table_name="product")
    op.drop_index("ix_product_sku", table_name="product")
    op.drop_table("product")
