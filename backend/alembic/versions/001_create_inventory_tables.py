"""Create inventory tables

Revision ID: 001
Revises: None
Create Date: 2024-06-10 00:00:00.000000+00:00

What:  Creates tbl_user, tbl_kategori, tbl_produk and tbl_stok.
How:   Portable column types only, so the same revision runs on PostgreSQL,
       MySQL and SQLite.

Rollback: downgrade() drops all four tables (destructive, all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tbl_user",
        sa.Column("id_user", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nama_user", sa.String(100), nullable=False, comment="Display name"),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt hash (cost 10)"),
        sa.PrimaryKeyConstraint("id_user", name="pk_tbl_user"),
    )
    # Unique: one account per (lowercased) address
    op.create_index("ix_tbl_user_email", "tbl_user", ["email"], unique=True)

    op.create_table(
        "tbl_kategori",
        sa.Column("id_kategori", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nama_kategori", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("id_kategori", name="pk_tbl_kategori"),
    )

    op.create_table(
        "tbl_produk",
        sa.Column("id_produk", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id_kategori", sa.Integer(), nullable=True),
        sa.Column("nama_produk", sa.String(150), nullable=False),
        sa.Column("kode_produk", sa.String(50), nullable=False),
        sa.Column(
            "foto_produk",
            sa.String(255),
            nullable=True,
            comment="Stored photo filename under UPLOAD_DIR",
        ),
        sa.Column("tgl_register", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id_produk", name="pk_tbl_produk"),
        sa.ForeignKeyConstraint(
            ["id_kategori"],
            ["tbl_kategori.id_kategori"],
            name="fk_tbl_produk_kategori",
            ondelete="SET NULL",
        ),
    )
    op.create_index("ix_tbl_produk_id_kategori", "tbl_produk", ["id_kategori"])

    op.create_table(
        "tbl_stok",
        sa.Column("id_stok", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id_produk", sa.Integer(), nullable=False),
        sa.Column("jumlah_barang", sa.Integer(), nullable=False),
        sa.Column("tgl_update", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id_stok", name="pk_tbl_stok"),
        sa.ForeignKeyConstraint(
            ["id_produk"],
            ["tbl_produk.id_produk"],
            name="fk_tbl_stok_produk",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_tbl_stok_id_produk", "tbl_stok", ["id_produk"])


def downgrade() -> None:
    op.drop_index("ix_tbl_stok_id_produk", table_name="tbl_stok")
    op.drop_table("tbl_stok")
    op.drop_index("ix_tbl_produk_id_kategori", table_name="tbl_produk")
    op.drop_table("tbl_produk")
    op.drop_table("tbl_kategori")
    op.drop_index("ix_tbl_user_email", table_name="tbl_user")
    op.drop_table("tbl_user")
