"""
Inventory API: Product SQLAlchemy Model
=========================================

What:  ORM model for the `tbl_produk` table.
Who:   Used by ProductService (CRUD) and StockService (joins for display).

Table Design:
    - id_kategori: nullable FK. Deleting a category sets it to NULL rather
      than removing its products.
    - foto_produk: filename generated by FileService, relative to UPLOAD_DIR.
      NULL when the product has no photo. Client-supplied names never land
      here.
    - tgl_register: server date at creation; not changed by updates.
"""

from datetime import date
from typing import Optional

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Product(Base):
    __tablename__ = "tbl_produk"

    id_produk: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    id_kategori: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("tbl_kategori.id_kategori", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    nama_produk: Mapped[str] = mapped_column(String(150), nullable=False)
    kode_produk: Mapped[str] = mapped_column(String(50), nullable=False)

    foto_produk: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Stored photo filename under UPLOAD_DIR",
    )

    tgl_register: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        default=date.today,
    )

    def __repr__(self) -> str:
        return f"<Product(id_produk={self.id_produk}, kode_produk='{self.kode_produk}')>"
