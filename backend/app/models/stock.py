"""ORM model for the `tbl_stok` table: one stock level record per row."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Stock(Base):
    """
    A quantity on hand for a product, stamped with the date it was last set.

    Rows belong to exactly one product and are removed together with it
    (ProductService deletes them in the same transaction; the FK cascade
    covers direct SQL deletes).
    """

    __tablename__ = "tbl_stok"

    id_stok: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    id_produk: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tbl_produk.id_produk", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    jumlah_barang: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    tgl_update: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)

    def __repr__(self) -> str:
        return f"<Stock(id_stok={self.id_stok}, id_produk={self.id_produk}, jumlah_barang={self.jumlah_barang})>"
