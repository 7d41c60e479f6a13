"""ORM model for the `tbl_kategori` table."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Category(Base):
    __tablename__ = "tbl_kategori"

    id_kategori: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nama_kategori: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id_kategori={self.id_kategori}, nama_kategori='{self.nama_kategori}')>"
