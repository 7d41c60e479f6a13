"""Stock request/response schemas."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class StockIn(BaseModel):
    id_produk: int = Field(ge=1)
    jumlah_barang: int = Field(ge=0, description="Quantity on hand; negative values are rejected with 400")


class StockOut(BaseModel):
    id_stok: int
    id_produk: int
    jumlah_barang: int
    tgl_update: date
    # Joined from tbl_produk; null when the product row is gone
    nama_produk: Optional[str] = None
    kode_produk: Optional[str] = None


class StockCreated(BaseModel):
    message: str = Field(default="Stok berhasil ditambahkan")
    id_stok: int
