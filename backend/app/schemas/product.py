"""
Inventory API: Product Response Schemas
=========================================

Product create/update take multipart form fields (declared on the route),
so only the responses are modelled here.

`foto_url` is computed per request from the serving scheme/host and the
stored filename; it is null when the product has no photo.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class ProductOut(BaseModel):
    id_produk: int
    id_kategori: Optional[int] = None
    nama_produk: str
    kode_produk: str
    foto_produk: Optional[str] = Field(default=None, description="Stored photo filename")
    tgl_register: date
    nama_kategori: Optional[str] = Field(default=None, description="Joined from tbl_kategori")
    foto_url: Optional[str] = Field(default=None, description="Absolute photo URL")


class ProductCreated(BaseModel):
    message: str = Field(default="Produk berhasil ditambahkan")
    id_produk: int
    foto_url: Optional[str] = None


class ProductUpdated(BaseModel):
    message: str = Field(default="Produk berhasil diupdate")
    foto_url: Optional[str] = None
