"""Category request/response schemas."""

from pydantic import BaseModel, Field


class CategoryIn(BaseModel):
    nama_kategori: str = Field(min_length=1, max_length=100)


class CategoryOut(BaseModel):
    id_kategori: int
    nama_kategori: str

    model_config = {"from_attributes": True}


class CategoryCreated(BaseModel):
    message: str = Field(default="Kategori berhasil ditambahkan")
    id_kategori: int
