"""
Inventory API: Product Route Handlers
=======================================

What:  CRUD endpoints under /api/produk. All require a bearer token.
How:   Create and update take multipart/form-data: text fields plus an
       optional image under `foto_produk`. Reads return JSON with each
       product's category name and absolute photo URL.
Who:   Admin clients managing the product catalogue.

Request Flow (create/update):
    1. FastAPI parses the form; bad field types → 400 via the global handler
    2. The route picks the single uploaded photo, if any
    3. ProductService validates + stores the photo and writes the rows
    4. Response carries `foto_url` built from this request's scheme and host

Upload rules (enforced in FileService):
    - extension and declared type: jpeg, jpg, png or gif
    - at most MAX_FILE_SIZE bytes (default 5MB)
    - at most one file per request
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import ValidationError
from app.middleware.auth import require_user
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.product import ProductCreated, ProductOut, ProductUpdated
from app.services.file_service import UPLOAD_FIELD, FileService, get_file_service
from app.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/produk",
    tags=["Produk"],
    dependencies=[Depends(require_user)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


def _single_photo(uploads: Optional[List[UploadFile]]) -> Optional[UploadFile]:
    """
    Browsers send an empty part for an untouched file input; those are
    dropped. More than one real file is rejected.
    """
    photos = [upload for upload in uploads or [] if upload.filename]
    if len(photos) > 1:
        raise ValidationError(
            message="Hanya satu foto produk yang diperbolehkan",
            field=UPLOAD_FIELD,
            context={"count": len(photos)},
        )
    return photos[0] if photos else None


@router.get("", response_model=List[ProductOut], summary="List products")
async def list_products(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    files: FileService = Depends(get_file_service),
) -> List[ProductOut]:
    return await product_service.list_products(db, files, str(request.base_url))


@router.get(
    "/{id_produk}",
    response_model=ProductOut,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get one product",
)
async def get_product(
    id_produk: int,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    files: FileService = Depends(get_file_service),
) -> ProductOut:
    return await product_service.get_product(db, id_produk, files, str(request.base_url))


@router.post(
    "",
    response_model=ProductCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid fields or photo", "model": ErrorResponse}},
    summary="Create a product",
    description=(
        "Multipart form. `foto_produk` is an optional jpeg/jpg/png/gif image up to 5MB. "
        "`jumlah_awal`, when given, also records the product's first stock row."
    ),
)
async def create_product(
    request: Request,
    nama_produk: str = Form(..., min_length=1, max_length=150),
    kode_produk: str = Form(..., min_length=1, max_length=50),
    id_kategori: Optional[int] = Form(None, ge=1),
    jumlah_awal: Optional[int] = Form(None, ge=0),
    foto_produk: Optional[List[UploadFile]] = File(None, description="Product photo"),
    db: AsyncSession = Depends(get_db_session),
    files: FileService = Depends(get_file_service),
) -> ProductCreated:
    photo = _single_photo(foto_produk)
    logger.info(
        "Create product: kode_produk=%s photo=%s",
        kode_produk,
        photo.filename if photo else None,
    )
    return await product_service.create_product(
        db,
        files,
        str(request.base_url),
        nama_produk=nama_produk,
        kode_produk=kode_produk,
        id_kategori=id_kategori,
        photo=photo,
        jumlah_awal=jumlah_awal,
    )


@router.put(
    "/{id_produk}",
    response_model=ProductUpdated,
    responses={
        400: {"description": "Invalid fields or photo", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Update a product",
    description="Without `foto_produk` the current photo is kept.",
)
async def update_product(
    id_produk: int,
    request: Request,
    nama_produk: str = Form(..., min_length=1, max_length=150),
    kode_produk: str = Form(..., min_length=1, max_length=50),
    id_kategori: Optional[int] = Form(None, ge=1),
    foto_produk: Optional[List[UploadFile]] = File(None, description="Replacement photo"),
    db: AsyncSession = Depends(get_db_session),
    files: FileService = Depends(get_file_service),
) -> ProductUpdated:
    photo = _single_photo(foto_produk)
    return await product_service.update_product(
        db,
        files,
        str(request.base_url),
        id_produk,
        nama_produk=nama_produk,
        kode_produk=kode_produk,
        id_kategori=id_kategori,
        photo=photo,
    )


@router.delete(
    "/{id_produk}",
    response_model=MessageResponse,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Delete a product",
    description="Also deletes the product's stock records and its photo.",
)
async def delete_product(
    id_produk: int,
    db: AsyncSession = Depends(get_db_session),
    files: FileService = Depends(get_file_service),
) -> MessageResponse:
    await product_service.delete_product(db, files, id_produk)
    return MessageResponse(message="Produk berhasil dihapus")
