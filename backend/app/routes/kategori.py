"""
Inventory API: Category Route Handlers
========================================

What:  CRUD endpoints under /api/kategori. All require a bearer token.
Who:   Admin clients managing the category list.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_user
from app.schemas.category import CategoryCreated, CategoryIn, CategoryOut
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.category_service import category_service

router = APIRouter(
    prefix="/api/kategori",
    tags=["Kategori"],
    dependencies=[Depends(require_user)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get("", response_model=List[CategoryOut], summary="List categories")
async def list_categories(db: AsyncSession = Depends(get_db_session)) -> List[CategoryOut]:
    return await category_service.list_categories(db)


@router.get(
    "/{id_kategori}",
    response_model=CategoryOut,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get one category",
)
async def get_category(
    id_kategori: int,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryOut:
    return await category_service.get_category(db, id_kategori)


@router.post(
    "",
    response_model=CategoryCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    payload: CategoryIn,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryCreated:
    return await category_service.create_category(db, payload)


@router.put(
    "/{id_kategori}",
    response_model=MessageResponse,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Rename a category",
)
async def update_category(
    id_kategori: int,
    payload: CategoryIn,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.update_category(db, id_kategori, payload)
    return MessageResponse(message="Kategori berhasil diupdate")


@router.delete(
    "/{id_kategori}",
    response_model=MessageResponse,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Delete a category",
    description="Products in the category are kept and become uncategorized.",
)
async def delete_category(
    id_kategori: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.delete_category(db, id_kategori)
    return MessageResponse(message="Kategori berhasil dihapus")
