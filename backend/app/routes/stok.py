"""
Inventory API: Stock Route Handlers
=====================================

What:  CRUD endpoints under /api/stok. All require a bearer token.
Who:   Admin clients recording quantities on hand.

`tgl_update` is set by the server on create and update; a value sent by the
client is ignored.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.middleware.auth import require_user
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.stock import StockCreated, StockIn, StockOut
from app.services.stock_service import stock_service

router = APIRouter(
    prefix="/api/stok",
    tags=["Stok"],
    dependencies=[Depends(require_user)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)


@router.get("", response_model=List[StockOut], summary="List stock records")
async def list_stock(db: AsyncSession = Depends(get_db_session)) -> List[StockOut]:
    return await stock_service.list_stock(db)


@router.get(
    "/{id_stok}",
    response_model=StockOut,
    responses={404: {"description": "Stock record not found", "model": ErrorResponse}},
    summary="Get one stock record",
)
async def get_stock(id_stok: int, db: AsyncSession = Depends(get_db_session)) -> StockOut:
    return await stock_service.get_stock(db, id_stok)


@router.post(
    "",
    response_model=StockCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid body or product", "model": ErrorResponse}},
    summary="Record a quantity for a product",
    description="jumlah_barang must be 0 or more; a negative quantity is rejected with 400.",
)
async def create_stock(
    payload: StockIn,
    db: AsyncSession = Depends(get_db_session),
) -> StockCreated:
    return await stock_service.create_stock(db, payload)


@router.put(
    "/{id_stok}",
    response_model=MessageResponse,
    responses={404: {"description": "Stock record not found", "model": ErrorResponse}},
    summary="Update a stock record",
    description="jumlah_barang must be 0 or more; a negative quantity is rejected with 400.",
)
async def update_stock(
    id_stok: int,
    payload: StockIn,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await stock_service.update_stock(db, id_stok, payload)
    return MessageResponse(message="Stok berhasil diupdate")


@router.delete(
    "/{id_stok}",
    response_model=MessageResponse,
    responses={404: {"description": "Stock record not found", "model": ErrorResponse}},
    summary="Delete a stock record",
)
async def delete_stock(id_stok: int, db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    await stock_service.delete_stock(db, id_stok)
    return MessageResponse(message="Stok berhasil dihapus")
