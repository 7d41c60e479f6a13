"""
Inventory API: Stock Service
==============================

What:  CRUD over tbl_stok.
How:   Reads left-join tbl_produk so each row carries the product's name and
       code. Create and update stamp `tgl_update` with the server's date;
       the client never supplies it.
Who:   Called by the /api/stok route handlers.

A product may have any number of stock rows; nothing here sums or
reconciles them.
"""

import logging
from datetime import date
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.product import Product
from app.models.stock import Stock
from app.schemas.stock import StockCreated, StockIn, StockOut

logger = logging.getLogger(__name__)

RESOURCE = "Stok"


def _stock_query():
    return select(
        Stock.id_stok,
        Stock.id_produk,
        Stock.jumlah_barang,
        Stock.tgl_update,
        Product.nama_produk,
        Product.kode_produk,
    ).outerjoin(Product, Stock.id_produk == Product.id_produk)


class StockService:

    async def list_stock(self, db: AsyncSession) -> List[StockOut]:
        try:
            result = await db.execute(_stock_query().order_by(Stock.id_stok))
            return [StockOut(**row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing stock: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_stock"}) from e

    async def get_stock(self, db: AsyncSession, id_stok: int) -> StockOut:
        try:
            result = await db.execute(_stock_query().where(Stock.id_stok == id_stok))
            row = result.mappings().first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching stock %d: %s", id_stok, str(e))
            raise DatabaseError(context={"id_stok": id_stok}) from e

        if row is None:
            raise NotFoundError(resource=RESOURCE, resource_id=id_stok)
        return StockOut(**row)

    async def create_stock(self, db: AsyncSession, data: StockIn) -> StockCreated:
        """
        Records a quantity for a product.

        Raises:
            ValidationError: the product reference is refused by the store
            DatabaseError: any other store failure
        """
        try:
            stock = Stock(
                id_produk=data.id_produk,
                jumlah_barang=data.jumlah_barang,
                tgl_update=date.today(),
            )
            db.add(stock)
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            raise ValidationError(
                message="Produk tidak valid",
                field="id_produk",
                context={"id_produk": data.id_produk},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error creating stock: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_stock"}) from e

        logger.info("Stock created: id_stok=%d id_produk=%d", stock.id_stok, stock.id_produk)
        return StockCreated(id_stok=stock.id_stok)

    async def update_stock(self, db: AsyncSession, id_stok: int, data: StockIn) -> None:
        try:
            result = await db.execute(
                update(Stock)
                .where(Stock.id_stok == id_stok)
                .values(
                    id_produk=data.id_produk,
                    jumlah_barang=data.jumlah_barang,
                    tgl_update=date.today(),
                )
            )
            if result.rowcount == 0:
                raise NotFoundError(resource=RESOURCE, resource_id=id_stok)
            await db.commit()
        except IntegrityError as e:
            raise ValidationError(
                message="Produk tidak valid",
                field="id_produk",
                context={"id_produk": data.id_produk},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error updating stock %d: %s", id_stok, str(e))
            raise DatabaseError(context={"id_stok": id_stok}) from e

        logger.info("Stock updated: id_stok=%d jumlah_barang=%d", id_stok, data.jumlah_barang)

    async def delete_stock(self, db: AsyncSession, id_stok: int) -> None:
        try:
            result = await db.execute(delete(Stock).where(Stock.id_stok == id_stok))
            if result.rowcount == 0:
                raise NotFoundError(resource=RESOURCE, resource_id=id_stok)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting stock %d: %s", id_stok, str(e))
            raise DatabaseError(context={"id_stok": id_stok}) from e

        logger.info("Stock deleted: id_stok=%d", id_stok)


stock_service = StockService()
