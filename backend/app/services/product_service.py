"""
Inventory API: Product Service
================================

What:  CRUD over tbl_produk, including the product photo.
How:   Reads left-join tbl_kategori for `nama_kategori` and add `foto_url`.
       Writes go through FileService for the photo and commit once per
       request, so related rows change together.
Who:   Called by the /api/produk route handlers.

Workflows:
    create: validate + store photo → insert product (+ first stock row when
            an initial quantity is given) → commit
    update: load product → validate + store new photo → update columns →
            commit → delete the replaced photo
    delete: load product → delete its stock rows → delete product → commit →
            delete the photo

Error Recovery:
    Photo rejected          → ValidationError (400), nothing written
    Insert/update fails     → the newly stored photo is deleted, then the
                              error propagates (FK violation → 400,
                              anything else → DatabaseError 500)
    Old photo delete fails  → logged only; the database change stands
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.category import Category
from app.models.product import Product
from app.models.stock import Stock
from app.schemas.product import ProductCreated, ProductOut, ProductUpdated
from app.services.file_service import FileService

logger = logging.getLogger(__name__)

RESOURCE = "Produk"


def _product_query():
    return select(Product, Category.nama_kategori).outerjoin(
        Category, Product.id_kategori == Category.id_kategori
    )


class ProductService:
    """
    Every method takes the request's session, the FileService and, where a
    URL is returned, the request's base URL (scheme + host) for `foto_url`.
    """

    def _to_out(
        self,
        product: Product,
        nama_kategori: Optional[str],
        files: FileService,
        base_url: str,
    ) -> ProductOut:
        return ProductOut(
            id_produk=product.id_produk,
            id_kategori=product.id_kategori,
            nama_produk=product.nama_produk,
            kode_produk=product.kode_produk,
            foto_produk=product.foto_produk,
            tgl_register=product.tgl_register,
            nama_kategori=nama_kategori,
            foto_url=files.public_url(base_url, product.foto_produk),
        )

    async def _load(self, db: AsyncSession, id_produk: int) -> Product:
        try:
            product = await db.get(Product, id_produk)
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %d: %s", id_produk, str(e))
            raise DatabaseError(context={"id_produk": id_produk}) from e
        if product is None:
            raise NotFoundError(resource=RESOURCE, resource_id=id_produk)
        return product

    async def list_products(
        self, db: AsyncSession, files: FileService, base_url: str
    ) -> List[ProductOut]:
        try:
            result = await db.execute(_product_query().order_by(Product.id_produk))
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_products"}) from e

        return [self._to_out(product, nama, files, base_url) for product, nama in rows]

    async def get_product(
        self, db: AsyncSession, id_produk: int, files: FileService, base_url: str
    ) -> ProductOut:
        try:
            result = await db.execute(_product_query().where(Product.id_produk == id_produk))
            row = result.first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %d: %s", id_produk, str(e))
            raise DatabaseError(context={"id_produk": id_produk}) from e

        if row is None:
            raise NotFoundError(resource=RESOURCE, resource_id=id_produk)
        product, nama_kategori = row
        return self._to_out(product, nama_kategori, files, base_url)

    async def create_product(
        self,
        db: AsyncSession,
        files: FileService,
        base_url: str,
        *,
        nama_produk: str,
        kode_produk: str,
        id_kategori: Optional[int] = None,
        photo: Optional[UploadFile] = None,
        jumlah_awal: Optional[int] = None,
    ) -> ProductCreated:
        """
        Inserts a product, optionally with its photo and first stock row.

        The category reference is not looked up; a store that enforces the
        foreign key turns a bad id into a ValidationError.
        """
        stored_name: Optional[str] = None
        if photo is not None:
            stored_name = (await files.save_upload(photo)).filename

        try:
            product = Product(
                id_kategori=id_kategori,
                nama_produk=nama_produk,
                kode_produk=kode_produk,
                foto_produk=stored_name,
                tgl_register=date.today(),
            )
            db.add(product)
            await db.flush()

            if jumlah_awal is not None:
                db.add(
                    Stock(
                        id_produk=product.id_produk,
                        jumlah_barang=jumlah_awal,
                        tgl_update=date.today(),
                    )
                )
                await db.flush()

            await db.commit()
        except IntegrityError as e:
            await files.delete(stored_name)
            raise ValidationError(
                message="Kategori tidak valid",
                field="id_kategori",
                context={"id_kategori": id_kategori},
            ) from e
        except SQLAlchemyError as e:
            await files.delete(stored_name)
            logger.error("Database error creating product: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_product"}) from e

        logger.info(
            "Product created: id_produk=%d photo=%s initial_stock=%s",
            product.id_produk,
            stored_name,
            jumlah_awal,
        )
        return ProductCreated(
            id_produk=product.id_produk,
            foto_url=files.public_url(base_url, stored_name),
        )

    async def update_product(
        self,
        db: AsyncSession,
        files: FileService,
        base_url: str,
        id_produk: int,
        *,
        nama_produk: str,
        kode_produk: str,
        id_kategori: Optional[int] = None,
        photo: Optional[UploadFile] = None,
    ) -> ProductUpdated:
        """
        Full-row update of the editable columns.

        Without `photo` the stored filename is left as it is. With `photo`
        the new file replaces it and the old file is removed once the update
        has committed.
        """
        product = await self._load(db, id_produk)
        previous_photo = product.foto_produk

        stored_name: Optional[str] = None
        if photo is not None:
            stored_name = (await files.save_upload(photo)).filename

        try:
            product.id_kategori = id_kategori
            product.nama_produk = nama_produk
            product.kode_produk = kode_produk
            if stored_name is not None:
                product.foto_produk = stored_name
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            await files.delete(stored_name)
            raise ValidationError(
                message="Kategori tidak valid",
                field="id_kategori",
                context={"id_kategori": id_kategori},
            ) from e
        except SQLAlchemyError as e:
            await files.delete(stored_name)
            logger.error("Database error updating product %d: %s", id_produk, str(e))
            raise DatabaseError(context={"id_produk": id_produk}) from e

        if stored_name is not None and previous_photo and previous_photo != stored_name:
            await files.delete(previous_photo)

        logger.info("Product updated: id_produk=%d photo_replaced=%s", id_produk, stored_name is not None)
        return ProductUpdated(foto_url=files.public_url(base_url, product.foto_produk))

    async def delete_product(self, db: AsyncSession, files: FileService, id_produk: int) -> None:
        """Deletes the product and its stock rows together, then its photo."""
        product = await self._load(db, id_produk)
        photo = product.foto_produk

        try:
            await db.execute(delete(Stock).where(Stock.id_produk == id_produk))
            await db.delete(product)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %d: %s", id_produk, str(e))
            raise DatabaseError(context={"id_produk": id_produk}) from e

        await files.delete(photo)
        logger.info("Product deleted: id_produk=%d", id_produk)


product_service = ProductService()
