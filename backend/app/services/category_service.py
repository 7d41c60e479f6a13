"""
Inventory API: Category Service
=================================

What:  CRUD over tbl_kategori.
Who:   Called by the /api/kategori route handlers.

Delete behavior:
    Products in the deleted category are kept with id_kategori = NULL. The
    FK declares ON DELETE SET NULL; the explicit UPDATE in the same
    transaction gives the same result on stores that do not enforce it.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError
from app.models.category import Category
from app.models.product import Product
from app.schemas.category import CategoryCreated, CategoryIn, CategoryOut

logger = logging.getLogger(__name__)

RESOURCE = "Kategori"


class CategoryService:

    async def list_categories(self, db: AsyncSession) -> List[CategoryOut]:
        try:
            result = await db.execute(select(Category).order_by(Category.id_kategori))
            return [CategoryOut.model_validate(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "list_categories"}) from e

    async def get_category(self, db: AsyncSession, id_kategori: int) -> CategoryOut:
        try:
            category = await db.get(Category, id_kategori)
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %d: %s", id_kategori, str(e))
            raise DatabaseError(context={"id_kategori": id_kategori}) from e

        if category is None:
            raise NotFoundError(resource=RESOURCE, resource_id=id_kategori)
        return CategoryOut.model_validate(category)

    async def create_category(self, db: AsyncSession, data: CategoryIn) -> CategoryCreated:
        try:
            category = Category(nama_kategori=data.nama_kategori)
            db.add(category)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_category"}) from e

        logger.info("Category created: id_kategori=%d", category.id_kategori)
        return CategoryCreated(id_kategori=category.id_kategori)

    async def update_category(self, db: AsyncSession, id_kategori: int, data: CategoryIn) -> None:
        """Full-row update; NotFoundError when no row has this id."""
        try:
            result = await db.execute(
                update(Category)
                .where(Category.id_kategori == id_kategori)
                .values(nama_kategori=data.nama_kategori)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource=RESOURCE, resource_id=id_kategori)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating category %d: %s", id_kategori, str(e))
            raise DatabaseError(context={"id_kategori": id_kategori}) from e

        logger.info("Category updated: id_kategori=%d", id_kategori)

    async def delete_category(self, db: AsyncSession, id_kategori: int) -> None:
        try:
            await db.execute(
                update(Product)
                .where(Product.id_kategori == id_kategori)
                .values(id_kategori=None)
            )
            result = await db.execute(
                delete(Category).where(Category.id_kategori == id_kategori)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource=RESOURCE, resource_id=id_kategori)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting category %d: %s", id_kategori, str(e))
            raise DatabaseError(context={"id_kategori": id_kategori}) from e

        logger.info("Category deleted: id_kategori=%d", id_kategori)


category_service = CategoryService()
