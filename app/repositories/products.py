"""Catalog repositories: products and gallery items."""

from sqlalchemy import case, or_, select
from sqlalchemy.exc import SQLAlchemyError

from app.models import GalleryItem, Product
from app.repositories.base import SQLRepository


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ProductRepository(SQLRepository[Product]):
    model = Product
    entity = "product"

    def list_page(
        self,
        new_only: bool = False,
        sale_only: bool = False,
        page: int = 1,
        limit: int = 20,
    ) -> list[Product]:
        stmt = select(Product)
        if new_only:
            stmt = stmt.where(Product.is_new.is_(True))
        if sale_only:
            stmt = stmt.where(Product.is_on_sale.is_(True))
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc())
        stmt = stmt.limit(limit).offset((page - 1) * limit)
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise self._fail(e) from e

    def get_by_slug(self, slug: str) -> Product | None:
        return self.find_one(slug=slug)

    def search(self, query: str, page: int = 1, limit: int = 20) -> list[Product]:
        """Case-insensitive match on title or description; titles starting with the query rank first."""
        escaped = _escape_like(query)
        contains = f"%{escaped}%"
        starts = f"{escaped}%"
        rank = case(
            (Product.title.ilike(starts, escape="\\"), 1),
            (Product.description.ilike(starts, escape="\\"), 2),
            else_=3,
        )
        stmt = (
            select(Product)
            .where(
                or_(
                    Product.title.ilike(contains, escape="\\"),
                    Product.description.ilike(contains, escape="\\"),
                )
            )
            .order_by(rank, Product.created_at.desc(), Product.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise self._fail(e) from e


class GalleryRepository(SQLRepository[GalleryItem]):
    model = GalleryItem
    entity = "gallery item"

    def list_by_category(self, category: str | None = None) -> list[GalleryItem]:
        if category:
            return self.list_all(GalleryItem.sort_order.asc(), category=category)
        return self.list_all(GalleryItem.sort_order.asc())
