"""Static info pages, keyed by slug."""

from typing import Any

from app.models import Page
from app.repositories.base import SQLRepository


class PageRepository(SQLRepository[Page]):
    model = Page
    entity = "page"

    def _to_key(self, entity_id: Any) -> Any | None:
        slug = str(entity_id or "").strip()
        return slug or None

    def get_by_slug(self, slug: str) -> Page:
        return self.get(slug)

    def list_pages(self) -> list[Page]:
        return self.list_all(Page.slug.asc())
