"""API tests for the public catalog: products, search, gallery and info pages."""

import unittest

from app.api.routes.products import parse_pagination
from tests.api_support import ApiTestCase


def _product(slug: str, title: str, description: str = "", **kwargs: object) -> dict:
    values = {
        "slug": slug,
        "title": title,
        "description": description,
        "price": 4990,
        "images": [f"/uploads/products/{slug}.jpg"],
    }
    values.update(kwargs)
    return values


class TestParsePagination(unittest.TestCase):
    """Malformed or out-of-range paging falls back to page 1 / limit 20; limit is capped at 100."""

    def test_defaults(self) -> None:
        self.assertEqual(parse_pagination(None, None), (1, 20))

    def test_valid_values(self) -> None:
        self.assertEqual(parse_pagination("3", "50"), (3, 50))

    def test_garbage_falls_back(self) -> None:
        self.assertEqual(parse_pagination("abc", "-5"), (1, 20))
        self.assertEqual(parse_pagination("0", "0"), (1, 20))

    def test_limit_is_capped(self) -> None:
        self.assertEqual(parse_pagination("1", "1000"), (1, 100))


class TestProducts(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        with self.store() as store:
            store.products.create(_product("black-tee", "Black Tee", "Cotton tee", is_new=True))
            store.products.create(_product("hoodie", "Hoodie", "Warm black hoodie", is_on_sale=True))
            store.products.create(_product("cap", "Cap", "Snapback"))

    def test_list_all(self) -> None:
        resp = self.client.get("/api/products")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["items"]), 3)

    def test_items_use_camel_case(self) -> None:
        item = self.client.get("/api/products/black-tee").json()["item"]
        self.assertIn("isNew", item)
        self.assertIn("isOnSale", item)
        self.assertTrue(item["isNew"])
        self.assertEqual(item["images"], ["/uploads/products/black-tee.jpg"])

    def test_filter_new_and_sale(self) -> None:
        new = self.client.get("/api/products", params={"new": "true"}).json()["items"]
        sale = self.client.get("/api/products", params={"sale": "1"}).json()["items"]
        self.assertEqual([p["slug"] for p in new], ["black-tee"])
        self.assertEqual([p["slug"] for p in sale], ["hoodie"])

    def test_limit_and_bad_page(self) -> None:
        resp = self.client.get("/api/products", params={"limit": "2", "page": "oops"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()["items"]), 2)

    def test_page_past_end_is_empty(self) -> None:
        resp = self.client.get("/api/products", params={"limit": "2", "page": "5"})
        self.assertEqual(resp.json()["items"], [])

    def test_get_unknown_slug_is_404(self) -> None:
        resp = self.client.get("/api/products/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"detail": "Product not found."})


class TestSearch(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        with self.store() as store:
            store.products.create(_product("hoodie", "Hoodie", "Warm black hoodie"))
            store.products.create(_product("black-tee", "Black Tee", "Cotton tee"))
            store.products.create(_product("cap", "Cap", "Snapback"))

    def test_query_required(self) -> None:
        self.assertEqual(self.client.get("/api/products/search").status_code, 400)
        self.assertEqual(self.client.get("/api/products/search", params={"q": "  "}).status_code, 400)

    def test_case_insensitive_title_prefix_first(self) -> None:
        resp = self.client.get("/api/products/search", params={"q": "BLACK"})
        self.assertEqual(resp.status_code, 200)
        slugs = [p["slug"] for p in resp.json()["items"]]
        self.assertEqual(slugs, ["black-tee", "hoodie"])

    def test_like_wildcards_are_literal(self) -> None:
        resp = self.client.get("/api/products/search", params={"q": "%"})
        self.assertEqual(resp.json()["items"], [])


class TestGallery(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        with self.store() as store:
            store.gallery.create({"category": "tattoo", "title": "B", "image": "/b.jpg", "sort_order": 2})
            store.gallery.create({"category": "tattoo", "title": "A", "image": "/a.jpg", "sort_order": 1})
            store.gallery.create({"category": "tokyo", "title": "C", "image": "/c.jpg", "sort_order": 0})

    def test_by_category_in_order(self) -> None:
        items = self.client.get("/api/gallery", params={"category": "tattoo"}).json()["items"]
        self.assertEqual([i["title"] for i in items], ["A", "B"])
        self.assertEqual(items[0]["order"], 1)

    def test_without_category_returns_all(self) -> None:
        items = self.client.get("/api/gallery").json()["items"]
        self.assertEqual(len(items), 3)

    def test_unknown_category_is_empty(self) -> None:
        self.assertEqual(self.client.get("/api/gallery", params={"category": "x"}).json(), {"items": []})


class TestPages(ApiTestCase):
    def test_known_slug(self) -> None:
        resp = self.client.get("/api/pages/delivery")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"slug": "delivery", "title": "Delivery", "content": ""})

    def test_unknown_slug_is_400(self) -> None:
        self.assertEqual(self.client.get("/api/pages/about").status_code, 400)

    def test_known_slug_without_row_is_404(self) -> None:
        with self.store() as store:
            store.pages.delete("returns")
        self.assertEqual(self.client.get("/api/pages/returns").status_code, 404)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")
