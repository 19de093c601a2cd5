"""Product Routes — listing filters, basket stock check, and product management.

Invariants:
    - GET /products newest first; category exact, search case-insensitive, lowStock < 5
    - Basket add over stock → 400, no basket row, stock unchanged
    - Basket add within stock → 200, exactly one basket row, stock decremented
    - DELETE/PATCH of a missing id still succeed
    - Unsupported methods → 405 {"error": "Method not allowed"}
    - Malformed bodies → 400 before the store is touched
"""

from sqlalchemy import func, select

from storefront.models.basket_item import BasketItem
from storefront.models.product import Product


async def _basket_rows(session_factory) -> list[BasketItem]:
    async with session_factory() as s:
        return list((await s.execute(select(BasketItem))).scalars().all())


async def _stock(session_factory, product_id: int) -> int | None:
    async with session_factory() as s:
        return await s.scalar(
            select(Product.quantity).where(Product.id == product_id),
        )


# --- GET /products ------------------------------------------------------------

async def test_list_returns_all_newest_first(client, seed_products):
    res = await client.get("/products")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("application/json")
    names = [p["name"] for p in res.json()]
    assert names == [
        "Oat Milk", "apple pie", "Sparkling Water", "Pineapple Juice", "Banana", "Green Apple",
    ]


async def test_list_rows_carry_product_fields(client, seed_products):
    res = await client.get("/products")
    row = res.json()[0]
    assert set(row) == {"id", "name", "quantity", "category", "created_at"}


async def test_category_filter_is_exact(client, seed_products):
    res = await client.get("/products", params={"category": "fruit"})
    assert {p["name"] for p in res.json()} == {"Green Apple", "Banana"}

    res = await client.get("/products", params={"category": "Fruit"})
    assert res.json() == []


async def test_search_is_case_insensitive_substring(client, seed_products):
    res = await client.get("/products", params={"search": "APPLE"})
    assert [p["name"] for p in res.json()] == [
        "apple pie", "Pineapple Juice", "Green Apple",
    ]


async def test_search_treats_wildcards_literally(client, seed_products):
    res = await client.get("/products", params={"search": "%"})
    assert res.json() == []


async def test_low_stock_filter_by_presence(client, seed_products):
    res = await client.get("/products?lowStock")
    assert {p["name"] for p in res.json()} == {
        "Banana", "Pineapple Juice", "apple pie",
    }
    assert all(p["quantity"] < 5 for p in res.json())


async def test_low_stock_excludes_quantity_at_threshold(client, seed_products):
    res = await client.get("/products", params={"lowStock": ""})
    assert "Oat Milk" not in {p["name"] for p in res.json()}

    res = await client.get("/products", params={"category": "drinks"})
    assert "Oat Milk" in {p["name"] for p in res.json()}


async def test_filters_intersect(client, seed_products):
    res = await client.get(
        "/products",
        params={"category": "drinks", "search": "apple", "lowStock": "true"},
    )
    assert [p["name"] for p in res.json()] == ["Pineapple Juice"]


async def test_empty_filters_are_ignored(client, seed_products):
    res = await client.get("/products", params={"category": "", "search": ""})
    assert len(res.json()) == 6


async def test_list_empty_catalog(client):
    res = await client.get("/products")
    assert res.status_code == 200
    assert res.json() == []


# --- POST /products (basket) --------------------------------------------------

async def test_basket_add_within_stock(
    client, seed_products, test_session_factory,
):
    banana = seed_products["Banana"]
    res = await client.post(
        "/products",
        json={"session_id": "sess-1", "product_id": banana.id, "quantity": 3},
    )
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Product added to basket!"}

    rows = await _basket_rows(test_session_factory)
    assert len(rows) == 1
    assert (rows[0].session_id, rows[0].product_id, rows[0].quantity) == (
        "sess-1", banana.id, 3,
    )
    assert await _stock(test_session_factory, banana.id) == 0


async def test_basket_add_over_stock_is_rejected(
    client, seed_products, test_session_factory,
):
    banana = seed_products["Banana"]
    res = await client.post(
        "/products",
        json={"session_id": "sess-1", "product_id": banana.id, "quantity": 4},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Not enough stock available"}
    assert await _basket_rows(test_session_factory) == []
    assert await _stock(test_session_factory, banana.id) == 3


async def test_repeated_basket_adds_are_not_merged(
    client, seed_products, test_session_factory,
):
    apple = seed_products["Green Apple"]
    body = {"session_id": "sess-1", "product_id": apple.id, "quantity": 2}
    assert (await client.post("/products", json=body)).status_code == 200
    assert (await client.post("/products", json=body)).status_code == 200

    assert len(await _basket_rows(test_session_factory)) == 2
    assert await _stock(test_session_factory, apple.id) == 6


async def test_sequential_basket_adds_cannot_overcommit(
    client, seed_products, test_session_factory,
):
    juice = seed_products["Pineapple Juice"]
    body = {"session_id": "s", "product_id": juice.id, "quantity": 2}
    first = await client.post("/products", json=body)
    second = await client.post("/products", json=body)
    assert first.status_code == 200
    assert second.status_code == 400
    assert len(await _basket_rows(test_session_factory)) == 1


async def test_basket_add_unknown_product_is_store_failure(client, test_session_factory):
    res = await client.post(
        "/products",
        json={"session_id": "sess-1", "product_id": 999, "quantity": 1},
    )
    assert res.status_code == 500
    assert res.json() == {"error": "Product '999' not found"}
    assert await _basket_rows(test_session_factory) == []


async def test_basket_add_zero_quantity_is_validation_error(client, seed_products):
    res = await client.post(
        "/products",
        json={"session_id": "s", "product_id": seed_products["Banana"].id, "quantity": 0},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request data"


# --- POST /products (new product) ---------------------------------------------

async def test_create_product(client, test_session_factory):
    res = await client.post(
        "/products", json={"name": "Kiwi", "quantity": 12, "category": "fruit"},
    )
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Product added successfully!"}

    async with test_session_factory() as s:
        product = await s.scalar(select(Product).where(Product.name == "Kiwi"))
    assert product.quantity == 12
    assert product.category == "fruit"
    assert product.created_at is not None


async def test_post_with_unrecognized_body_is_400(client, test_session_factory):
    res = await client.post("/products", json={"foo": "bar"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Invalid request data"
    assert set(body) == {"error", "details"}
    assert set(body["details"][0]) == {"field", "message", "type"}
    async with test_session_factory() as s:
        assert await s.scalar(select(func.count()).select_from(Product)) == 0


async def test_post_with_non_json_body_is_400(client):
    res = await client.post(
        "/products", content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400


# --- DELETE / PATCH -----------------------------------------------------------

async def test_delete_product(client, seed_products, test_session_factory):
    banana = seed_products["Banana"]
    res = await client.request("DELETE", "/products", json={"id": banana.id})
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Product deleted successfully!"}
    assert await _stock(test_session_factory, banana.id) is None


async def test_delete_missing_product_still_succeeds(client):
    res = await client.request("DELETE", "/products", json={"id": 12345})
    assert res.status_code == 200
    assert res.json()["success"] is True


async def test_delete_without_id_is_400(client):
    res = await client.request("DELETE", "/products", json={})
    assert res.status_code == 400


async def test_update_quantity(client, seed_products, test_session_factory):
    apple = seed_products["Green Apple"]
    res = await client.patch("/products", json={"id": apple.id, "quantity": 42})
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Product updated successfully!"}
    assert await _stock(test_session_factory, apple.id) == 42


async def test_update_missing_product_still_succeeds(client):
    res = await client.patch("/products", json={"id": 12345, "quantity": 1})
    assert res.status_code == 200


# --- Method handling ----------------------------------------------------------

async def test_put_is_method_not_allowed(client):
    res = await client.put("/products", json={"id": 1})
    assert res.status_code == 405
    assert res.json() == {"error": "Method not allowed"}
    assert res.headers["content-type"].startswith("application/json")


async def test_get_on_post_only_route_is_method_not_allowed(client):
    res = await client.get("/products/order")
    assert res.status_code == 405
    assert res.json() == {"error": "Method not allowed"}


async def test_unknown_path_is_404_json(client):
    res = await client.get("/nope")
    assert res.status_code == 404
    assert "error" in res.json()
