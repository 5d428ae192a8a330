"""HTTP endpoints: catalog, cart, checkout, tours and about."""

from datetime import date, timedelta
from decimal import Decimal

from museum.data.models.product import ProductModel
from museum.domain.slots import MORNING
from museum.services.about_service import AboutService


VISIT_DAY = (date.today() + timedelta(days=5)).isoformat()

CHECKOUT_FIELDS = {
    "customer_name": "Asha Mehta",
    "email": "asha@example.com",
    "address_line1": "12 Law Garden Road",
    "city": "Ahmedabad",
    "postal_code": "380006",
    "notes": ["Gift wrap please"],
}


def tour_form(**overrides):
    data = {
        "contact_name": "Ravi Patel",
        "email": "ravi@example.com",
        "group_type": "school",
        "preferred_date": VISIT_DAY,
        "preferred_slot": MORNING,
        "adults_count": 1,
    }
    data.update(overrides)
    return data


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestCatalogEndpoints:
    def test_lists_only_active_products(self, client, make_product):
        active = make_product(name="Indigo Ajrakh Shawl", images=["https://img.example.com/a.jpg"])
        make_product(name="Hidden Draft", status="draft")

        response = client.get("/shop/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data] == [active.id]
        assert data[0]["images"][0]["file_url"] == "https://img.example.com/a.jpg"
        assert data[0]["images"][0]["is_primary"] is True

    def test_featured_filter(self, client, make_product):
        make_product(name="Plain")
        featured = make_product(name="Star", is_featured=True)

        response = client.get("/shop/products", params={"featured": "true"})

        assert [p["id"] for p in response.json()] == [featured.id]

    def test_product_by_slug(self, client, make_product):
        product = make_product(name="Pichwai Lotus Painting", metadata={"era": "20th century"})

        response = client.get(f"/shop/products/{product.slug}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Pichwai Lotus Painting"
        assert data["slug"].startswith("pichwai-lotus-painting-")
        assert data["metadata"] == {"era": "20th century"}
        assert Decimal(data["price"]) == Decimal("150.00")

    def test_unknown_slug(self, client):
        response = client.get("/shop/products/nothing-here")

        assert response.status_code == 404


class TestCartEndpoints:
    def test_ensure_without_body_creates_cart(self, client):
        response = client.post("/shop/cart")

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["items"] == []

    def test_ensure_with_header_token_returns_same_cart(self, client):
        token = client.post("/shop/cart").json()["token"]

        response = client.post("/shop/cart", headers={"X-Cart-Token": token})

        assert response.json()["token"] == token

    def test_add_merge_update_remove(self, client, make_product):
        product = make_product(price="200.00", inventory_count=5)

        added = client.post("/shop/cart/items", json={"product_id": product.id, "quantity": 1}).json()
        token = added["token"]

        merged = client.post(
            "/shop/cart/items",
            json={"product_id": product.id, "quantity": 2},
            headers={"X-Cart-Token": token},
        ).json()
        assert len(merged["items"]) == 1
        assert merged["items_count"] == 3
        assert Decimal(merged["subtotal"]) == Decimal("600.00")

        item_id = merged["items"][0]["id"]
        updated = client.patch(
            f"/shop/cart/items/{item_id}",
            json={"cart_token": token, "quantity": 4},
        ).json()
        assert updated["items_count"] == 4
        assert Decimal(updated["subtotal"]) == Decimal("800.00")

        removed = client.delete(f"/shop/cart/items/{item_id}", params={"cart_token": token})
        assert removed.status_code == 200
        assert removed.json()["items"] == []
        assert removed.json()["items_count"] == 0

    def test_add_over_inventory_is_unprocessable(self, client, make_product):
        product = make_product(inventory_count=1)

        response = client.post("/shop/cart/items", json={"product_id": product.id, "quantity": 2})

        assert response.status_code == 422
        assert response.json()["detail"] == "Only 1 units available."

    def test_add_zero_quantity_fails_validation(self, client, make_product):
        product = make_product()

        response = client.post("/shop/cart/items", json={"product_id": product.id, "quantity": 0})

        assert response.status_code == 422

    def test_add_unknown_product(self, client):
        response = client.post("/shop/cart/items", json={"product_id": 4242, "quantity": 1})

        assert response.status_code == 404

    def test_update_without_token(self, client, make_product):
        product = make_product()
        item_id = client.post(
            "/shop/cart/items", json={"product_id": product.id, "quantity": 1}
        ).json()["items"][0]["id"]

        response = client.patch(f"/shop/cart/items/{item_id}", json={"quantity": 2})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing cart token."

    def test_update_with_unknown_token(self, client):
        response = client.patch("/shop/cart/items/1", json={"cart_token": "ghost", "quantity": 2})

        assert response.status_code == 404
        assert response.json()["detail"] == "Cart not found."

    def test_foreign_item_is_forbidden(self, client, make_product):
        product = make_product()
        owner = client.post("/shop/cart/items", json={"product_id": product.id, "quantity": 1}).json()
        other_token = client.post("/shop/cart").json()["token"]

        response = client.delete(
            f"/shop/cart/items/{owner['items'][0]['id']}",
            headers={"X-Cart-Token": other_token},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Cart item does not belong to this cart."


class TestCheckoutEndpoint:
    def test_checkout_places_order(self, client, db, make_product):
        product = make_product(name="Art Deco Silver Kada Pair", sku="VY-006", price="15800.00", inventory_count=4)
        token = client.post(
            "/shop/cart/items", json={"product_id": product.id, "quantity": 2}
        ).json()["token"]

        response = client.post("/shop/checkout", json={"cart_token": token, **CHECKOUT_FIELDS})

        assert response.status_code == 201
        order = response.json()
        assert order["order_number"].startswith("VYOM-")
        assert order["status"] == "pending"
        assert order["payment_status"] == "unpaid"
        assert Decimal(order["grand_total"]) == Decimal("31600.00")
        assert order["notes"] == ["Gift wrap please"]
        assert order["items"][0]["sku"] == "VY-006"
        assert order["items"][0]["quantity"] == 2

        db.expire_all()
        assert db.get(ProductModel, product.id).inventory_count == 2
        assert client.post("/shop/cart", json={"cart_token": token}).json()["items"] == []

    def test_checkout_with_header_token(self, client, make_product):
        product = make_product()
        token = client.post(
            "/shop/cart/items", json={"product_id": product.id, "quantity": 1}
        ).json()["token"]

        response = client.post("/shop/checkout", json=CHECKOUT_FIELDS, headers={"X-Cart-Token": token})

        assert response.status_code == 201

    def test_empty_cart(self, client):
        token = client.post("/shop/cart").json()["token"]

        response = client.post("/shop/checkout", json={"cart_token": token, **CHECKOUT_FIELDS})

        assert response.status_code == 422
        assert response.json()["detail"] == "Your cart is empty."

    def test_unknown_cart(self, client):
        response = client.post("/shop/checkout", json={"cart_token": "ghost", **CHECKOUT_FIELDS})

        assert response.status_code == 404

    def test_email_longer_than_column(self, client):
        long_email = "a" * 60 + "@" + "b" * 60 + "." + "c" * 30 + ".com"

        response = client.post(
            "/shop/checkout",
            json={**CHECKOUT_FIELDS, "cart_token": "x", "email": long_email},
        )

        assert response.status_code == 422
        assert "email" in response.json()["detail"][0]["loc"]

    def test_invalid_email(self, client):
        response = client.post(
            "/shop/checkout",
            json={**CHECKOUT_FIELDS, "cart_token": "x", "email": "not-an-email"},
        )

        assert response.status_code == 422

    def test_insufficient_stock_keeps_cart(self, client, db, make_product):
        product = make_product(name="Brocade Banarasi Wall Panel", inventory_count=3)
        token = client.post(
            "/shop/cart/items", json={"product_id": product.id, "quantity": 3}
        ).json()["token"]
        db.get(ProductModel, product.id).inventory_count = 2
        db.commit()

        response = client.post("/shop/checkout", json={"cart_token": token, **CHECKOUT_FIELDS})

        assert response.status_code == 422
        assert response.json()["detail"] == "Brocade Banarasi Wall Panel has only 2 units left."
        assert client.post("/shop/cart", json={"cart_token": token}).json()["items_count"] == 3


class TestTourEndpoints:
    def test_register_returns_created(self, client):
        response = client.post("/tour-registrations", json=tour_form(adults_count=2, students_count=3))

        assert response.status_code == 201
        body = response.json()
        assert body["message"].startswith("Your tour request has been received.")
        assert body["data"]["adults_count"] == 2
        assert body["data"]["students_count"] == 3
        assert body["data"]["preferred_date"] == VISIT_DAY

    def test_capacity_error_is_field_level(self, client):
        client.post("/tour-registrations", json=tour_form(adults_count=18))

        response = client.post("/tour-registrations", json=tour_form(adults_count=3))

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["errors"]["preferred_date"][0].startswith("Only 2 spots remain")

    def test_no_attendees(self, client):
        response = client.post("/tour-registrations", json=tour_form(adults_count=0))

        assert response.status_code == 422
        assert "adults_count" in response.json()["detail"]["errors"]

    def test_long_email_rejected(self, client):
        long_email = "a" * 60 + "@" + "b" * 60 + "." + "c" * 30 + ".com"

        response = client.post("/tour-registrations", json=tour_form(email=long_email))

        assert response.status_code == 422
        assert "email" in response.json()["detail"][0]["loc"]

    def test_list_newest_first(self, client):
        client.post("/tour-registrations", json=tour_form(contact_name="First group"))
        client.post("/tour-registrations", json=tour_form(contact_name="Second group", adults_count=3))

        response = client.get("/tour-registrations")

        assert response.status_code == 200
        data = response.json()
        assert [r["contact_name"] for r in data] == ["Second group", "First group"]
        assert data[0]["adults_count"] == 3

    def test_list_empty(self, client):
        response = client.get("/tour-registrations")

        assert response.json() == []

    def test_missing_required_field(self, client):
        form = tour_form()
        del form["group_type"]

        response = client.post("/tour-registrations", json=form)

        assert response.status_code == 422

    def test_availability(self, client):
        client.post("/tour-registrations", json=tour_form(adults_count=18))
        client.post("/tour-registrations", json=tour_form(adults_count=2))

        response = client.get(
            "/tour-registrations/availability",
            params={"preferred_date": VISIT_DAY, "preferred_slot": MORNING},
        )

        assert response.status_code == 200
        assert response.json() == {"capacity": 20, "booked": 20, "remaining": 0}

    def test_availability_requires_params(self, client):
        response = client.get("/tour-registrations/availability")

        assert response.status_code == 422


class TestAboutEndpoint:
    def test_not_configured(self, client):
        response = client.get("/about")

        assert response.status_code == 200
        assert response.json() == {"data": None, "message": "About content is not configured yet."}

    def test_latest_content(self, client, db):
        about = AboutService(db)
        about.publish(title="Old title")
        about.publish(title="Vyom Heritage Museum", paragraph_one="A living archive.")
        db.commit()

        response = client.get("/about")

        assert response.json()["data"]["title"] == "Vyom Heritage Museum"
        assert response.json()["data"]["paragraph_one"] == "A living archive."
