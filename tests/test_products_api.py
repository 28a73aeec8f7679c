import re
from datetime import datetime, timedelta, timezone

import pytest

from models.category import Category
from models.product import Product
from models.promotion import Promotion
from models.sale import SaleItem
from models.team_member import TeamMember
from routes.products import SOLD_PRODUCT_MESSAGE
from utils.barcode import is_valid_ean13


def _iso(dt):
    return dt.isoformat().replace("+00:00", "Z")


def _running_promotion(product_id, type_="percentage", value=20):
    now = datetime.now(timezone.utc)
    return {
        "productId": product_id,
        "type": type_,
        "value": value,
        "startDate": _iso(now - timedelta(days=1)),
        "endDate": _iso(now + timedelta(days=1)),
    }


# ---- create ----

def test_create_product(client, category, depot):
    r = client.post("/products", json={
        "name": "USB cable",
        "purchasePrice": 2.5,
        "salePrice": 6,
        "quantity": 3,
        "categoryId": category.id,
        "depotId": depot.id,
    })
    assert r.status_code == 201
    body = r.json()
    assert re.fullmatch(r"REF-\d{2}-001", body["reference"])
    assert is_valid_ean13(body["barcode"])
    assert body["salePrice"] == 6
    assert body["isComposed"] is False
    assert body["stockLevel"] == "secondary"
    assert body["lowStock"] is True
    assert body["effectivePrice"] == 6
    assert body["promotion"] is None


def test_create_accepts_snake_case_and_keeps_barcode(client, category, depot):
    r = client.post("/products", json={
        "name": "Mouse",
        "barcode": " 12345 ",
        "category_id": category.id,
        "depot_id": depot.id,
    })
    assert r.status_code == 201
    assert r.json()["barcode"] == "12345"


def test_create_without_category(client, depot):
    r = client.post("/products", json={"name": "Mouse", "depotId": depot.id})
    assert r.status_code == 400
    assert r.json()["detail"] == "Please select a category for the product"


def test_create_without_depot(client, category):
    r = client.post("/products", json={"name": "Mouse", "categoryId": category.id, "depotId": "  "})
    assert r.status_code == 400
    assert r.json()["detail"] == "Please select a depot for the product"


def test_create_with_unknown_links(client, category, depot):
    r = client.post("/products", json={"name": "Mouse", "categoryId": "nope", "depotId": depot.id})
    assert r.status_code == 404
    r = client.post("/products", json={
        "name": "Mouse", "categoryId": category.id, "depotId": depot.id, "teamMemberId": "ghost",
    })
    assert r.status_code == 404


def test_team_member_none_means_unassigned(client, category, depot):
    r = client.post("/products", json={
        "name": "Mouse", "categoryId": category.id, "depotId": depot.id, "teamMemberId": "none",
    })
    assert r.status_code == 201
    assert r.json()["teamMemberId"] is None


def test_negative_values_rejected(client, category, depot):
    r = client.post("/products", json={
        "name": "Mouse", "categoryId": category.id, "depotId": depot.id, "quantity": -1,
    })
    assert r.status_code == 422


# ---- read ----

def test_list_filters_and_levels(client, make_product):
    make_product(name="Keyboard", quantity=0)
    make_product(name="Monitor", quantity=25)
    make_product(name="Mouse pad", quantity=4, is_composed=True, components=[])

    r = client.get("/products")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert body["pageSize"] == 50
    levels = {p["name"]: p["stockLevel"] for p in body["items"]}
    assert levels == {"Keyboard": "out", "Monitor": "ample", "Mouse pad": "secondary"}

    r = client.get("/products", params={"q": "mo"})
    assert {p["name"] for p in r.json()["items"]} == {"Monitor", "Mouse pad"}

    r = client.get("/products", params={"composed": "true"})
    assert [p["name"] for p in r.json()["items"]] == ["Mouse pad"]


def test_list_sorting_and_paging(client, make_product):
    for price in (5, 1, 3):
        make_product(sale_price=price)
    r = client.get("/products", params={"sortBy": "sale_price", "order": "desc", "pageSize": 2})
    body = r.json()
    assert [p["salePrice"] for p in body["items"]] == [5, 3]
    assert body["total"] == 3


@pytest.mark.parametrize("sort_key", ["salePrice", "sale_price"])
def test_sort_by_api_field_names(client, make_product, sort_key):
    make_product(name="A", sale_price=30)
    make_product(name="B", sale_price=10)
    make_product(name="C", sale_price=20)
    r = client.get("/products", params={"sortBy": sort_key})
    assert r.status_code == 200
    assert [p["salePrice"] for p in r.json()["items"]] == [10, 20, 30]


def test_sort_by_created_at(client, make_product):
    make_product()
    assert client.get("/products", params={"sortBy": "createdAt", "order": "desc"}).status_code == 200


def test_unknown_sort_key(client, make_product):
    make_product()
    r = client.get("/products", params={"sortBy": "purchasePrice"})
    assert r.status_code == 400


def test_list_filter_by_category(client, make_product, db):
    other = Category(name="Cables")
    db.add(other)
    db.commit()
    make_product(name="HDMI", category_id=other.id)
    make_product(name="Webcam")

    r = client.get("/products", params={"categoryId": other.id})
    assert [p["name"] for p in r.json()["items"]] == ["HDMI"]


def test_detail_names(client, make_product, db):
    member = TeamMember(last_name="Doe", first_name="Jane")
    db.add(member)
    db.commit()
    product = make_product(team_member_id=member.id)

    r = client.get(f"/products/{product.id}")
    assert r.status_code == 200
    body = r.json()
    assert body["categoryName"] == "Peripherals"
    assert body["depotName"] == "Main depot"
    assert body["teamMemberName"] == "Jane Doe"
    assert body["componentLines"] == []


def test_detail_unassigned(client, make_product):
    product = make_product()
    body = client.get(f"/products/{product.id}").json()
    assert body["teamMemberName"] == "Unassigned"


def test_unknown_product(client):
    assert client.get("/products/does-not-exist").status_code == 404


def test_lookup_by_barcode(client, make_product):
    product = make_product(barcode="6110000000420")
    r = client.get("/products/by-barcode/6110000000420")
    assert r.status_code == 200
    assert r.json()["id"] == product.id
    assert client.get("/products/by-barcode/0000").status_code == 404


def test_generate_barcode(client):
    r = client.get("/products/barcode/generate")
    assert r.status_code == 200
    assert is_valid_ean13(r.json()["barcode"])


# ---- compositions ----

def test_quote(client, make_product):
    a = make_product(purchase_price=10)
    b = make_product(purchase_price=4)
    components = [{"productId": a.id, "quantity": 2}, {"productId": b.id, "quantity": 3}]

    r = client.post("/products/compositions/quote", json={"components": components})
    assert r.status_code == 200
    assert r.json()["costTotal"] == pytest.approx(32.0)
    assert r.json()["salePrice"] == pytest.approx(41.6)

    r = client.post("/products/compositions/quote", json={"components": components, "manualSalePrice": 50})
    assert r.json()["salePrice"] == 50


def test_compose_product(client, make_product, category, depot):
    a = make_product(purchase_price=10)
    b = make_product(purchase_price=4)

    r = client.post("/products/compositions", json={
        "name": "Desk kit",
        "categoryId": category.id,
        "depotId": depot.id,
        "components": [
            {"productId": a.id, "quantity": 2},
            {"productId": b.id, "quantity": 3},
            {"productId": "gone", "quantity": 1},
        ],
    })
    assert r.status_code == 201
    body = r.json()
    assert re.fullmatch(r"COMP-\d{2}-001", body["reference"])
    assert body["isComposed"] is True
    assert body["quantity"] == 0
    assert body["stockLevel"] == "out"
    assert body["purchasePrice"] == pytest.approx(32.0)
    assert body["salePrice"] == pytest.approx(41.6)
    assert len(body["components"]) == 3

    detail = client.get(f"/products/{body['id']}").json()
    names = [line["name"] for line in detail["componentLines"]]
    assert names == [a.name, b.name, "Unknown product"]


def test_compose_with_manual_price(client, make_product, category, depot):
    a = make_product(purchase_price=10)
    r = client.post("/products/compositions", json={
        "name": "Kit",
        "categoryId": category.id,
        "depotId": depot.id,
        "components": [{"productId": a.id}],
        "manualSalePrice": 19.99,
    })
    assert r.status_code == 201
    assert r.json()["salePrice"] == 19.99


def test_compose_requires_components(client, category, depot):
    r = client.post("/products/compositions", json={
        "name": "Empty kit", "categoryId": category.id, "depotId": depot.id, "components": [],
    })
    assert r.status_code == 400
    assert r.json()["detail"] == "Please add at least one component to the product"


def test_compose_requires_category(client, make_product, depot):
    a = make_product()
    r = client.post("/products/compositions", json={
        "name": "Kit", "depotId": depot.id, "components": [{"productId": a.id}],
    })
    assert r.status_code == 400


# ---- update ----

def test_patch_product(client, make_product):
    product = make_product(name="Old", quantity=3)
    r = client.patch(f"/products/{product.id}", json={"name": "New", "quantity": 12})
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "New"
    assert body["stockLevel"] == "ample"
    assert body["reference"] == product.reference


def test_patch_cannot_clear_category(client, make_product):
    product = make_product()
    r = client.patch(f"/products/{product.id}", json={"categoryId": ""})
    assert r.status_code == 400


def test_patch_unknown_product(client):
    assert client.patch("/products/nope", json={"name": "x"}).status_code == 404


@pytest.mark.parametrize("field", ["name", "salePrice", "purchasePrice", "quantity"])
def test_patch_cannot_clear_required_fields(client, make_product, field):
    product = make_product(sale_price=12, quantity=4)
    r = client.patch(f"/products/{product.id}", json={field: None})
    assert r.status_code == 400

    body = client.get(f"/products/{product.id}").json()
    assert body["salePrice"] == 12
    assert body["quantity"] == 4


# ---- promotions on products ----

def test_running_promotion_changes_effective_price(client, make_product):
    product = make_product(sale_price=100)
    assert client.post("/promotions", json=_running_promotion(product.id)).status_code == 201

    item = client.get("/products").json()["items"][0]
    assert item["promotionActive"] is True
    assert item["effectivePrice"] == pytest.approx(80.0)
    assert item["promotion"]["type"] == "percentage"

    promoted = client.get("/products", params={"promoted": "true"}).json()
    assert promoted["total"] == 1
    assert client.get("/products", params={"promoted": "false"}).json()["total"] == 0


def test_future_promotion_keeps_price(client, make_product):
    product = make_product(sale_price=100)
    now = datetime.now(timezone.utc)
    client.post("/promotions", json={
        "productId": product.id,
        "type": "fixed_amount",
        "value": 30,
        "startDate": _iso(now + timedelta(days=1)),
        "endDate": _iso(now + timedelta(days=2)),
    })
    body = client.get(f"/products/{product.id}").json()
    assert body["promotionActive"] is False
    assert body["effectivePrice"] == 100


def test_unknown_stored_promotion_type(client, make_product, db):
    product = make_product(sale_price=10)
    now = datetime.now(timezone.utc)
    db.add(Promotion(
        product_id=product.id, type="mystery", value=1,
        start_date=now - timedelta(days=1), end_date=now + timedelta(days=1),
    ))
    db.commit()

    r = client.get(f"/products/{product.id}")
    assert r.status_code == 422
    assert r.json()["promotionType"] == "mystery"


def test_unknown_stored_promotion_type_fails_the_list(client, make_product, db):
    make_product(name="Plain", sale_price=5)
    product = make_product(name="Odd", sale_price=10)
    now = datetime.now(timezone.utc)
    db.add(Promotion(
        product_id=product.id, type="mystery", value=1,
        start_date=now - timedelta(days=1), end_date=now + timedelta(days=1),
    ))
    db.commit()

    r = client.get("/products")
    assert r.status_code == 422
    assert r.json()["promotionType"] == "mystery"


# ---- image and label ----

def test_upload_image_replaces_previous(client, make_product, upload_dir):
    product = make_product()

    r = client.post(f"/products/{product.id}/image", files={"file": ("a.png", b"\x89PNG first", "image/png")})
    assert r.status_code == 200
    first = r.json()["imageUrl"]
    assert first.startswith("/uploads/")
    assert (upload_dir / first.rsplit("/", 1)[-1]).exists()

    r = client.post(f"/products/{product.id}/image", files={"file": ("b.jpg", b"jpeg bytes", "image/jpeg")})
    second = r.json()["imageUrl"]
    assert second.endswith(".jpg")
    assert not (upload_dir / first.rsplit("/", 1)[-1]).exists()
    assert (upload_dir / second.rsplit("/", 1)[-1]).exists()


def test_upload_rejects_other_types(client, make_product):
    product = make_product()
    r = client.post(f"/products/{product.id}/image", files={"file": ("a.txt", b"hello", "text/plain")})
    assert r.status_code == 400


def test_upload_ignores_client_file_name(client, make_product, upload_dir):
    product = make_product()
    r = client.post(f"/products/{product.id}/image", files={"file": ("shot.png/evil", b"\x89PNG", "image/png")})
    assert r.status_code == 200
    url = r.json()["imageUrl"]
    assert re.fullmatch(r"/uploads/[a-z0-9]{13}_\d+\.png", url)
    assert [p.name for p in upload_dir.iterdir()] == [url.rsplit("/", 1)[-1]]


@pytest.mark.parametrize("barcode", ["6110000000420", "FREE-FORM-42"])
def test_label_pdf(client, make_product, barcode):
    product = make_product(barcode=barcode, sale_price=9.5)
    r = client.get(f"/products/{product.id}/label.pdf")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


# ---- delete ----

def test_delete_product(client, make_product, db):
    product = make_product(name="Spare")
    client.post("/promotions", json=_running_promotion(product.id))

    r = client.delete(f"/products/{product.id}")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Product 'Spare' deleted"}
    assert client.get(f"/products/{product.id}").status_code == 404

    db.expire_all()
    assert db.query(Promotion).count() == 0


def test_sold_product_cannot_be_deleted(client, make_product, db):
    product = make_product()
    db.add(SaleItem(sale_id="sale-1", product_id=product.id, quantity=1, unit_price=5))
    db.commit()

    r = client.delete(f"/products/{product.id}")
    assert r.status_code == 409
    assert r.json()["detail"] == {"success": False, "message": SOLD_PRODUCT_MESSAGE}

    db.expire_all()
    assert db.query(Product).filter(Product.id == product.id).count() == 1
