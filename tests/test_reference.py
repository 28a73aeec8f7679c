import re

from models.laptop import Laptop
from models.product import Product
from utils.computer_specs import (
    LAPTOP_CATEGORY_ID, ensure_computer_categories, laptop_category_id, laptop_options,
)
from utils.reference import (
    COMPOSED_PREFIX, PRODUCT_PREFIX, LAPTOP_PREFIX, format_reference, next_reference,
)
from utils.storage import generate_file_name
from models.category import Category


def test_format_reference():
    assert format_reference("REF", 7, year=2025) == "REF-25-007"
    assert format_reference("LAP", 1234, year=2026) == "LAP-26-1234"


def test_next_reference_starts_after_existing_rows(db, make_product):
    assert re.fullmatch(r"REF-\d{2}-001", next_reference(db, Product, PRODUCT_PREFIX))
    make_product()
    make_product()
    assert next_reference(db, Product, PRODUCT_PREFIX).endswith("-003")


def test_next_reference_skips_taken_values(db, make_product):
    make_product(reference=format_reference(PRODUCT_PREFIX, 2))
    # one row -> tries 002, which is taken
    assert next_reference(db, Product, PRODUCT_PREFIX).endswith("-003")


def test_composed_sequence_counts_only_composed(db, make_product):
    make_product()
    make_product()
    ref = next_reference(db, Product, COMPOSED_PREFIX, Product.is_composed.is_(True))
    assert re.fullmatch(r"COMP-\d{2}-001", ref)


def test_laptop_sequence(db):
    assert next_reference(db, Laptop, LAPTOP_PREFIX).startswith("LAP-")


def test_computer_categories_created_once(db):
    assert ensure_computer_categories(db) == 2
    assert ensure_computer_categories(db) == 0
    assert db.query(Category).filter(Category.id == LAPTOP_CATEGORY_ID).one().name == "Laptop"


def test_existing_laptop_category_matched_by_name(db):
    db.add(Category(id="custom-id", name="Laptop"))
    db.commit()
    assert laptop_category_id(db) == "custom-id"


def test_laptop_options_lists():
    options = laptop_options()
    assert set(options) == {"brands", "processors", "graphics", "ram", "storage", "displays", "conditions"}
    assert options["conditions"] == ["New", "Like new", "Used"]
    assert "Lenovo" in options["brands"]


def test_generated_file_names():
    name = generate_file_name("image/png")
    assert re.fullmatch(r"[a-z0-9]{13}_\d+\.png", name)
    assert generate_file_name("image/jpeg").endswith(".jpg")
    assert generate_file_name("image/webp").endswith(".webp")
