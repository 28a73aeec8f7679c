import os
import sys
import logging

import pandas as pd
from sqlalchemy.orm import Session

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from database import SessionLocal, init_db
from models.category import Category
from models.depot import Depot
from models.product import Product
from utils.barcode import generate_barcode
from utils.reference import next_reference, PRODUCT_PREFIX

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name", "category", "depot", "purchase_price", "sale_price", "quantity"]
OPTIONAL_COLUMNS = ["barcode", "description"]


def _get_or_create(db: Session, model, cache: dict, name: str):
    if name in cache:
        return cache[name]
    obj = db.query(model).filter(model.name == name).first()
    if not obj:
        obj = model(name=name)
        db.add(obj)
        db.flush()
    cache[name] = obj
    return obj


def read_catalog(csv_path: str) -> pd.DataFrame:
    """Loads and cleans a catalog CSV."""
    df = pd.read_csv(csv_path, dtype={"barcode": str})

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {csv_path}: {', '.join(missing)}")
    for col in OPTIONAL_COLUMNS:
        if col not in df.columns:
            df[col] = ""

    # Rows without a name, category or depot cannot be placed
    df = df.dropna(subset=["name", "category", "depot"]).copy()
    df[["name", "category", "depot"]] = df[["name", "category", "depot"]].apply(lambda s: s.astype(str).str.strip())
    df[["purchase_price", "sale_price"]] = (
        df[["purchase_price", "sale_price"]].apply(pd.to_numeric, errors="coerce").fillna(0.0).clip(lower=0)
    )
    df["quantity"] = pd.to_numeric(df["quantity"], errors="coerce").fillna(0).clip(lower=0).astype(int)
    df[OPTIONAL_COLUMNS] = df[OPTIONAL_COLUMNS].fillna("").astype(str)
    return df


def load_catalog(db: Session, csv_path: str) -> int:
    """
    Inserts the products of a catalog CSV.
    Categories and depots are matched by name and created when missing;
    references and barcodes are generated like for products added by hand.
    """
    df = read_catalog(csv_path)
    categories, depots = {}, {}

    count = 0
    for row in df.itertuples(index=False):
        category = _get_or_create(db, Category, categories, row.category)
        depot = _get_or_create(db, Depot, depots, row.depot)
        barcode = row.barcode.strip() or generate_barcode()

        db.add(Product(
            name=row.name,
            reference=next_reference(db, Product, PRODUCT_PREFIX),
            barcode=barcode,
            description=row.description,
            purchase_price=float(row.purchase_price),
            sale_price=float(row.sale_price),
            quantity=int(row.quantity),
            category_id=category.id,
            depot_id=depot.id,
        ))
        # Flush so the next reference sees this row
        db.flush()
        count += 1

    db.commit()
    logger.info(f"Imported {count} products from {csv_path}")
    return count


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) != 2:
        print("Usage: python populate_db.py <catalog.csv>")
        sys.exit(1)

    init_db()
    session = SessionLocal()
    try:
        load_catalog(session, sys.argv[1])
    finally:
        session.close()
