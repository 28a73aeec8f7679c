# backend/routes/products.py
import logging
from datetime import datetime, timezone
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, UploadFile, File
from pydantic.alias_generators import to_snake
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from models.sale import SaleItem
from utils.audit import client_ip, write_log
from utils.barcode import generate_barcode
from utils.links import check_links
from utils.labels import render_label
from utils.pricing import price_bundle
from utils.promotions import is_promotion_active, effective_price
from utils.reference import next_reference, PRODUCT_PREFIX, COMPOSED_PREFIX
from utils.stock_level import classify_stock, is_low_stock
from utils import storage
from schemas.base import DeleteResult
from schemas.promotion import PromotionOut
import schemas.product as product_schemas

router = APIRouter(tags=["Products"])
logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT = "Unknown product"
SOLD_PRODUCT_MESSAGE = (
    "This product cannot be deleted because it is used in one or more sales. "
    "Set its quantity to zero to make it unavailable."
)


# ---- HELPERS ----
def _get_or_404(db: Session, product_id: str) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

def _barcode_or_new(barcode: Optional[str]) -> str:
    # Keep exactly what was typed or scanned, generate only when empty
    if barcode and barcode.strip():
        return barcode.strip()
    return generate_barcode()

def _promotion_for(product: Product):
    # A product carries at most one promotion
    return product.promotions[0] if product.promotions else None

def _product_out(product: Product, now: Optional[datetime] = None) -> dict:
    now = now or datetime.now(timezone.utc)
    fields = [f for f in product_schemas.ProductOut.model_fields if hasattr(Product, f)]
    data = {f: getattr(product, f) for f in fields}

    promo = _promotion_for(product)
    # An active promotion of unknown type raises InvalidPromotionType (422),
    # which fails the whole list rather than showing a wrong price
    active = promo is not None and is_promotion_active(promo, now)
    price = effective_price(product.sale_price, promo) if active else (product.sale_price or 0.0)

    data.update(
        stock_level=classify_stock(product.quantity),
        low_stock=is_low_stock(product.quantity),
        promotion=PromotionOut.model_validate(promo) if promo is not None else None,
        promotion_active=active,
        effective_price=round(price, 2),
    )
    return data


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_products(
    q: Optional[str] = Query(None, description="Name or reference"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    depot_id: Optional[str] = Query(None, alias="depotId"),
    composed: Optional[bool] = Query(None),
    promoted: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=1000, alias="pageSize"),
    sort_by: str = Query("name", alias="sortBy"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    query = db.query(Product)

    if q:
        like = f"%{q}%"
        query = query.filter(or_(Product.name.ilike(like), Product.reference.ilike(like)))
    if category_id: query = query.filter(Product.category_id == category_id)
    if depot_id: query = query.filter(Product.depot_id == depot_id)
    if composed is not None: query = query.filter(Product.is_composed == composed)
    if promoted is not None:
        has_promo = Product.promotions.any()
        query = query.filter(has_promo if promoted else ~has_promo)

    # sortBy accepts the camelCase field names of the API as well as snake_case
    allowed = {
        "name": Product.name, "reference": Product.reference,
        "sale_price": Product.sale_price, "quantity": Product.quantity,
        "created_at": Product.created_at,
    }
    sort_col = allowed.get(to_snake(sort_by))
    if sort_col is None:
        raise HTTPException(status_code=400, detail=f"Cannot sort by '{sort_by}'")
    query = query.order_by(sort_col.asc() if order == "asc" else sort_col.desc())

    total = query.count()
    items: List[Product] = query.offset((page - 1) * page_size).limit(page_size).all()

    now = datetime.now(timezone.utc)
    return {
        "items": [_product_out(p, now) for p in items],
        "total": total, "page": page, "page_size": page_size,
    }


# =========================
# BARCODES
# =========================
@router.get("/products/barcode/generate", response_model=product_schemas.GeneratedBarcode)
def new_barcode():
    return {"barcode": generate_barcode()}

@router.get("/products/by-barcode/{barcode}", response_model=product_schemas.ProductOut)
def get_product_by_barcode(barcode: str, db: Session = Depends(get_db)):
    product = db.query(Product).filter(Product.barcode == barcode.strip()).first()
    if not product:
        raise HTTPException(status_code=404, detail="No product with this barcode")
    return _product_out(product)


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductDetail)
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = _get_or_404(db, product_id)
    data = _product_out(product)

    data["category_name"] = product.category.name if product.category else "Uncategorized"
    data["depot_name"] = product.depot.name if product.depot else "Unassigned"
    data["team_member_name"] = product.team_member.full_name if product.team_member else "Unassigned"

    lines = []
    components = product.components or []
    if product.is_composed and components:
        ids = [c.get("product_id") for c in components]
        found = {p.id: p for p in db.query(Product).filter(Product.id.in_(ids)).all()}
        for comp in components:
            part = found.get(comp.get("product_id"))
            lines.append({
                "product_id": comp.get("product_id"),
                "quantity": comp.get("quantity") or 0,
                "name": part.name if part else UNKNOWN_PRODUCT,
                "purchase_price": (part.purchase_price or 0.0) if part else 0.0,
            })
    data["component_lines"] = lines
    return data


# =========================
# CREATE PRODUCT
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=201)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    # Category and depot are mandatory on creation
    data = payload.model_dump()
    check_links(db, data)

    data["barcode"] = _barcode_or_new(data.get("barcode"))
    data["description"] = data.get("description") or ""
    reference = next_reference(db, Product, PRODUCT_PREFIX)

    product = Product(reference=reference, is_composed=False, **data)
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(
        db, action="PRODUCT_CREATE", resource="products", status="SUCCESS", ip=client_ip(request),
        meta={"id": product.id, "reference": product.reference},
    )
    return _product_out(product)


# =========================
# COMPOSED PRODUCTS
# =========================
@router.post("/products/compositions/quote", response_model=product_schemas.CompositionQuote)
def quote_composition(
    payload: product_schemas.CompositionQuoteRequest,
    db: Session = Depends(get_db),
):
    """Cost and suggested price of a bundle, without saving anything."""
    ids = [c.product_id for c in payload.components]
    found = {p.id: p for p in db.query(Product).filter(Product.id.in_(ids)).all()}
    quote = price_bundle(payload.components, found.get, payload.manual_sale_price)
    return {"cost_total": quote.cost_total, "sale_price": quote.sale_price}


@router.post("/products/compositions", response_model=product_schemas.ProductOut, status_code=201)
def compose_product(
    payload: product_schemas.CompositionCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    data = payload.model_dump(include={"category_id", "depot_id", "team_member_id"})
    check_links(db, data)
    if not payload.components:
        raise HTTPException(status_code=400, detail="Please add at least one component to the product")

    ids = [c.product_id for c in payload.components]
    found = {p.id: p for p in db.query(Product).filter(Product.id.in_(ids)).all()}
    missing = [pid for pid in ids if pid not in found]
    if missing:
        logger.warning(f"Composition '{payload.name}' references unknown products: {missing}")

    quote = price_bundle(payload.components, found.get, payload.manual_sale_price)
    reference = next_reference(db, Product, COMPOSED_PREFIX, Product.is_composed.is_(True))

    product = Product(
        name=payload.name,
        description=payload.description or "",
        reference=reference,
        barcode=_barcode_or_new(payload.barcode),
        # Assembled to order: no stock of its own, cost frozen at composition time
        quantity=0,
        purchase_price=quote.cost_total,
        sale_price=quote.sale_price,
        is_composed=True,
        components=[c.model_dump() for c in payload.components],
        **data,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(
        db, action="PRODUCT_COMPOSE", resource="products", status="SUCCESS", ip=client_ip(request),
        meta={"id": product.id, "reference": product.reference, "components": len(ids)},
    )
    return _product_out(product)


# =========================
# PARTIAL UPDATE (PATCH)
# =========================
@router.patch("/products/{product_id}", response_model=product_schemas.ProductOut)
def edit_product(
    product_id: str,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    product = _get_or_404(db, product_id)

    data = payload.model_dump(exclude_unset=True)
    check_links(db, data)
    # Required columns cannot be cleared through a PATCH
    for key in ("name", "purchase_price", "sale_price", "quantity"):
        if key in data and data[key] is None:
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")

    for key, value in data.items():
        setattr(product, key, value)

    db.commit()
    db.refresh(product)

    write_log(
        db, action="PRODUCT_EDIT", resource="products", status="SUCCESS", ip=client_ip(request),
        meta={"id": product.id, "fields": sorted(data)},
    )
    return _product_out(product)


# =========================
# IMAGE
# =========================
@router.post("/products/{product_id}/image", response_model=product_schemas.ProductOut)
def upload_product_image(
    product_id: str,
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    product = _get_or_404(db, product_id)

    new_url = storage.save_image(file)
    old_url = product.image_url
    product.image_url = new_url
    db.commit()
    db.refresh(product)
    storage.remove_image(old_url)

    write_log(
        db, action="PRODUCT_IMAGE", resource="products", status="SUCCESS", ip=client_ip(request),
        meta={"id": product.id, "image_url": new_url},
    )
    return _product_out(product)


# =========================
# BARCODE LABEL
# =========================
@router.get("/products/{product_id}/label.pdf")
def product_label(product_id: str, db: Session = Depends(get_db)):
    product = _get_or_404(db, product_id)
    pdf = render_label(product)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{product.reference}.pdf"'},
    )


# =========================
# DELETE
# =========================
@router.delete("/products/{product_id}", response_model=DeleteResult)
def delete_product(product_id: str, request: Request, db: Session = Depends(get_db)):
    product = _get_or_404(db, product_id)

    # Sold products stay: sale lines must keep pointing at them
    sold = db.query(SaleItem.id).filter(SaleItem.product_id == product_id).first()
    if sold:
        write_log(
            db, action="PRODUCT_DELETE", resource="products", status="FAIL", ip=client_ip(request),
            meta={"id": product_id, "reason": "referenced by sale"},
        )
        raise HTTPException(
            status_code=409,
            detail=DeleteResult(success=False, message=SOLD_PRODUCT_MESSAGE).model_dump(),
        )

    pid, pname, image_url = product.id, product.name, product.image_url
    db.delete(product)
    db.commit()
    storage.remove_image(image_url)

    write_log(db, action="PRODUCT_DELETE", resource="products", status="SUCCESS", ip=client_ip(request), meta={"id": pid})
    return DeleteResult(success=True, message=f"Product '{pname}' deleted")
