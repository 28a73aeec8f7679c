# backend/routes/laptops.py
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, UploadFile, File
from sqlalchemy import or_
from sqlalchemy.orm import Session

from database import get_db
from models.laptop import Laptop
from models.sale import SaleItem
from utils.audit import client_ip, write_log
from utils.barcode import generate_barcode
from utils.computer_specs import laptop_options, laptop_category_id
from utils.labels import render_label
from utils.links import check_links
from utils.reference import next_reference, LAPTOP_PREFIX
from utils.stock_level import classify_stock, is_low_stock
from utils import storage
from schemas.base import DeleteResult
import schemas.laptop as laptop_schemas

router = APIRouter(prefix="/laptops", tags=["Laptops"])

SOLD_LAPTOP_MESSAGE = (
    "This laptop cannot be deleted because it is used in one or more sales. "
    "Set its quantity to zero to make it unavailable."
)


def _get_or_404(db: Session, laptop_id: str) -> Laptop:
    laptop = db.query(Laptop).filter(Laptop.id == laptop_id).first()
    if not laptop:
        raise HTTPException(status_code=404, detail="Laptop not found")
    return laptop

def _laptop_out(laptop: Laptop) -> dict:
    fields = [f for f in laptop_schemas.LaptopOut.model_fields if hasattr(Laptop, f)]
    data = {f: getattr(laptop, f) for f in fields}
    data["stock_level"] = classify_stock(laptop.quantity)
    data["low_stock"] = is_low_stock(laptop.quantity)
    return data


# Suggestion lists for the laptop form
@router.get("/options", response_model=laptop_schemas.LaptopOptions)
def get_options():
    return laptop_options()


@router.get("", response_model=laptop_schemas.LaptopListPage)
def list_laptops(
    q: Optional[str] = Query(None, description="Name, reference or model"),
    depot_id: Optional[str] = Query(None, alias="depotId"),
    brand: Optional[str] = Query(None),
    condition: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=1000, alias="pageSize"),
    db: Session = Depends(get_db),
):
    query = db.query(Laptop)

    if q:
        like = f"%{q}%"
        query = query.filter(or_(Laptop.name.ilike(like), Laptop.reference.ilike(like), Laptop.model.ilike(like)))
    if depot_id: query = query.filter(Laptop.depot_id == depot_id)
    if brand: query = query.filter(Laptop.brand.ilike(brand))
    if condition: query = query.filter(Laptop.condition == condition)

    query = query.order_by(Laptop.name.asc())
    total = query.count()
    items: List[Laptop] = query.offset((page - 1) * page_size).limit(page_size).all()

    return {"items": [_laptop_out(l) for l in items], "total": total, "page": page, "page_size": page_size}


@router.get("/{laptop_id}", response_model=laptop_schemas.LaptopOut)
def get_laptop(laptop_id: str, db: Session = Depends(get_db)):
    return _laptop_out(_get_or_404(db, laptop_id))


@router.post("", response_model=laptop_schemas.LaptopOut, status_code=201)
def add_laptop(payload: laptop_schemas.LaptopCreate, request: Request, db: Session = Depends(get_db)):
    data = payload.model_dump()
    # Laptops land in the predefined laptop category unless told otherwise
    if not (data.get("category_id") or "").strip():
        data["category_id"] = laptop_category_id(db)
    check_links(db, data)

    if data.get("barcode") and data["barcode"].strip():
        data["barcode"] = data["barcode"].strip()
    else:
        data["barcode"] = generate_barcode()
    data["description"] = data.get("description") or ""

    laptop = Laptop(reference=next_reference(db, Laptop, LAPTOP_PREFIX), **data)
    db.add(laptop)
    db.commit()
    db.refresh(laptop)

    write_log(
        db, action="LAPTOP_CREATE", resource="laptops", status="SUCCESS", ip=client_ip(request),
        meta={"id": laptop.id, "reference": laptop.reference},
    )
    return _laptop_out(laptop)


@router.patch("/{laptop_id}", response_model=laptop_schemas.LaptopOut)
def edit_laptop(
    laptop_id: str,
    payload: laptop_schemas.LaptopUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    laptop = _get_or_404(db, laptop_id)

    data = payload.model_dump(exclude_unset=True)
    check_links(db, data)
    # Required columns cannot be cleared through a PATCH
    for key in ("name", "brand", "model", "condition", "purchase_price", "sale_price", "quantity"):
        if key in data and data[key] is None:
            raise HTTPException(status_code=400, detail=f"{key} cannot be empty")

    for key, value in data.items():
        setattr(laptop, key, value)

    db.commit()
    db.refresh(laptop)

    write_log(
        db, action="LAPTOP_EDIT", resource="laptops", status="SUCCESS", ip=client_ip(request),
        meta={"id": laptop.id, "fields": sorted(data)},
    )
    return _laptop_out(laptop)


@router.post("/{laptop_id}/image", response_model=laptop_schemas.LaptopOut)
def upload_laptop_image(
    laptop_id: str,
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    laptop = _get_or_404(db, laptop_id)

    new_url = storage.save_image(file)
    old_url = laptop.image_url
    laptop.image_url = new_url
    db.commit()
    db.refresh(laptop)
    storage.remove_image(old_url)

    write_log(
        db, action="LAPTOP_IMAGE", resource="laptops", status="SUCCESS", ip=client_ip(request),
        meta={"id": laptop.id, "image_url": new_url},
    )
    return _laptop_out(laptop)


@router.get("/{laptop_id}/label.pdf")
def laptop_label(laptop_id: str, db: Session = Depends(get_db)):
    laptop = _get_or_404(db, laptop_id)
    return Response(
        content=render_label(laptop),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{laptop.reference}.pdf"'},
    )


@router.delete("/{laptop_id}", response_model=DeleteResult)
def delete_laptop(laptop_id: str, request: Request, db: Session = Depends(get_db)):
    laptop = _get_or_404(db, laptop_id)

    if db.query(SaleItem.id).filter(SaleItem.laptop_id == laptop_id).first():
        write_log(
            db, action="LAPTOP_DELETE", resource="laptops", status="FAIL", ip=client_ip(request),
            meta={"id": laptop_id, "reason": "referenced by sale"},
        )
        raise HTTPException(
            status_code=409,
            detail=DeleteResult(success=False, message=SOLD_LAPTOP_MESSAGE).model_dump(),
        )

    lid, lname, image_url = laptop.id, laptop.name, laptop.image_url
    db.delete(laptop)
    db.commit()
    storage.remove_image(image_url)

    write_log(db, action="LAPTOP_DELETE", resource="laptops", status="SUCCESS", ip=client_ip(request), meta={"id": lid})
    return DeleteResult(success=True, message=f"Laptop '{lname}' deleted")
