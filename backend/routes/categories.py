# backend/routes/categories.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from models.category import Category
from models.laptop import Laptop
from models.product import Product
from utils.audit import client_ip, write_log
from schemas.base import DeleteResult
from schemas.category import CategoryOut, CategoryCreate, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["Categories"])


def _get_or_404(db: Session, category_id: str) -> Category:
    c = db.query(Category).filter(Category.id == category_id).first()
    if not c:
        raise HTTPException(status_code=404, detail="Category not found")
    return c


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return db.query(Category).order_by(Category.name.asc()).all()


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryCreate, request: Request, db: Session = Depends(get_db)):
    c = Category(name=payload.name.strip(), description=payload.description)
    db.add(c)
    db.commit()
    db.refresh(c)
    write_log(db, action="CATEGORY_CREATE", resource="categories", status="SUCCESS",
              ip=client_ip(request), meta={"id": c.id})
    return c


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(category_id: str, payload: CategoryUpdate, request: Request, db: Session = Depends(get_db)):
    c = _get_or_404(db, category_id)

    if payload.name is not None:
        c.name = payload.name.strip()
    if payload.description is not None:
        c.description = payload.description

    db.commit()
    db.refresh(c)
    write_log(db, action="CATEGORY_UPDATE", resource="categories", status="SUCCESS",
              ip=client_ip(request), meta={"id": c.id})
    return c


@router.delete("/{category_id}", response_model=DeleteResult)
def delete_category(category_id: str, request: Request, db: Session = Depends(get_db)):
    c = _get_or_404(db, category_id)

    in_use = (
        db.query(Product.id).filter(Product.category_id == category_id).first()
        or db.query(Laptop.id).filter(Laptop.category_id == category_id).first()
    )
    if in_use:
        raise HTTPException(
            status_code=409,
            detail=DeleteResult(success=False, message="This category is still used by products").model_dump(),
        )

    db.delete(c)
    db.commit()
    write_log(db, action="CATEGORY_DELETE", resource="categories", status="SUCCESS",
              ip=client_ip(request), meta={"id": category_id})
    return DeleteResult(success=True)
