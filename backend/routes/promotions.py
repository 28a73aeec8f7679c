# backend/routes/promotions.py
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from models.promotion import Promotion
from utils.audit import client_ip, write_log
from utils.promotions import is_promotion_active, effective_price
from schemas.base import DeleteResult
import schemas.promotion as promo_schemas

router = APIRouter(prefix="/promotions", tags=["Promotions"])


def _get_or_404(db: Session, promotion_id: str) -> Promotion:
    promo = db.query(Promotion).filter(Promotion.id == promotion_id).first()
    if not promo:
        raise HTTPException(status_code=404, detail="Promotion not found")
    return promo

def _with_status(promo: Promotion, now: datetime) -> dict:
    data = promo_schemas.PromotionOut.model_validate(promo).model_dump()
    data["active"] = is_promotion_active(promo, now)
    return data


@router.get("", response_model=List[promo_schemas.PromotionWithStatus])
def list_promotions(
    product_id: Optional[str] = Query(None, alias="productId"),
    active: Optional[bool] = Query(None, description="Only promotions running (or not) right now"),
    db: Session = Depends(get_db),
):
    query = db.query(Promotion)
    if product_id:
        query = query.filter(Promotion.product_id == product_id)
    promos = query.order_by(Promotion.start_date.asc()).all()

    now = datetime.now(timezone.utc)
    out = [_with_status(p, now) for p in promos]
    if active is not None:
        out = [p for p in out if p["active"] == active]
    return out


@router.post("", response_model=promo_schemas.PromotionWithStatus, status_code=201)
def create_promotion(
    payload: promo_schemas.PromotionCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    product = db.query(Product).filter(Product.id == payload.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    # One promotion per product
    existing = db.query(Promotion.id).filter(Promotion.product_id == product.id).first()
    if existing:
        write_log(
            db, action="PROMOTION_CREATE", resource="promotions", status="FAIL", ip=client_ip(request),
            meta={"product_id": product.id, "reason": "already promoted"},
        )
        raise HTTPException(status_code=409, detail="This product already has a promotion")

    data = payload.model_dump()
    data["type"] = payload.type.value
    promo = Promotion(**data)
    db.add(promo)
    db.commit()
    db.refresh(promo)

    write_log(
        db, action="PROMOTION_CREATE", resource="promotions", status="SUCCESS", ip=client_ip(request),
        meta={"id": promo.id, "product_id": product.id, "type": promo.type},
    )
    return _with_status(promo, datetime.now(timezone.utc))


@router.get("/{promotion_id}/price", response_model=promo_schemas.PromotionPrice)
def promotion_price(promotion_id: str, db: Session = Depends(get_db)):
    promo = _get_or_404(db, promotion_id)
    base = promo.product.sale_price if promo.product else 0.0
    return {
        "promotion_id": promo.id,
        "product_id": promo.product_id,
        "active": is_promotion_active(promo),
        "base_price": base or 0.0,
        "effective_price": round(effective_price(base, promo), 2),
    }


@router.delete("/{promotion_id}", response_model=DeleteResult)
def delete_promotion(promotion_id: str, request: Request, db: Session = Depends(get_db)):
    promo = _get_or_404(db, promotion_id)
    pid, product_id = promo.id, promo.product_id
    db.delete(promo)
    db.commit()

    write_log(
        db, action="PROMOTION_DELETE", resource="promotions", status="SUCCESS", ip=client_ip(request),
        meta={"id": pid, "product_id": product_id},
    )
    return DeleteResult(success=True, message="Promotion deleted")
