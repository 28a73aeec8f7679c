# backend/routes/depots.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from database import get_db
from models.depot import Depot
from models.laptop import Laptop
from models.product import Product
from utils.audit import client_ip, write_log
from schemas.base import DeleteResult
from schemas.depot import DepotOut, DepotCreate, DepotUpdate

router = APIRouter(prefix="/depots", tags=["Depots"])


def _get_or_404(db: Session, depot_id: str) -> Depot:
    d = db.query(Depot).filter(Depot.id == depot_id).first()
    if not d:
        raise HTTPException(status_code=404, detail="Depot not found")
    return d


@router.get("", response_model=List[DepotOut])
def list_depots(db: Session = Depends(get_db)):
    return db.query(Depot).order_by(Depot.name.asc()).all()


@router.post("", response_model=DepotOut, status_code=201)
def create_depot(payload: DepotCreate, request: Request, db: Session = Depends(get_db)):
    d = Depot(name=payload.name.strip(), address=payload.address)
    db.add(d)
    db.commit()
    db.refresh(d)
    write_log(db, action="DEPOT_CREATE", resource="depots", status="SUCCESS",
              ip=client_ip(request), meta={"id": d.id})
    return d


@router.patch("/{depot_id}", response_model=DepotOut)
def update_depot(depot_id: str, payload: DepotUpdate, request: Request, db: Session = Depends(get_db)):
    d = _get_or_404(db, depot_id)

    if payload.name is not None:
        d.name = payload.name.strip()
    if payload.address is not None:
        d.address = payload.address

    db.commit()
    db.refresh(d)
    write_log(db, action="DEPOT_UPDATE", resource="depots", status="SUCCESS",
              ip=client_ip(request), meta={"id": d.id})
    return d


@router.delete("/{depot_id}", response_model=DeleteResult)
def delete_depot(depot_id: str, request: Request, db: Session = Depends(get_db)):
    d = _get_or_404(db, depot_id)

    in_use = (
        db.query(Product.id).filter(Product.depot_id == depot_id).first()
        or db.query(Laptop.id).filter(Laptop.depot_id == depot_id).first()
    )
    if in_use:
        raise HTTPException(
            status_code=409,
            detail=DeleteResult(success=False, message="This depot still holds products").model_dump(),
        )

    db.delete(d)
    db.commit()
    write_log(db, action="DEPOT_DELETE", resource="depots", status="SUCCESS",
              ip=client_ip(request), meta={"id": depot_id})
    return DeleteResult(success=True)
