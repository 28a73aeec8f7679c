# backend/routes/team.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.laptop import Laptop
from models.product import Product
from models.team_member import TeamMember
from utils.audit import client_ip, write_log
from schemas.base import DeleteResult
from schemas.team import TeamMemberOut, TeamMemberCreate, TeamMemberUpdate

router = APIRouter(prefix="/team-members", tags=["Team"])


def _get_or_404(db: Session, member_id: str) -> TeamMember:
    m = db.query(TeamMember).filter(TeamMember.id == member_id).first()
    if not m:
        raise HTTPException(status_code=404, detail="Team member not found")
    return m


@router.get("", response_model=List[TeamMemberOut])
def list_team_members(db: Session = Depends(get_db)):
    return db.query(TeamMember).order_by(TeamMember.last_name.asc()).all()


@router.get("/{member_id}", response_model=TeamMemberOut)
def get_team_member(member_id: str, db: Session = Depends(get_db)):
    return _get_or_404(db, member_id)


@router.post("", response_model=TeamMemberOut, status_code=201)
def create_team_member(payload: TeamMemberCreate, request: Request, db: Session = Depends(get_db)):
    email = payload.email.strip().lower() if payload.email else None
    if email and db.query(TeamMember.id).filter(func.lower(TeamMember.email) == email).first():
        raise HTTPException(status_code=409, detail="Email already registered")

    m = TeamMember(
        last_name=payload.last_name, first_name=payload.first_name,
        email=email, phone=payload.phone, role=payload.role,
    )
    db.add(m)
    db.commit()
    db.refresh(m)
    write_log(db, action="TEAM_MEMBER_CREATE", resource="team_members", status="SUCCESS",
              ip=client_ip(request), meta={"id": m.id})
    return m


@router.patch("/{member_id}", response_model=TeamMemberOut)
def update_team_member(member_id: str, payload: TeamMemberUpdate, request: Request, db: Session = Depends(get_db)):
    m = _get_or_404(db, member_id)

    data = payload.model_dump(exclude_unset=True)
    if data.get("email"):
        data["email"] = data["email"].strip().lower()
        clash = db.query(TeamMember.id).filter(
            func.lower(TeamMember.email) == data["email"], TeamMember.id != m.id
        ).first()
        if clash:
            raise HTTPException(status_code=409, detail="Email already registered")
    for key in ("last_name", "role"):
        if key in data and data[key] is None:
            data.pop(key)

    for key, value in data.items():
        setattr(m, key, value)

    db.commit()
    db.refresh(m)
    write_log(db, action="TEAM_MEMBER_UPDATE", resource="team_members", status="SUCCESS",
              ip=client_ip(request), meta={"id": m.id, "fields": sorted(data)})
    return m


@router.delete("/{member_id}", response_model=DeleteResult)
def delete_team_member(member_id: str, request: Request, db: Session = Depends(get_db)):
    m = _get_or_404(db, member_id)

    # Products keep existing, they just lose their assignee
    db.query(Product).filter(Product.team_member_id == member_id).update({Product.team_member_id: None})
    db.query(Laptop).filter(Laptop.team_member_id == member_id).update({Laptop.team_member_id: None})
    db.delete(m)
    db.commit()

    write_log(db, action="TEAM_MEMBER_DELETE", resource="team_members", status="SUCCESS",
              ip=client_ip(request), meta={"id": member_id})
    return DeleteResult(success=True)
