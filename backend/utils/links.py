# backend/utils/links.py
# Validation of the category / depot / team member references carried by
# products and laptops. Runs before anything is priced or persisted.
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from models.category import Category
from models.depot import Depot
from models.team_member import TeamMember


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def require_category(db: Session, category_id: Optional[str]) -> Category:
    if _blank(category_id):
        raise HTTPException(status_code=400, detail="Please select a category for the product")
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def require_depot(db: Session, depot_id: Optional[str]) -> Depot:
    if _blank(depot_id):
        raise HTTPException(status_code=400, detail="Please select a depot for the product")
    depot = db.query(Depot).filter(Depot.id == depot_id).first()
    if not depot:
        raise HTTPException(status_code=404, detail="Depot not found")
    return depot


def optional_team_member(db: Session, team_member_id: Optional[str]) -> Optional[str]:
    """Normalises "no assignee" to None and checks that a given member exists."""
    if _blank(team_member_id) or team_member_id == "none":
        return None
    if not db.query(TeamMember.id).filter(TeamMember.id == team_member_id).first():
        raise HTTPException(status_code=404, detail="Team member not found")
    return team_member_id


def check_links(db: Session, data: dict) -> dict:
    """
    Validates the link fields present in a (partial) payload dict in place.
    Keys that are absent are not checked, keys that are present must resolve.
    """
    if "category_id" in data:
        require_category(db, data["category_id"])
    if "depot_id" in data:
        require_depot(db, data["depot_id"])
    if "team_member_id" in data:
        data["team_member_id"] = optional_team_member(db, data["team_member_id"])
    return data
