# backend/schemas/laptop.py
from datetime import datetime
from typing import Optional, List

from pydantic import Field

from models.laptop import LaptopCondition
from schemas.base import ORMBase
from utils.stock_level import StockLevel


class LaptopBase(ORMBase):
    description: Optional[str] = None
    barcode: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    processor: Optional[str] = None
    graphics: Optional[str] = None
    ram: Optional[str] = None
    storage: Optional[str] = None
    display: Optional[str] = None
    # One of LaptopCondition or free text
    condition: Optional[str] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    sale_price: Optional[float] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[str] = None
    depot_id: Optional[str] = None
    team_member_id: Optional[str] = None
    image_url: Optional[str] = None


class LaptopCreate(LaptopBase):
    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    model: str = Field(min_length=1)
    condition: str = LaptopCondition.NEW.value
    purchase_price: float = Field(default=0.0, ge=0)
    sale_price: float = Field(default=0.0, ge=0)
    quantity: int = Field(default=0, ge=0)


class LaptopUpdate(LaptopBase):
    name: Optional[str] = Field(None, min_length=1)


class LaptopOut(ORMBase):
    id: str
    reference: str
    barcode: Optional[str] = None
    name: str
    description: Optional[str] = None
    brand: str
    model: str
    processor: Optional[str] = None
    graphics: Optional[str] = None
    ram: Optional[str] = None
    storage: Optional[str] = None
    display: Optional[str] = None
    condition: str
    purchase_price: float
    sale_price: float
    quantity: int
    category_id: str
    depot_id: str
    team_member_id: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    stock_level: StockLevel
    low_stock: bool


class LaptopListPage(ORMBase):
    items: List[LaptopOut]
    total: int
    page: int
    page_size: int


class LaptopOptions(ORMBase):
    brands: List[str]
    processors: List[str]
    graphics: List[str]
    ram: List[str]
    storage: List[str]
    displays: List[str]
    conditions: List[str]
