# backend/schemas/product.py
from datetime import datetime
from typing import Optional, List

from pydantic import Field

from schemas.base import ORMBase
from schemas.promotion import PromotionOut
from utils.stock_level import StockLevel


# One line of a composed product
class BundleComponent(ORMBase):
    product_id: str
    quantity: int = Field(default=1, ge=1)


# Shared base attributes for product entities
class ProductBase(ORMBase):
    description: Optional[str] = None
    barcode: Optional[str] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    sale_price: Optional[float] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[str] = None
    depot_id: Optional[str] = None
    team_member_id: Optional[str] = None
    image_url: Optional[str] = None


# Schema for creating a new product.
# Category and depot are checked by the route to report readable errors.
class ProductCreate(ProductBase):
    name: str = Field(min_length=1)
    purchase_price: float = Field(default=0.0, ge=0)
    sale_price: float = Field(default=0.0, ge=0)
    quantity: int = Field(default=0, ge=0)


# Schema for partial product updates
class ProductUpdate(ProductBase):
    """PATCH payload - every field optional, unset fields are left untouched."""
    name: Optional[str] = Field(None, min_length=1)


# Schema for composing a bundle out of existing products
class CompositionCreate(ORMBase):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    category_id: Optional[str] = None
    depot_id: Optional[str] = None
    team_member_id: Optional[str] = None
    barcode: Optional[str] = None
    components: List[BundleComponent] = []
    manual_sale_price: Optional[float] = Field(default=None, ge=0)


class CompositionQuoteRequest(ORMBase):
    components: List[BundleComponent]
    manual_sale_price: Optional[float] = None


class CompositionQuote(ORMBase):
    cost_total: float
    sale_price: float


# Full product representation with the computed stock and promotion state
class ProductOut(ORMBase):
    id: str
    reference: str
    barcode: Optional[str] = None
    name: str
    description: Optional[str] = None
    purchase_price: float
    sale_price: float
    quantity: int
    category_id: str
    depot_id: str
    team_member_id: Optional[str] = None
    image_url: Optional[str] = None
    is_composed: bool = False
    components: Optional[List[BundleComponent]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    stock_level: StockLevel
    low_stock: bool
    promotion: Optional[PromotionOut] = None
    promotion_active: bool = False
    effective_price: float


class ComponentLine(ORMBase):
    product_id: str
    quantity: int
    name: str
    purchase_price: float


class ProductDetail(ProductOut):
    category_name: str
    depot_name: str
    team_member_name: str
    component_lines: List[ComponentLine] = []


# Paginated response for product listings
class ProductListPage(ORMBase):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int


class GeneratedBarcode(ORMBase):
    barcode: str
