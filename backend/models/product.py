# backend/models/product.py
import uuid
from sqlalchemy import (
    Column, Integer, String, Float, Boolean, JSON, ForeignKey, CheckConstraint, DateTime, func
)
from sqlalchemy.orm import relationship
from database import Base

# Model Product
# A single catalog item. Composed products (bundles) keep their component
# list as an ordered JSON array of {"product_id", "quantity"} entries; the
# purchase price of a bundle is a snapshot taken when it was composed.
class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    reference = Column(String, unique=True, nullable=False, index=True)
    barcode = Column(String, nullable=True, index=True)

    description = Column(String, nullable=True, default="")

    # Prices, guarded by check constraints.
    purchase_price = Column(Float, CheckConstraint("purchase_price >= 0"), nullable=False, default=0.0)
    sale_price = Column(Float, CheckConstraint("sale_price >= 0"), nullable=False, default=0.0)

    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)

    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    depot_id = Column(String(36), ForeignKey("depots.id"), nullable=False, index=True)
    team_member_id = Column(String(36), ForeignKey("team_members.id"), nullable=True)

    # Optional public URL of the product picture.
    image_url = Column(String, nullable=True)

    is_composed = Column(Boolean, nullable=False, default=False)
    components = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category")
    depot = relationship("Depot")
    team_member = relationship("TeamMember")
    promotions = relationship("Promotion", back_populates="product", cascade="all, delete-orphan")
