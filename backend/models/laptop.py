# backend/models/laptop.py
import enum
import uuid
from sqlalchemy import Column, Integer, String, Float, ForeignKey, CheckConstraint, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


# Suggested laptop conditions; the column itself accepts free text.
class LaptopCondition(str, enum.Enum):
    NEW = "New"
    LIKE_NEW = "Like new"
    USED = "Used"


# Laptop stock record. Same lifecycle as Product but kept in its own table
# together with the technical sheet.
class Laptop(Base):
    __tablename__ = "laptops"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    reference = Column(String, unique=True, nullable=False, index=True)
    barcode = Column(String, nullable=True, index=True)
    description = Column(String, nullable=True, default="")

    # Technical sheet
    brand = Column(String, nullable=False, index=True)
    model = Column(String, nullable=False)
    processor = Column(String, nullable=True)
    graphics = Column(String, nullable=True)
    ram = Column(String, nullable=True)
    storage = Column(String, nullable=True)
    display = Column(String, nullable=True)
    condition = Column(String, nullable=False, default=LaptopCondition.NEW.value)

    purchase_price = Column(Float, CheckConstraint("purchase_price >= 0"), nullable=False, default=0.0)
    sale_price = Column(Float, CheckConstraint("sale_price >= 0"), nullable=False, default=0.0)
    quantity = Column(Integer, CheckConstraint("quantity >= 0"), nullable=False, default=0)

    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    depot_id = Column(String(36), ForeignKey("depots.id"), nullable=False, index=True)
    team_member_id = Column(String(36), ForeignKey("team_members.id"), nullable=True)

    image_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    category = relationship("Category")
    depot = relationship("Depot")
    team_member = relationship("TeamMember")
