# backend/models/promotion.py
import enum
import uuid
from sqlalchemy import Column, String, Float, ForeignKey, CheckConstraint, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


class PromotionType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    # Extra free units granted at checkout; does not change the unit price.
    BUNDLE_UNITS = "bundle_units"


# Time-boxed discount attached to exactly one product.
class Promotion(Base):
    __tablename__ = "promotions"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_promotions_window"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)

    # Stored as plain text so that rows written by other clients still load.
    type = Column(String(20), nullable=False)
    value = Column(Float, nullable=False, default=0.0)

    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    description = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    product = relationship("Product", back_populates="promotions")
