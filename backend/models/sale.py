import uuid
from sqlalchemy import Column, String, Float, ForeignKey, DateTime, func
from database import Base


# Sale line item. Sales are recorded by the point-of-sale side; the stock
# admin only reads this table to refuse deleting items that were sold.
class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    sale_id = Column(String(36), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=True, index=True)
    laptop_id = Column(String(36), ForeignKey("laptops.id"), nullable=True, index=True)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
