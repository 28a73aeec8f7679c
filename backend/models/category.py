import uuid
from sqlalchemy import Column, String, DateTime, func
from database import Base


# Product category (e.g. "Laptop", "Accessories")
class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
