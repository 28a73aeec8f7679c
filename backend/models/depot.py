import uuid
from sqlalchemy import Column, String, DateTime, func
from database import Base


# Warehouse / shop location holding stock
class Depot(Base):
    __tablename__ = "depots"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
