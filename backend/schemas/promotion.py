# backend/schemas/promotion.py
from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator, model_validator

from models.promotion import PromotionType
from schemas.base import ORMBase


# Schema for creating a promotion
class PromotionCreate(ORMBase):
    product_id: str
    type: PromotionType
    value: float = Field(ge=0)
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None

    # Stored in UTC; naive timestamps are taken as UTC already
    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class PromotionOut(ORMBase):
    id: str
    product_id: str
    type: str
    value: float
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class PromotionWithStatus(PromotionOut):
    active: bool


# Price of the promoted product right now
class PromotionPrice(ORMBase):
    promotion_id: str
    product_id: str
    active: bool
    base_price: float
    effective_price: float
