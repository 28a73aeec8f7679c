# backend/utils/promotions.py
from datetime import datetime, timezone
from typing import Any, Optional

from models.promotion import PromotionType


class InvalidPromotionType(ValueError):
    """Raised when a promotion carries a type this service cannot price."""

    def __init__(self, promotion_type: Any):
        self.promotion_type = promotion_type
        super().__init__(f"Unknown promotion type: {promotion_type!r}")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; those are stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_promotion_active(promotion: Any, now: Optional[datetime] = None) -> bool:
    """True when start <= now <= end (both bounds inclusive)."""
    now = _as_utc(now or datetime.now(timezone.utc))
    return _as_utc(promotion.start_date) <= now <= _as_utc(promotion.end_date)


def effective_price(base_price: Optional[float], promotion: Any) -> float:
    """
    Unit price once the promotion is applied.

    Missing base price or value count as 0. Fixed amounts larger than the
    price give a negative result, returned as is. Bundle promotions leave the
    price unchanged.
    """
    base = base_price or 0.0
    value = getattr(promotion, "value", None) or 0.0
    raw_type = getattr(promotion, "type", None)

    try:
        promo_type = PromotionType(raw_type)
    except ValueError:
        raise InvalidPromotionType(raw_type)

    if promo_type == PromotionType.PERCENTAGE:
        return base * (1 - value / 100)
    if promo_type == PromotionType.FIXED_AMOUNT:
        return base - value
    return base
