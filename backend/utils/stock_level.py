# backend/utils/stock_level.py
import enum
from typing import Optional

AMPLE_ABOVE = 10
LOW_STOCK_MAX = 5


class StockLevel(str, enum.Enum):
    AMPLE = "ample"
    SECONDARY = "secondary"
    OUT = "out"


# Three-tier badge used by the list and card views
def classify_stock(quantity: Optional[int]) -> StockLevel:
    qty = quantity or 0
    if qty > AMPLE_ABOVE:
        return StockLevel.AMPLE
    if qty > 0:
        return StockLevel.SECONDARY
    return StockLevel.OUT


# "Low stock" warning shown on the detail page
def is_low_stock(quantity: Optional[int]) -> bool:
    qty = quantity or 0
    return 0 < qty <= LOW_STOCK_MAX
