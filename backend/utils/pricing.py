# backend/utils/pricing.py
from typing import Callable, Iterable, NamedTuple, Optional, Any

# Suggested sale price for a bundle: cost + 30%
BUNDLE_MARKUP = 1.30


class BundlePrice(NamedTuple):
    cost_total: float
    sale_price: float


def _field(item: Any, name: str):
    # Components come either from the API schemas or from the JSON column
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def price_bundle(
    components: Iterable[Any],
    lookup: Callable[[str], Optional[Any]],
    manual_price: Optional[float] = None,
) -> BundlePrice:
    """
    Cost and suggested sale price of a composed product.

    cost_total is the sum of component purchase prices weighted by quantity.
    Components whose product cannot be found contribute nothing. A positive
    manual_price wins over the 30% markup price, which is rounded to the cent.
    """
    cost_total = 0.0
    for comp in components:
        product = lookup(_field(comp, "product_id"))
        if product is None:
            continue
        purchase_price = getattr(product, "purchase_price", None) or 0.0
        cost_total += purchase_price * (_field(comp, "quantity") or 0)

    if isinstance(manual_price, (int, float)) and not isinstance(manual_price, bool) and manual_price > 0:
        sale_price = float(manual_price)
    else:
        sale_price = round(cost_total * BUNDLE_MARKUP, 2)

    return BundlePrice(cost_total=cost_total, sale_price=sale_price)
