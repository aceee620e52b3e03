from typing import Optional
from app.schemas.shopify_schema import ShopifyOrder

ORDER_NAME_MARKER = "#"


def derive_custom_id(order: ShopifyOrder) -> Optional[str]:
    """
    Build the warehouse custom_id for a Shopify order:
    - order name without its leading "#" (e.g. #1001 -> 1001)
    - falls back to the raw Shopify id when the order has no name
    Same order in -> same id out, so a webhook retried by Shopify is
    caught by the warehouse duplicate check.
    Returns:
        None if neither name nor id is present.
    """
    if order.name:
        source = order.name
    elif order.id is not None and str(order.id) != "":
        source = str(order.id)
    else:
        return None
    if source.startswith(ORDER_NAME_MARKER):
        source = source[len(ORDER_NAME_MARKER):]
    return source or None
