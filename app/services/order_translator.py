from typing import Optional, Tuple, Union
from app.core.config import Settings
from app.core.exceptions import MappingError
from app.schemas.shopify_schema import ShopifyAddress, ShopifyLineItem, ShopifyOrder
from app.schemas.warehouse_schema import CartItem, WarehouseOrder, WarehouseShipping
from app.utils.id_generator import derive_custom_id


def join_street(address: ShopifyAddress) -> str:
    """
    address1 + address2 separated by ", ", empty lines dropped.
    ("12 Rue A", "Apt 4") -> "12 Rue A, Apt 4"
    """
    return ", ".join(line for line in (address.address1, address.address2) if line)


def two_letter_code(value: Optional[str]) -> str:
    # "california" -> "CA", "us" -> "US", "" -> ""
    return (value or "").strip()[:2].upper()


def _resolve_item_id(
    line: ShopifyLineItem, settings: Settings
) -> Tuple[Optional[int], str]:
    """
    Map one line item to a warehouse item id using the configured policy.
    Returns:
        (item_id, "") on success, (None, reason) on failure
    """
    sku = (line.sku or line.variant_sku).strip()
    if settings.sku_policy == "table":
        if not sku:
            return None, "Line item has no SKU"
        item_id = settings.sku_map.get(sku)
        if item_id is None:
            return None, f'SKU "{sku}" is not in the SKU map'
        return item_id, ""
    # numeric policy: the SKU is the warehouse item id
    if not sku.isdecimal():
        return None, f'Invalid numeric SKU: "{sku}"'
    try:
        return int(sku), ""
    except ValueError:
        # more digits than int() accepts
        return None, f'Invalid numeric SKU: "{sku[:32]}..."'


def _build_cart(
    order: ShopifyOrder, settings: Settings, order_ref: str
) -> Union[list[CartItem], MappingError]:
    if not order.line_items:
        return MappingError("Order has no line items", order_ref=order_ref)
    cart: list[CartItem] = []
    for line in order.line_items:
        sku = line.sku or line.variant_sku
        item_id, reason = _resolve_item_id(line, settings)
        if item_id is None:
            return MappingError(
                f"{reason} (line item id {line.id})",
                order_ref=order_ref,
                sku=sku,
                line_item_id=line.id,
            )
        if line.quantity is None or line.quantity <= 0:
            return MappingError(
                f'Invalid quantity for SKU "{sku}" (line item id {line.id})',
                order_ref=order_ref,
                sku=sku,
                line_item_id=line.id,
            )
        cart.append(CartItem(item_id=item_id, quantity=line.quantity))
    return cart


def _build_shipping(order: ShopifyOrder) -> WarehouseShipping:
    # prefer shipping, fall back to billing (some stores), else all blank
    address = order.shipping_address or order.billing_address or ShopifyAddress()
    customer = order.customer
    return WarehouseShipping(
        first_name=address.first_name or (customer.first_name if customer else ""),
        last_name=address.last_name or (customer.last_name if customer else ""),
        company_name=address.company,
        address_street=join_street(address),
        zip_code=address.zip,
        city=address.city,
        state_province_code=two_letter_code(address.province_code or address.province),
        country_code=two_letter_code(address.country_code or address.country),
        phone_number=address.phone or order.phone,
        email=order.email or order.contact_email or (customer.email if customer else ""),
    )


def translate(order: ShopifyOrder, settings: Settings) -> Union[WarehouseOrder, MappingError]:
    """
    Map a Shopify order onto the warehouse order schema.
    Pure: no I/O, same input and settings -> same WarehouseOrder.
    Returns:
        WarehouseOrder, or a MappingError naming the offending SKU / line item.
        A failure never yields a partial order.
    """
    order_ref = order.name or str(order.id or "")
    custom_id = derive_custom_id(order)
    if custom_id is None:
        return MappingError("Order has neither a name nor an id", order_ref=order_ref)

    cart = _build_cart(order, settings, order_ref)
    if isinstance(cart, MappingError):
        return cart

    return WarehouseOrder(
        custom_id=custom_id,
        check_multiple_custom_id=True,
        idle=settings.idle,
        shipping=_build_shipping(order),
        cart=cart,
    )
