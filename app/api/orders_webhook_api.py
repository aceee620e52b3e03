import json
import logging
from typing import Any
import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from starlette.requests import ClientDisconnect
from app.api.dependencies import settings_from_app, warehouse_client_from_app
from app.core.config import Settings
from app.core.exceptions import AuthError, FormatError, MappingError, TransportError
from app.schemas.shopify_schema import ShopifyOrder
from app.schemas.warehouse_schema import DeliveryStatus
from app.services.order_translator import translate
from app.services.signature import verify_shopify
from app.services.warehouse_delivery import deliver_order_shielded

logger = logging.getLogger(__name__)
# only POST is routed, any other method gets 405 with "Allow: POST"
router = APIRouter(prefix="/api/webhooks/shopify", tags=["webhooks"])


def _parse_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized int literals
    except (ValueError, RecursionError) as exc:
        raise FormatError("invalid json") from exc


def _mapping_error_response(error: MappingError) -> PlainTextResponse:
    logger.warning(
        "Mapping error: %s | order=%s sku=%s line_item_id=%s",
        error.message,
        error.order_ref,
        error.sku,
        error.line_item_id,
    )
    # 200 so Shopify doesn't retry endlessly on permanent mapping issues
    return PlainTextResponse("mapping error", status_code=200)


@router.post("/orders-create", summary="Relay a Shopify order to the warehouse")
async def orders_create(
    request: Request,
    settings: Settings = Depends(settings_from_app),
    client: httpx.AsyncClient = Depends(warehouse_client_from_app),
) -> PlainTextResponse:
    """
    Shopify `orders/create` webhook.
    Steps:
    1. Read the raw body and verify its HMAC before touching it.
    2. Parse JSON (400 if it is not JSON) and decode it into a ShopifyOrder.
    3. Translate into a warehouse order (mapping problems -> 200, no retry).
    4. POST to the warehouse; only transient failures answer 500 so Shopify retries.
    """
    try:
        raw = await request.body()
    except ClientDisconnect as exc:
        raise TransportError("no body") from exc

    signature = request.headers.get(settings.signature_header)
    if not verify_shopify(settings.shopify_webhook_secret.get_secret_value(), raw, signature):
        logger.warning("Shopify webhook rejected: bad or missing signature")
        raise AuthError("bad hmac")

    payload = _parse_json(raw)
    try:
        order = ShopifyOrder.model_validate(payload)
    except ValidationError as exc:
        # signed JSON that is not shaped like an order will not improve on retry
        return _mapping_error_response(
            MappingError(f"Payload is not a Shopify order: {exc.error_count()} error(s)")
        )

    # quick guard: need at least one line item
    if not order.line_items:
        logger.info("Order %s has no line items, nothing to send", order.name or order.id)
        return PlainTextResponse("no line items", status_code=200)

    result = translate(order, settings)
    if isinstance(result, MappingError):
        return _mapping_error_response(result)

    outcome = await deliver_order_shielded(client, result, settings)

    if outcome.status is DeliveryStatus.DELIVERED:
        return PlainTextResponse("ok", status_code=200)
    if outcome.should_retry:
        if outcome.network_error:
            return PlainTextResponse("warehouse network error", status_code=500)
        return PlainTextResponse("warehouse error", status_code=500)
    return PlainTextResponse("received", status_code=200)
