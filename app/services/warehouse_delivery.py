import asyncio
import logging
from typing import Any, Optional, Set
import httpx
from app.core.config import Settings
from app.schemas.warehouse_schema import DeliveryOutcome, DeliveryStatus, WarehouseOrder

logger = logging.getLogger(__name__)

# the warehouse answers 201 + {"success": true} when it accepted the order
CREATED = 201

# deliveries still running after their request was cancelled
_in_flight: Set["asyncio.Task[DeliveryOutcome]"] = set()


def _has_success_flag(body: Any) -> bool:
    return isinstance(body, dict) and bool(body.get("success"))


def classify_response(
    status_code: Optional[int],
    body: Any,
    transport_error: Optional[BaseException] = None,
) -> DeliveryOutcome:
    """
    Turn the warehouse answer into a delivery outcome.
    - 201 with a success flag                    -> delivered
    - any other 1xx-4xx answer                   -> rejected permanently
    - 5xx, missing/zero status, transport error  -> failed transiently
    Only the last one should make Shopify retry.
    """
    if transport_error is not None:
        return DeliveryOutcome.unavailable(
            f"network error: {type(transport_error).__name__}: {transport_error}",
            network_error=True,
        )
    status = status_code or 0
    if status == CREATED and _has_success_flag(body):
        return DeliveryOutcome.delivered(http_status=status)
    if status == 0 or status >= 500:
        return DeliveryOutcome.unavailable(
            f"warehouse error {status}: {body!r}", http_status=status or None
        )
    return DeliveryOutcome.rejected(f"warehouse refused {status}: {body!r}", http_status=status)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


async def deliver_order(
    client: httpx.AsyncClient, order: WarehouseOrder, settings: Settings
) -> DeliveryOutcome:
    """
    POST the order to the warehouse once.
    Never raises: non-2xx statuses and network failures are classified,
    nothing is retried here (Shopify does the retrying).
    """
    try:
        response = await client.post(
            settings.orders_url,
            content=order.model_dump_json(),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {settings.warehouse_token.get_secret_value()}",
            },
            timeout=settings.warehouse_timeout_seconds,
        )
    except httpx.HTTPError as exc:
        outcome = classify_response(None, None, transport_error=exc)
        logger.error(
            "Network error posting order to warehouse: custom_id=%s reason=%s",
            order.custom_id,
            outcome.reason,
        )
        return outcome

    outcome = classify_response(response.status_code, _json_or_none(response))
    if outcome.should_retry:
        logger.error(
            "Warehouse unavailable: custom_id=%s status=%s reason=%s",
            order.custom_id,
            response.status_code,
            outcome.reason,
        )
    elif outcome.status is DeliveryStatus.REJECTED_PERMANENTLY:
        # permanent: Shopify gets 200 and will not resend, someone has to look at it
        logger.error(
            "ALERT warehouse rejected order: custom_id=%s status=%s reason=%s",
            order.custom_id,
            response.status_code,
            outcome.reason,
        )
    else:
        logger.info("Order delivered to warehouse: custom_id=%s", order.custom_id)
    return outcome


async def deliver_order_shielded(
    client: httpx.AsyncClient, order: WarehouseOrder, settings: Settings
) -> DeliveryOutcome:
    """
    deliver_order() in its own task, shielded from the caller's cancellation.
    The warehouse may already be creating the order when the Shopify
    connection drops, so the POST is always allowed to finish.
    """
    task = asyncio.ensure_future(deliver_order(client, order, settings))
    # strong reference until done, the event loop only keeps weak ones
    _in_flight.add(task)
    task.add_done_callback(_in_flight.discard)
    return await asyncio.shield(task)
