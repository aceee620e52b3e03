import hmac
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.requests import ClientDisconnect
from app.api.dependencies import settings_from_app
from app.core.config import Settings
from app.core.exceptions import AuthError

logger = logging.getLogger(__name__)
# only POST is routed, any other method gets 405 with "Allow: POST"
router = APIRouter(prefix="/api/cdclick", tags=["webhooks"])


def _token_matches(expected: str, got: str | None) -> bool:
    if not expected or not got:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), got.encode("utf-8"))


@router.post("/webhook", summary="Acknowledge a warehouse notification")
async def warehouse_webhook(
    request: Request,
    settings: Settings = Depends(settings_from_app),
) -> PlainTextResponse:
    """
    Status notifications pushed by the warehouse.
    Authenticated by the static `apikey` header (same token we use towards them),
    logged and always acknowledged; nothing is processed.
    """
    got = request.headers.get("apikey")
    if not _token_matches(settings.warehouse_token.get_secret_value(), got):
        logger.warning("Warehouse webhook: bad apikey")
        raise AuthError("unauthorized")

    try:
        body = await request.body()
    except ClientDisconnect:
        body = b""
    logger.info("Warehouse webhook payload: %s", body.decode("utf-8", errors="replace"))
    return PlainTextResponse("ok", status_code=200)
