from contextlib import asynccontextmanager
import logging
from typing import Any, Dict
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from app.api import orders_webhook_api, warehouse_notifications_api
from app.api.dependencies import settings_from_app
from app.clients.warehouse_client import close_warehouse_client, create_warehouse_client
from app.core.config import Settings, settings
from app.core.exceptions import RelayError
from app.core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context for FastAPI.
    - On startup: configure logging, create warehouse http client, attach to app.state
    - On shutdown: close the http client
    """
    app_settings: Settings = app.state.settings
    configure_logging(app_settings)
    logger.info("Starting Shopify -> warehouse order relay (sku_policy=%s)", app_settings.sku_policy)
    if app_settings.sku_policy == "table" and not app_settings.sku_map:
        logger.warning("SKU_POLICY=table but SKU_MAP is empty, every order will fail mapping")
    # http-client object is attached in app:state for reuse in overall project
    app.state.warehouse_client = await create_warehouse_client(app_settings)
    try:
        # returning controller to main process
        yield
    finally:
        logger.info("Shutting down Shopify -> warehouse order relay...")
        await close_warehouse_client()


# overall app object
app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan,
)
app.state.settings = settings
app.include_router(orders_webhook_api.router)
app.include_router(warehouse_notifications_api.router)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> PlainTextResponse:
    """
    Every boundary failure answers with plain text and the status Shopify
    (or the warehouse) needs to see; details stay in our logs only.
    """
    if exc.details:
        logger.info("Request to %s refused: %s | details=%s", request.url.path, exc.message, exc.details)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.get("/system-health")
async def system_health(app_settings: Settings = Depends(settings_from_app)) -> JSONResponse:
    """
    Configuration health-check endpoint.
    - Reports whether the secrets are present (never their values)
    - Reports the active SKU resolution policy
    """
    components: Dict[str, Any] = {
        "shopify_signature": {
            "status": "up" if app_settings.shopify_webhook_secret.get_secret_value() else "down"
        },
        "warehouse": {
            "status": "up" if app_settings.warehouse_token.get_secret_value() else "down",
            "base_url": app_settings.warehouse_base_url,
        },
        "sku_resolution": {
            "policy": app_settings.sku_policy,
            "mapped_skus": len(app_settings.sku_map),
        },
    }
    overall_status = "up" if all(
        c.get("status", "up") == "up" for c in components.values()
    ) else "degraded"
    return JSONResponse(
        {
            "app": app_settings.app_name,
            "environment": app_settings.environment,
            "status": overall_status,
            "components": components,
        }
    )


@app.get("/")
async def root() -> Dict[str, str]:
    """
    Simple landing endpoint to verify app is running.
    """
    return {
        "message": "Shopify -> warehouse order relay",
        "webhook": "/api/webhooks/shopify/orders-create",
        "health": "/system-health",
    }
