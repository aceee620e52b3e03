from typing import Optional
import httpx
from app.core.config import Settings

# global variable for the warehouse http client
# one pooled AsyncClient per process, shared by every request
_warehouse_client: Optional[httpx.AsyncClient] = None


async def create_warehouse_client(settings: Settings) -> httpx.AsyncClient:
    """
    Create the global async HTTP client for the warehouse api.
    Called once during application startup.
    """
    global _warehouse_client
    if _warehouse_client is None:
        _warehouse_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.warehouse_timeout_seconds),
        )
    return _warehouse_client


async def close_warehouse_client() -> None:
    """
    Gracefully close pooled connections on shutdown.
    """
    global _warehouse_client
    if _warehouse_client is not None:
        await _warehouse_client.aclose()
        _warehouse_client = None
