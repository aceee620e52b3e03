import httpx
from fastapi import Request
from app.core.config import Settings


async def settings_from_app(request: Request) -> Settings:
    # loaded once at startup, read-only afterwards
    return request.app.state.settings


async def warehouse_client_from_app(request: Request) -> httpx.AsyncClient:
    return request.app.state.warehouse_client
