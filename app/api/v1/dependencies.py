"""
Proveedores de dependencias para los endpoints de la API v1.

Los servicios se construyen en el lifespan y se guardan en ``app.state``;
en los tests se reemplazan con ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Header, Request

from app.services.analytics import OrderAnalyticsService
from app.services.feed import InstagramFeedService
from app.services.store_settings import StoreSettingsService
from app.services.wishlist import WishlistService
from app.utils.error_handler import AppException, ErrorCode


def _get_state_service(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise AppException(
            message=f"Service '{name}' is not initialized",
            error_code=ErrorCode.CONFIGURATION_ERROR,
            status_code=503,
        )
    return service


def get_analytics_service(request: Request) -> OrderAnalyticsService:
    return _get_state_service(request, "analytics_service")


def get_feed_service(request: Request) -> InstagramFeedService:
    return _get_state_service(request, "feed_service")


def get_settings_service(request: Request) -> StoreSettingsService:
    return _get_state_service(request, "settings_service")


def get_wishlist_service(request: Request) -> WishlistService:
    return _get_state_service(request, "wishlist_service")


def get_customer_id(x_customer_id: Optional[str] = Header(None, alias="X-Customer-ID")) -> str:
    """
    Cliente autenticado, tal como lo reenvía el gateway de autenticación.

    Raises:
        AppException: 401 si la request no trae cliente
    """
    if not x_customer_id or not x_customer_id.strip():
        raise AppException(
            message="Not authenticated.",
            error_code=ErrorCode.NOT_AUTHENTICATED,
            status_code=401,
        )
    return x_customer_id.strip()
