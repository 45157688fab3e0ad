"""
Store settings endpoints.

- Admin: read the full settings and update them
- Store: public settings, always answered (defaults on failure)
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_settings_service
from app.api.v1.schemas.settings_schemas import (
    AdminSettingsResponse,
    PublicSettingsResponse,
    SettingsUpdateResponse,
    StoreSettingsUpdate,
)
from app.services.store_settings import StoreSettingsService

logger = logging.getLogger(__name__)

admin_router = APIRouter()
store_router = APIRouter()


@admin_router.get(
    "",
    response_model=AdminSettingsResponse,
    summary="Get store settings",
    description="Configurable settings plus the raw store metadata",
)
async def get_admin_settings(service: StoreSettingsService = Depends(get_settings_service)) -> dict[str, Any]:
    return await service.get_admin_settings()


@admin_router.post(
    "",
    response_model=SettingsUpdateResponse,
    summary="Update store settings",
    description="Partial update; only the provided fields change and metadata is merged",
)
async def update_admin_settings(
    payload: StoreSettingsUpdate,
    service: StoreSettingsService = Depends(get_settings_service),
) -> dict[str, Any]:
    """
    Update the store settings.

    Args:
        payload: Fields to change

    Returns:
        Success flag, resulting threshold and the merged metadata
    """
    changes = payload.model_dump(exclude_none=True)
    logger.info(f"🛠️ Actualizando configuración: {sorted(changes)}")
    return await service.update_settings(**changes)


@store_router.get(
    "",
    response_model=PublicSettingsResponse,
    summary="Get public store settings",
    description="Settings for the storefront; defaults when the store cannot be read",
)
async def get_public_settings(service: StoreSettingsService = Depends(get_settings_service)) -> dict[str, Any]:
    return await service.get_public_settings()
