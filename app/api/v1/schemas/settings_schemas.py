"""
Modelos Pydantic para la configuración de la tienda.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr


class PublicSettingsResponse(BaseModel):
    """Configuración pública consumida por la tienda."""

    free_shipping_threshold: int = Field(..., ge=0, description="Umbral de envío gratis en unidades menores")
    announcement_text: str = ""
    instagram_url: str = ""
    contact_email: str = ""


class AdminSettingsResponse(PublicSettingsResponse):
    """Configuración completa para el admin."""

    store_name: Optional[str] = None
    store_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class StoreSettingsUpdate(BaseModel):
    """
    Actualización parcial de la configuración.

    Todos los campos son opcionales; ``metadata`` se fusiona sobre la
    metadata existente.
    """

    free_shipping_threshold: Optional[StrictInt] = Field(None, ge=0)
    announcement_text: Optional[StrictStr] = None
    instagram_url: Optional[StrictStr] = None
    contact_email: Optional[StrictStr] = None
    metadata: Optional[Dict[str, Any]] = None


class SettingsUpdateResponse(BaseModel):
    """Resultado de una actualización de configuración."""

    success: bool
    free_shipping_threshold: Optional[int] = None
    metadata: Dict[str, Any]
