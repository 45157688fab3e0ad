"""
Configuración de la tienda guardada en la metadata del store de comercio.

La vista pública siempre debe poder renderizarse en la tienda, por lo que
devuelve valores por defecto ante cualquier fallo. La vista de admin y las
actualizaciones sí reportan los errores.
"""

import logging
from typing import Any, Dict, Optional

from app.db.commerce_clients import CommerceStoreClient
from app.utils.error_handler import SettingsException, StoreNotFoundException

logger = logging.getLogger(__name__)

PUBLIC_TEXT_FIELDS = ("announcement_text", "instagram_url", "contact_email")


class StoreSettingsService:
    """Servicio para leer y actualizar la configuración de la tienda."""

    def __init__(self, store_client: CommerceStoreClient, default_free_shipping_threshold: int = 6900):
        self.store_client = store_client
        self.default_free_shipping_threshold = default_free_shipping_threshold

    def default_settings(self) -> Dict[str, Any]:
        return {
            "free_shipping_threshold": self.default_free_shipping_threshold,
            "announcement_text": "",
            "instagram_url": "",
            "contact_email": "",
        }

    def _public_view(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        settings = self.default_settings()
        threshold = metadata.get("free_shipping_threshold")
        if isinstance(threshold, int) and not isinstance(threshold, bool) and threshold >= 0:
            settings["free_shipping_threshold"] = threshold
        for field_name in PUBLIC_TEXT_FIELDS:
            value = metadata.get(field_name)
            if isinstance(value, str):
                settings[field_name] = value
        return settings

    @staticmethod
    def _metadata_of(store: Dict[str, Any]) -> Dict[str, Any]:
        metadata = store.get("metadata")
        return dict(metadata) if isinstance(metadata, dict) else {}

    async def _require_store(self) -> Dict[str, Any]:
        store = await self.store_client.get_store()
        if not store:
            raise StoreNotFoundException()
        return store

    async def get_public_settings(self) -> Dict[str, Any]:
        """
        Obtiene la configuración pública para la tienda.

        Returns:
            Dict: Configuración, o valores por defecto si no hay store o falla la lectura
        """
        try:
            store = await self.store_client.get_store()
        except Exception as e:
            logger.warning(f"⚠️ No se pudo leer la configuración de la tienda, usando valores por defecto: {e}")
            return self.default_settings()

        if not store:
            return self.default_settings()
        return self._public_view(self._metadata_of(store))

    async def get_admin_settings(self) -> Dict[str, Any]:
        """
        Obtiene la configuración para el admin, incluyendo la metadata completa.

        Raises:
            StoreNotFoundException: Si el backend no tiene ninguna tienda
            SettingsException: Si no se puede leer la tienda
        """
        try:
            store = await self._require_store()
        except StoreNotFoundException:
            raise
        except Exception as e:
            logger.error(f"❌ Error cargando configuración de la tienda: {e}")
            raise SettingsException("Failed to load settings.", operation="load") from e

        metadata = self._metadata_of(store)
        return {
            **self._public_view(metadata),
            "store_name": store.get("name"),
            "store_id": store.get("id"),
            "metadata": metadata,
        }

    async def update_settings(
        self,
        free_shipping_threshold: Optional[int] = None,
        announcement_text: Optional[str] = None,
        instagram_url: Optional[str] = None,
        contact_email: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Aplica una actualización parcial a la metadata de la tienda.

        Solo se modifican los campos recibidos; ``metadata`` se fusiona sobre la
        metadata actual después de los campos con nombre.

        Returns:
            Dict: ``success``, el ``free_shipping_threshold`` resultante y ``metadata``

        Raises:
            StoreNotFoundException: Si el backend no tiene ninguna tienda
            SettingsException: Si la actualización falla
        """
        try:
            store = await self._require_store()
            updated = self._metadata_of(store)

            if free_shipping_threshold is not None:
                updated["free_shipping_threshold"] = free_shipping_threshold
            for field_name, value in (
                ("announcement_text", announcement_text),
                ("instagram_url", instagram_url),
                ("contact_email", contact_email),
            ):
                if value is not None:
                    updated[field_name] = value
            if metadata:
                updated.update(metadata)

            await self.store_client.update_store_metadata(store["id"], updated)
        except StoreNotFoundException:
            raise
        except Exception as e:
            logger.error(f"❌ Error actualizando configuración de la tienda: {e}")
            raise SettingsException("Failed to update settings.", operation="update") from e

        logger.info("✅ Configuración de la tienda actualizada")
        return {
            "success": True,
            "free_shipping_threshold": updated.get("free_shipping_threshold"),
            "metadata": updated,
        }
