"""Tests unitarios para StoreSettingsService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.store_settings import StoreSettingsService
from app.utils.error_handler import CommerceAPIException, SettingsException, StoreNotFoundException

STORE = {
    "id": "store_01",
    "name": "Atelier Bern",
    "metadata": {
        "free_shipping_threshold": 8000,
        "announcement_text": "Gratis Versand ab CHF 80",
        "instagram_url": "https://instagram.com/atelier",
        "contact_email": "hallo@atelier.ch",
        "legacy_flag": True,
    },
}


@pytest.fixture
def store_client():
    client = MagicMock()
    client.get_store = AsyncMock(return_value={**STORE, "metadata": dict(STORE["metadata"])})
    client.update_store_metadata = AsyncMock(return_value={})
    return client


@pytest.fixture
def settings_service(store_client):
    return StoreSettingsService(store_client=store_client, default_free_shipping_threshold=6900)


class TestPublicSettings:
    """Tests para la vista pública de la configuración."""

    @pytest.mark.asyncio
    async def test_reads_metadata(self, settings_service):
        """Debe exponer solo los campos públicos."""
        result = await settings_service.get_public_settings()

        assert result == {
            "free_shipping_threshold": 8000,
            "announcement_text": "Gratis Versand ab CHF 80",
            "instagram_url": "https://instagram.com/atelier",
            "contact_email": "hallo@atelier.ch",
        }

    @pytest.mark.asyncio
    async def test_defaults_when_store_missing(self, settings_service, store_client):
        """Sin tienda debe devolver los valores por defecto."""
        store_client.get_store.return_value = None

        result = await settings_service.get_public_settings()

        assert result == settings_service.default_settings()
        assert result["free_shipping_threshold"] == 6900

    @pytest.mark.asyncio
    async def test_defaults_on_backend_error(self, settings_service, store_client):
        """Un error del backend nunca llega a la tienda."""
        store_client.get_store.side_effect = CommerceAPIException("HTTP 500")

        result = await settings_service.get_public_settings()

        assert result == settings_service.default_settings()

    @pytest.mark.asyncio
    async def test_invalid_values_fall_back_to_defaults(self, settings_service, store_client):
        """Valores con tipo incorrecto se reemplazan por los de defecto."""
        store_client.get_store.return_value = {
            "id": "store_01",
            "metadata": {"free_shipping_threshold": "80", "announcement_text": 42, "contact_email": "a@b.ch"},
        }

        result = await settings_service.get_public_settings()

        assert result["free_shipping_threshold"] == 6900
        assert result["announcement_text"] == ""
        assert result["contact_email"] == "a@b.ch"

    @pytest.mark.asyncio
    async def test_boolean_threshold_is_ignored(self, settings_service, store_client):
        store_client.get_store.return_value = {"id": "store_01", "metadata": {"free_shipping_threshold": True}}

        result = await settings_service.get_public_settings()

        assert result["free_shipping_threshold"] == 6900


class TestAdminSettings:
    """Tests para la vista de admin."""

    @pytest.mark.asyncio
    async def test_includes_store_and_metadata(self, settings_service):
        """Debe incluir nombre, id y la metadata completa."""
        result = await settings_service.get_admin_settings()

        assert result["store_name"] == "Atelier Bern"
        assert result["store_id"] == "store_01"
        assert result["metadata"]["legacy_flag"] is True
        assert result["free_shipping_threshold"] == 8000

    @pytest.mark.asyncio
    async def test_store_not_found(self, settings_service, store_client):
        """Sin tienda debe lanzar StoreNotFoundException."""
        store_client.get_store.return_value = None

        with pytest.raises(StoreNotFoundException):
            await settings_service.get_admin_settings()

    @pytest.mark.asyncio
    async def test_backend_error(self, settings_service, store_client):
        """Un error del backend se reporta como SettingsException."""
        store_client.get_store.side_effect = CommerceAPIException("HTTP 500")

        with pytest.raises(SettingsException) as exc_info:
            await settings_service.get_admin_settings()

        assert exc_info.value.message == "Failed to load settings."
        assert exc_info.value.operation == "load"


class TestUpdateSettings:
    """Tests para la actualización parcial."""

    @pytest.mark.asyncio
    async def test_partial_update_preserves_other_keys(self, settings_service, store_client):
        """Solo los campos recibidos deben cambiar."""
        result = await settings_service.update_settings(free_shipping_threshold=10000)

        store_client.update_store_metadata.assert_awaited_once()
        store_id, metadata = store_client.update_store_metadata.await_args.args
        assert store_id == "store_01"
        assert metadata["free_shipping_threshold"] == 10000
        assert metadata["announcement_text"] == "Gratis Versand ab CHF 80"
        assert metadata["legacy_flag"] is True
        assert result["success"] is True
        assert result["free_shipping_threshold"] == 10000

    @pytest.mark.asyncio
    async def test_metadata_is_merged_last(self, settings_service, store_client):
        """La metadata libre se fusiona después de los campos con nombre."""
        result = await settings_service.update_settings(
            announcement_text="Sale",
            metadata={"announcement_text": "Override", "banner_color": "#000"},
        )

        assert result["metadata"]["announcement_text"] == "Override"
        assert result["metadata"]["banner_color"] == "#000"

    @pytest.mark.asyncio
    async def test_store_not_found(self, settings_service, store_client):
        store_client.get_store.return_value = None

        with pytest.raises(StoreNotFoundException):
            await settings_service.update_settings(free_shipping_threshold=0)

        store_client.update_store_metadata.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_failure(self, settings_service, store_client):
        """Un fallo al guardar se reporta como SettingsException."""
        store_client.update_store_metadata.side_effect = CommerceAPIException("HTTP 500")

        with pytest.raises(SettingsException) as exc_info:
            await settings_service.update_settings(contact_email="x@y.ch")

        assert exc_info.value.message == "Failed to update settings."
        assert exc_info.value.operation == "update"
