"""Tests unitarios para la configuración de la aplicación."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


class TestSettings:
    """Tests para los validadores de Settings."""

    def test_currency_code_is_lowercased(self):
        settings = Settings(STORE_CURRENCY_CODE=" CHF ")

        assert settings.STORE_CURRENCY_CODE == "chf"

    def test_invalid_currency_code(self):
        """Debe rechazar códigos que no tengan 3 letras."""
        with pytest.raises(ValidationError):
            Settings(STORE_CURRENCY_CODE="swiss")

    def test_negative_free_shipping_threshold(self):
        """El umbral por defecto no puede ser negativo."""
        with pytest.raises(ValidationError):
            Settings(DEFAULT_FREE_SHIPPING_THRESHOLD=-1)

    def test_base_url_is_normalized(self):
        settings = Settings(COMMERCE_API_URL="commerce.example.ch/")

        assert settings.COMMERCE_API_URL == "https://commerce.example.ch"

    def test_allowed_hosts_list(self):
        settings = Settings(ALLOWED_HOSTS="admin.example.ch, shop.example.ch,")

        assert settings.allowed_hosts_list == ["admin.example.ch", "shop.example.ch"]

    @pytest.mark.parametrize("limit", [0, -3])
    def test_top_products_limit_must_be_positive(self, limit):
        """Un límite menor que 1 se rechaza al cargar la configuración."""
        with pytest.raises(ValidationError):
            Settings(ANALYTICS_TOP_PRODUCTS_LIMIT=limit)
