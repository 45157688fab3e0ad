"""Tests unitarios para WishlistService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.services.wishlist import WishlistService
from app.utils.error_handler import (
    CommerceAPIException,
    CustomerNotFoundException,
    ValidationException,
    WishlistException,
)


@pytest.fixture
def customer_client():
    client = MagicMock()
    client.get_customer = AsyncMock(
        return_value={"id": "cus_01", "metadata": {"wishlist": ["prod_1"], "newsletter": True}}
    )
    client.update_customer_metadata = AsyncMock(return_value={})
    return client


@pytest.fixture
def wishlist_service(customer_client):
    return WishlistService(customer_client=customer_client)


class TestGetWishlist:
    """Tests para la lectura de la lista de deseos."""

    @pytest.mark.asyncio
    async def test_returns_metadata_wishlist(self, wishlist_service):
        result = await wishlist_service.get_wishlist("cus_01")

        assert result == {"wishlist": ["prod_1"]}

    @pytest.mark.asyncio
    async def test_empty_without_metadata(self, wishlist_service, customer_client):
        """Un cliente sin metadata tiene una lista vacía."""
        customer_client.get_customer.return_value = {"id": "cus_01", "metadata": None}

        result = await wishlist_service.get_wishlist("cus_01")

        assert result == {"wishlist": []}

    @pytest.mark.asyncio
    async def test_customer_not_found(self, wishlist_service, customer_client):
        customer_client.get_customer.return_value = None

        with pytest.raises(CustomerNotFoundException):
            await wishlist_service.get_wishlist("cus_missing")

    @pytest.mark.asyncio
    async def test_backend_error(self, wishlist_service, customer_client):
        """Un error del backend se reporta como WishlistException."""
        customer_client.get_customer.side_effect = CommerceAPIException("HTTP 500")

        with pytest.raises(WishlistException) as exc_info:
            await wishlist_service.get_wishlist("cus_01")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to load wishlist."


class TestAddProduct:
    """Tests para agregar productos."""

    @pytest.mark.asyncio
    async def test_appends_and_keeps_metadata(self, wishlist_service, customer_client):
        """Debe agregar al final y conservar el resto de la metadata."""
        result = await wishlist_service.add_product("cus_01", "prod_2")

        assert result == {"wishlist": ["prod_1", "prod_2"]}
        customer_client.update_customer_metadata.assert_awaited_once_with(
            "cus_01", {"wishlist": ["prod_1", "prod_2"], "newsletter": True}
        )

    @pytest.mark.asyncio
    async def test_adding_twice_is_idempotent(self, wishlist_service, customer_client):
        """Un producto que ya está en la lista no se duplica ni se escribe."""
        result = await wishlist_service.add_product("cus_01", "prod_1")

        assert result == {"wishlist": ["prod_1"]}
        customer_client.update_customer_metadata.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_id", [None, "", "   ", 42])
    async def test_missing_product_id(self, wishlist_service, customer_client, product_id):
        """Sin product_id debe lanzar ValidationException (400) sin llamar al backend."""
        with pytest.raises(ValidationException) as exc_info:
            await wishlist_service.add_product("cus_01", product_id)

        assert exc_info.value.status_code == 400
        assert exc_info.value.field == "product_id"
        customer_client.get_customer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_failure(self, wishlist_service, customer_client):
        customer_client.update_customer_metadata.side_effect = CommerceAPIException("HTTP 500")

        with pytest.raises(WishlistException) as exc_info:
            await wishlist_service.add_product("cus_01", "prod_2")

        assert exc_info.value.message == "Failed to add to wishlist."
        assert exc_info.value.operation == "add"


class TestRemoveProduct:
    """Tests para quitar productos."""

    @pytest.mark.asyncio
    async def test_removes_product(self, wishlist_service, customer_client):
        result = await wishlist_service.remove_product("cus_01", "prod_1")

        assert result == {"wishlist": []}
        customer_client.update_customer_metadata.assert_awaited_once_with(
            "cus_01", {"wishlist": [], "newsletter": True}
        )

    @pytest.mark.asyncio
    async def test_removing_absent_product(self, wishlist_service):
        """Quitar un producto que no está deja la lista igual."""
        result = await wishlist_service.remove_product("cus_01", "prod_9")

        assert result == {"wishlist": ["prod_1"]}

    @pytest.mark.asyncio
    async def test_remove_failure(self, wishlist_service, customer_client):
        customer_client.update_customer_metadata.side_effect = CommerceAPIException("HTTP 500")

        with pytest.raises(WishlistException) as exc_info:
            await wishlist_service.remove_product("cus_01", "prod_1")

        assert exc_info.value.message == "Failed to remove from wishlist."
