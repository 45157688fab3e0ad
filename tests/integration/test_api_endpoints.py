"""
Tests de integración para los endpoints de la API v1.

Usan la aplicación completa (middleware, manejadores de excepciones y
routers) sin ejecutar el lifespan; los servicios se inyectan con
``dependency_overrides``.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.v1.dependencies import (
    get_analytics_service,
    get_feed_service,
    get_settings_service,
    get_wishlist_service,
)
from app.main import create_application
from app.services.analytics import OrderAnalyticsAggregator, OrderAnalyticsService
from app.services.store_settings import StoreSettingsService
from app.services.wishlist import WishlistService
from app.utils.error_handler import CommerceAPIException

RAW_ORDERS = [
    {
        "id": "order_1",
        "status": "completed",
        "created_at": "2020-01-01T00:00:00Z",
        "summary": {"totals": {"paid_total": 50, "current_order_total": 50}},
        "items": [{"id": "oi_1", "item_id": "li_1", "quantity": 2, "unit_price": 25}],
    },
    {
        "id": "order_2",
        "status": "canceled",
        "created_at": "2020-01-02T00:00:00Z",
        "summary": {"totals": {"paid_total": 0, "current_order_total": 30}},
        "items": [],
    },
]

RAW_LINE_ITEMS = [{"id": "li_1", "title": "Leinen Shirt", "product_id": "prod_1", "unit_price": 25}]


@pytest.fixture
def app():
    return create_application()


@pytest.fixture
def data_source():
    source = MagicMock()
    source.fetch_orders = AsyncMock(return_value=RAW_ORDERS)
    source.fetch_line_items = AsyncMock(return_value=RAW_LINE_ITEMS)
    return source


@pytest.fixture
def store_client():
    client = MagicMock()
    client.get_store = AsyncMock(
        return_value={"id": "store_01", "name": "Atelier", "metadata": {"free_shipping_threshold": 5000}}
    )
    client.update_store_metadata = AsyncMock(return_value={})
    return client


@pytest.fixture
def customer_client():
    client = MagicMock()
    client.get_customer = AsyncMock(return_value={"id": "cus_01", "metadata": {"wishlist": ["prod_1"]}})
    client.update_customer_metadata = AsyncMock(return_value={})
    return client

@pytest.fixture
def client(app, data_source, store_client, customer_client):
    analytics_service = OrderAnalyticsService(data_source=data_source, aggregator=OrderAnalyticsAggregator())
    settings_service = StoreSettingsService(store_client=store_client)
    feed_service = MagicMock()
    feed_service.get_feed = AsyncMock(return_value={"posts": [{"id": "1", "media_type": "IMAGE"}]})

    app.dependency_overrides[get_analytics_service] = lambda: analytics_service
    app.dependency_overrides[get_settings_service] = lambda: settings_service
    app.dependency_overrides[get_feed_service] = lambda: feed_service
    app.dependency_overrides[get_wishlist_service] = lambda: WishlistService(customer_client=customer_client)
    return TestClient(app)


class TestAnalyticsEndpoint:
    """Tests para GET /api/v1/admin/analytics."""

    def test_returns_snapshot(self, client):
        """Debe devolver las métricas en unidades menores."""
        response = client.get("/api/v1/admin/analytics")

        assert response.status_code == 200
        data = response.json()
        assert data["total_revenue"] == 5000
        assert data["total_orders"] == 2
        assert data["canceled_orders"] == 1
        assert data["conversion_rate"] == 100
        assert data["currency_code"] == "chf"
        assert data["top_products"] == [{"title": "Leinen Shirt", "quantity": 2, "revenue": 5000}]
        assert len(data["revenue_by_day"]) == 30
        assert data["revenue_30d"] == 0

    def test_upstream_error_envelope(self, client, data_source):
        """Un fallo del backend responde 500 con error_detail y sin snapshot parcial."""
        data_source.fetch_orders.side_effect = CommerceAPIException("HTTP 503: unavailable")

        response = client.get("/api/v1/admin/analytics", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 500
        data = response.json()
        assert data["error"] is True
        assert data["message"] == "Failed to load analytics data."
        assert data["error_detail"].endswith("HTTP 503: unavailable")
        assert data["request_id"] == "req-123"
        assert data["path"] == "/api/v1/admin/analytics"
        assert "total_revenue" not in data

    def test_request_id_header(self, client):
        """Cada respuesta lleva X-Request-ID y X-Process-Time."""
        response = client.get("/api/v1/admin/analytics")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers


class TestSettingsEndpoints:
    """Tests para los endpoints de configuración."""

    def test_public_settings(self, client):
        response = client.get("/api/v1/store/settings")

        assert response.status_code == 200
        assert response.json() == {
            "free_shipping_threshold": 5000,
            "announcement_text": "",
            "instagram_url": "",
            "contact_email": "",
        }

    def test_public_settings_defaults_on_error(self, client, store_client):
        """La tienda siempre recibe una configuración válida."""
        store_client.get_store.side_effect = CommerceAPIException("HTTP 500")

        response = client.get("/api/v1/store/settings")

        assert response.status_code == 200
        assert response.json()["free_shipping_threshold"] == 6900

    def test_admin_settings(self, client):
        response = client.get("/api/v1/admin/settings")

        assert response.status_code == 200
        data = response.json()
        assert data["store_name"] == "Atelier"
        assert data["store_id"] == "store_01"
        assert data["metadata"] == {"free_shipping_threshold": 5000}

    def test_admin_settings_store_not_found(self, client, store_client):
        """Sin tienda debe responder 404."""
        store_client.get_store.return_value = None

        response = client.get("/api/v1/admin/settings")

        assert response.status_code == 404
        assert response.json()["message"] == "Store not found."

    def test_update_settings(self, client, store_client):
        """Debe aplicar solo los campos enviados."""
        response = client.post("/api/v1/admin/settings", json={"announcement_text": "Sommer Sale"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["free_shipping_threshold"] == 5000
        assert data["metadata"]["announcement_text"] == "Sommer Sale"
        store_client.update_store_metadata.assert_awaited_once()

    @pytest.mark.parametrize("threshold", [-1, "80", 12.5])
    def test_invalid_threshold(self, client, store_client, threshold):
        """Un umbral que no es entero no negativo se rechaza con 422."""
        response = client.post("/api/v1/admin/settings", json={"free_shipping_threshold": threshold})

        assert response.status_code == 422
        store_client.update_store_metadata.assert_not_awaited()

    def test_update_failure(self, client, store_client):
        store_client.update_store_metadata.side_effect = CommerceAPIException("HTTP 500")

        response = client.post("/api/v1/admin/settings", json={"free_shipping_threshold": 0})

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to update settings."


class TestFeedEndpoint:
    """Tests para GET /api/v1/store/instagram."""

    def test_returns_posts(self, client):
        response = client.get("/api/v1/store/instagram")

        assert response.status_code == 200
        assert response.json() == {"posts": [{"id": "1", "media_type": "IMAGE"}]}


CUSTOMER_HEADERS = {"X-Customer-ID": "cus_01"}


class TestWishlistEndpoints:
    """Tests para /api/v1/store/wishlist."""

    def test_requires_customer(self, client, customer_client):
        """Sin cliente autenticado debe responder 401."""
        response = client.get("/api/v1/store/wishlist")

        assert response.status_code == 401
        assert response.json()["error_code"] == "NOT_AUTHENTICATED"
        customer_client.get_customer.assert_not_awaited()

    def test_get_wishlist(self, client, customer_client):
        response = client.get("/api/v1/store/wishlist", headers=CUSTOMER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"wishlist": ["prod_1"]}
        customer_client.get_customer.assert_awaited_once_with("cus_01")

    def test_add_product(self, client, customer_client):
        response = client.post("/api/v1/store/wishlist", json={"product_id": "prod_2"}, headers=CUSTOMER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"wishlist": ["prod_1", "prod_2"]}
        customer_client.update_customer_metadata.assert_awaited_once_with(
            "cus_01", {"wishlist": ["prod_1", "prod_2"]}
        )

    def test_add_existing_product(self, client, customer_client):
        """Agregar un producto repetido no lo duplica."""
        response = client.post("/api/v1/store/wishlist", json={"product_id": "prod_1"}, headers=CUSTOMER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"wishlist": ["prod_1"]}
        customer_client.update_customer_metadata.assert_not_awaited()

    @pytest.mark.parametrize("body", [{}, {"product_id": ""}, {"product_id": None}])
    def test_add_without_product_id(self, client, customer_client, body):
        """Sin product_id debe responder 400 con el campo inválido."""
        response = client.post("/api/v1/store/wishlist", json=body, headers=CUSTOMER_HEADERS)

        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "validation_error"
        assert data["field"] == "product_id"
        assert data["message"] == "product_id is required."
        customer_client.update_customer_metadata.assert_not_awaited()

    def test_add_without_body(self, client):
        response = client.post("/api/v1/store/wishlist", headers=CUSTOMER_HEADERS)

        assert response.status_code == 400

    def test_remove_product(self, client, customer_client):
        response = client.delete("/api/v1/store/wishlist/prod_1", headers=CUSTOMER_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"wishlist": []}
        customer_client.update_customer_metadata.assert_awaited_once_with("cus_01", {"wishlist": []})

    def test_customer_not_found(self, client, customer_client):
        customer_client.get_customer.return_value = None

        response = client.get("/api/v1/store/wishlist", headers=CUSTOMER_HEADERS)

        assert response.status_code == 404

    def test_backend_error(self, client, customer_client):
        """Un fallo del backend responde 500 con el mensaje de la operación."""
        customer_client.update_customer_metadata.side_effect = CommerceAPIException("HTTP 500")

        response = client.post("/api/v1/store/wishlist", json={"product_id": "prod_2"}, headers=CUSTOMER_HEADERS)

        assert response.status_code == 500
        data = response.json()
        assert data["message"] == "Failed to add to wishlist."
        assert data["operation"] == "add"

class TestServiceNotInitialized:
    """Sin lifespan ni overrides los servicios no existen."""

    def test_returns_503(self, app):
        """Debe responder 503 si el servicio no fue inicializado."""
        response = TestClient(app).get("/api/v1/admin/analytics")

        assert response.status_code == 503
        assert response.json()["error_code"] == "CONFIGURATION_ERROR"


class TestRootEndpoints:
    """Tests para los endpoints base."""

    def test_ping(self, client):
        response = client.get("/ping")

        assert response.status_code == 200
        assert response.json()["message"] == "pong"

    def test_version(self, client):
        response = client.get("/api/v1/version")

        assert response.status_code == 200
        assert response.json()["version_string"].startswith("v")
