"""
Gestión del ciclo de vida de la aplicación FastAPI.

Este módulo maneja los eventos de startup y shutdown de la aplicación:
configuración de logging, creación de los clientes HTTP, construcción de los
servicios (guardados en ``app.state``) y cierre ordenado de conexiones.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI

from app.core.config import Settings, get_settings
from app.core.logging_config import setup_logging
from app.db.commerce_clients import CommerceCustomerClient, CommerceOrderClient, CommerceStoreClient
from app.db.instagram_client import InstagramGraphClient
from app.services.analytics import OrderAnalyticsAggregator, OrderAnalyticsService
from app.services.feed import InstagramFeedService, StaleFallbackCache
from app.services.store_settings import StoreSettingsService
from app.services.wishlist import WishlistService

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.
    Maneja eventos de startup y shutdown de manera ordenada.

    Args:
        app: Instancia de FastAPI
    """
    # === STARTUP ===
    logger.info(f"🚀 Iniciando {settings.APP_NAME}...")

    try:
        # 1. Configurar logging
        await startup_configure_logging()

        # 2. Verificar configuración
        await startup_verify_configuration()

        # 3. Crear clientes y servicios
        await startup_initialize_services(app)

        # 4. Verificar conexión con el backend de comercio
        await startup_verify_connections(app)

        logger.info("🎉 Aplicación iniciada correctamente")

    except Exception as e:
        logger.error(f"❌ Error durante el startup: {e}")
        await shutdown_close_connections(app)
        sys.exit(1)

    # === YIELD (aplicación corriendo) ===
    yield

    # === SHUTDOWN ===
    logger.info(f"🛑 Cerrando {settings.APP_NAME}...")

    try:
        await shutdown_close_connections(app)
        logger.info("👋 Aplicación cerrada correctamente")

    except Exception as e:
        logger.error(f"❌ Error durante el shutdown: {e}")


# === FUNCIONES DE STARTUP ===


async def startup_configure_logging():
    """Configura el sistema de logging."""
    setup_logging()
    logger.info("✅ Sistema de logging configurado")


async def startup_verify_configuration():
    """
    Verifica la configuración.

    Los tokens faltantes no impiden arrancar: sin token de comercio las
    llamadas al admin fallan con 401 y sin token de Instagram el feed
    responde vacío con un mensaje de error.
    """
    if not settings.COMMERCE_API_TOKEN:
        logger.warning("⚠️ COMMERCE_API_TOKEN no configurado - el backend de comercio rechazará las llamadas de admin")

    if not settings.INSTAGRAM_ACCESS_TOKEN:
        logger.warning("⚠️ INSTAGRAM_ACCESS_TOKEN no configurado - el feed de Instagram estará vacío")

    logger.info("✅ Configuración verificada")


def build_services(app: FastAPI, app_settings: Settings) -> None:
    """
    Construye clientes y servicios y los guarda en ``app.state``.

    Args:
        app: Instancia de FastAPI
        app_settings: Configuración a usar
    """
    order_client = CommerceOrderClient()
    store_client = CommerceStoreClient()
    customer_client = CommerceCustomerClient()

    instagram_client = None
    if app_settings.INSTAGRAM_ACCESS_TOKEN:
        instagram_client = InstagramGraphClient(
            access_token=app_settings.INSTAGRAM_ACCESS_TOKEN,
            graph_url=app_settings.INSTAGRAM_GRAPH_URL,
        )

    app.state.commerce_clients = [order_client, store_client, customer_client]
    app.state.instagram_client = instagram_client

    app.state.analytics_service = OrderAnalyticsService(
        data_source=order_client,
        aggregator=OrderAnalyticsAggregator(
            currency_code=app_settings.STORE_CURRENCY_CODE,
            top_products_limit=app_settings.ANALYTICS_TOP_PRODUCTS_LIMIT,
            unknown_product_title=app_settings.ANALYTICS_UNKNOWN_PRODUCT_TITLE,
        ),
    )
    app.state.settings_service = StoreSettingsService(
        store_client=store_client,
        default_free_shipping_threshold=app_settings.DEFAULT_FREE_SHIPPING_THRESHOLD,
    )
    app.state.wishlist_service = WishlistService(customer_client=customer_client)
    app.state.feed_service = InstagramFeedService(
        client=instagram_client,
        cache=StaleFallbackCache(ttl_seconds=app_settings.INSTAGRAM_CACHE_TTL_SECONDS),
        post_limit=app_settings.INSTAGRAM_POST_LIMIT,
    )


async def startup_initialize_services(app: FastAPI):
    """Crea los clientes HTTP y los servicios de la API."""
    build_services(app, settings)

    for client in app.state.commerce_clients:
        await client.initialize()

    if app.state.instagram_client:
        await app.state.instagram_client.initialize()

    logger.info("✅ Servicios inicializados")


async def startup_verify_connections(app: FastAPI):
    """
    Verifica la conexión con el backend de comercio.

    No es fatal: la analítica responde con error hasta que el backend esté
    disponible y la configuración pública usa valores por defecto.
    """
    order_client = app.state.commerce_clients[0]

    if await order_client.test_connection():
        logger.info("✅ Conexión con el backend de comercio verificada")
    else:
        logger.warning("⚠️ Backend de comercio no disponible - la analítica fallará hasta que responda")


# === FUNCIONES DE SHUTDOWN ===


async def shutdown_close_connections(app: FastAPI):
    """Cierra las sesiones HTTP de manera limpia."""
    for client in getattr(app.state, "commerce_clients", []):
        try:
            await client.close()
        except Exception as e:
            logger.error(f"Error cerrando cliente de comercio: {e}")

    instagram_client = getattr(app.state, "instagram_client", None)
    if instagram_client:
        try:
            await instagram_client.close()
        except Exception as e:
            logger.error(f"Error cerrando cliente de Instagram: {e}")

    logger.info("✅ Conexiones cerradas")


def get_startup_info() -> Dict[str, Any]:
    """
    Obtiene información sobre la configuración activa.

    Returns:
        Dict: Información del startup
    """
    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "services": {
            "commerce_api_url": settings.COMMERCE_API_URL,
            "commerce_auth_configured": bool(settings.COMMERCE_API_TOKEN),
            "instagram_configured": bool(settings.INSTAGRAM_ACCESS_TOKEN),
        },
    }
