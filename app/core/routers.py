"""
Configuración centralizada de routers para la aplicación FastAPI.

Este módulo se encarga de registrar todos los routers de la API,
configurar endpoints base y organizar las rutas de manera estructurada.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.responses import JSONResponse

# Importar routers de la API
from app.api.v1.endpoints.analytics import router as analytics_router
from app.api.v1.endpoints.feed import router as feed_router
from app.api.v1.endpoints.settings import admin_router as admin_settings_router
from app.api.v1.endpoints.settings import store_router as store_settings_router
from app.api.v1.endpoints.version import router as version_router
from app.api.v1.endpoints.wishlist import router as wishlist_router
from app.core.config import get_settings
from app.core.health import get_health_status

settings = get_settings()
logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        """
        Endpoint raíz que proporciona información básica de la API.

        Returns:
            Dict con información de la API
        """
        return {
            "message": settings.APP_NAME,
            "description": "Analítica de pedidos, configuración y feed de Instagram para la tienda",
            "version": settings.APP_VERSION,
            "status": "running",
            "documentation": "/docs" if settings.ENABLE_DOCS else "disabled",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "analytics": "/api/v1/admin/analytics",
                "admin_settings": "/api/v1/admin/settings",
                "store_settings": "/api/v1/store/settings",
                "instagram": "/api/v1/store/instagram",
                "wishlist": "/api/v1/store/wishlist",
            },
        }

    @app.get("/ping", tags=["Root"], summary="Simple Ping")
    async def ping():
        return {"message": "pong", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_health_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints de health check.

    Args:
        app: Instancia de FastAPI
    """

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check():
        """
        Health check del backend de comercio y de los recursos del sistema.

        Returns:
            JSONResponse 200 si todo está sano, 503 en caso contrario
        """
        try:
            health_status = await get_health_status()
            status_code = 200 if health_status["overall"] else 503

            return JSONResponse(
                status_code=status_code,
                content={
                    "status": "healthy" if health_status["overall"] else "unhealthy",
                    "version": settings.APP_VERSION,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "uptime": health_status.get("uptime"),
                    "services": health_status["services"],
                    "environment": settings.ENVIRONMENT,
                },
            )

        except Exception as e:
            logger.error(f"Error en health check: {e}")
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "error": str(e),
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "version": settings.APP_VERSION,
                },
            )

    @app.get("/health/liveness", tags=["Health"], summary="Liveness Probe")
    async def liveness_probe():
        """
        Endpoint para liveness probe de Kubernetes.
        Verifica que la aplicación esté ejecutándose.
        """
        return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


def configure_api_v1_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la API v1.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando routers de API v1...")

    # Analítica del dashboard
    app.include_router(
        analytics_router,
        prefix="/api/v1/admin/analytics",
        tags=["Analytics"],
        responses={500: {"description": "Failed to load analytics data"}},
    )
    logger.info("✅ Router de analítica configurado")

    # Configuración de la tienda
    app.include_router(
        admin_settings_router,
        prefix="/api/v1/admin/settings",
        tags=["Settings"],
        responses={
            404: {"description": "Store not found"},
            422: {"description": "Invalid settings payload"},
            500: {"description": "Settings operation error"},
        },
    )
    app.include_router(store_settings_router, prefix="/api/v1/store/settings", tags=["Storefront"])
    logger.info("✅ Routers de configuración configurados")

    # Feed de Instagram
    app.include_router(feed_router, prefix="/api/v1/store/instagram", tags=["Storefront"])
    logger.info("✅ Router de Instagram configurado")

    # Lista de deseos
    app.include_router(
        wishlist_router,
        prefix="/api/v1/store/wishlist",
        tags=["Storefront"],
        responses={
            400: {"description": "Missing product_id"},
            401: {"description": "Not authenticated"},
            500: {"description": "Wishlist operation error"},
        },
    )
    logger.info("✅ Router de lista de deseos configurado")

    app.include_router(version_router, prefix="/api/v1/version", tags=["Info"])


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando todos los routers...")

    # Endpoints base
    create_root_endpoints(app)
    create_health_endpoints(app)

    # Routers de API v1
    configure_api_v1_routers(app)

    logger.info("✅ Todos los routers configurados correctamente")
