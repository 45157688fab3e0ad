"""
Manejadores de excepciones centralizados para la aplicación FastAPI.

Este módulo define todos los manejadores de excepciones personalizados y globales,
proporcionando respuestas consistentes y logging apropiado para diferentes tipos de errores.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.logging_config import request_id_var
from app.utils.error_handler import (
    AppException,
    CommerceAPIException,
    SettingsException,
    StoreNotFoundException,
    UpstreamFetchException,
    ValidationException,
    WishlistException,
    create_error_response,
    log_error,
)

settings = get_settings()
logger = logging.getLogger(__name__)


def _envelope(request: Request, error_type: str, message: str, **extra: Any) -> Dict[str, Any]:
    """Cuerpo común de todas las respuestas de error."""
    return {
        "error": True,
        "error_type": error_type,
        "message": message,
        **extra,
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("X-Request-ID") or request_id_var.get(),
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Manejador para excepciones personalizadas de la aplicación.

    Args:
        request: Request de FastAPI
        exc: Excepción personalizada de la app

    Returns:
        JSONResponse: Respuesta JSON con error formateado
    """
    log_error(exc, {"url": str(request.url)})

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            "application_error",
            exc.message,
            error_code=exc.error_code.value,
            details=exc.details if settings.DEBUG else None,
        ),
    )


async def upstream_fetch_exception_handler(request: Request, exc: UpstreamFetchException) -> JSONResponse:
    """
    Manejador para fallos al obtener los pedidos de la analítica.

    El mensaje es genérico y el error del backend de comercio se adjunta
    siempre en ``error_detail``; nunca se devuelve un snapshot parcial.
    """
    logger.error(f"Upstream Fetch Exception: {exc.upstream_error} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            "upstream_fetch_error",
            exc.message,
            error_code=exc.error_code.value,
            error_detail=exc.upstream_error,
        ),
    )


async def commerce_api_exception_handler(request: Request, exc: CommerceAPIException) -> JSONResponse:
    """
    Manejador específico para errores de la API del backend de comercio.

    Args:
        request: Request de FastAPI
        exc: Excepción de la API de comercio

    Returns:
        JSONResponse: Respuesta JSON con información del error
    """
    logger.error(
        f"Commerce API Exception: {exc.message} - "
        f"API Code: {exc.api_response_code} - "
        f"Endpoint: {exc.endpoint} - "
        f"URL: {request.url}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            "commerce_api_error",
            exc.message,
            error_code=exc.error_code.value,
            commerce_response_code=exc.api_response_code,
            endpoint=exc.endpoint,
        ),
    )


async def store_not_found_exception_handler(request: Request, exc: StoreNotFoundException) -> JSONResponse:
    logger.warning(f"Store Not Found: {exc.message} - URL: {request.url}")

    return JSONResponse(
        status_code=404,
        content=_envelope(request, "not_found", exc.message, error_code=exc.error_code.value),
    )


async def settings_exception_handler(request: Request, exc: SettingsException) -> JSONResponse:
    """
    Manejador para errores al leer o actualizar la configuración de la tienda.
    """
    logger.error(f"Settings Exception: {exc.message} - Operation: {exc.operation} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            "settings_error",
            exc.message,
            error_code=exc.error_code.value,
            operation=exc.operation,
        ),
    )


async def wishlist_exception_handler(request: Request, exc: WishlistException) -> JSONResponse:
    logger.error(f"Wishlist Exception: {exc.message} - Operation: {exc.operation} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            "wishlist_error",
            exc.message,
            error_code=exc.error_code.value,
            operation=exc.operation,
        ),
    )


async def validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """
    Manejador para errores de validación de datos.

    Args:
        request: Request de FastAPI
        exc: Excepción de validación

    Returns:
        JSONResponse: Respuesta JSON con detalles de validación
    """
    logger.warning(
        f"Validation Exception: {exc.message} - "
        f"Field: {exc.field} - "
        f"Value: {exc.invalid_value} - "
        f"URL: {request.url}"
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            request,
            "validation_error",
            exc.message,
            error_code=exc.error_code.value,
            field=exc.field,
            invalid_value=exc.invalid_value if settings.DEBUG else None,
            expected_format=exc.expected_format,
        ),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Manejador para HTTPException estándar de FastAPI.

    Args:
        request: Request de FastAPI
        exc: HTTPException

    Returns:
        JSONResponse: Respuesta JSON estandarizada
    """
    logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(request, "http_error", exc.detail, status_code=exc.status_code),
    )


async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Manejador para HTTPException de Starlette (nivel más bajo).
    """
    logger.warning(f"Starlette HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(request, "http_error", exc.detail, status_code=exc.status_code),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Manejador global para excepciones no capturadas.

    Args:
        request: Request de FastAPI
        exc: Excepción no manejada

    Returns:
        JSONResponse: Respuesta JSON de error interno
    """
    log_error(exc, {"url": str(request.url)})

    # Respuesta genérica (sin exponer detalles internos)
    error_message = "Internal server error occurred"
    extra: Dict[str, Any] = {}
    if settings.DEBUG:
        error_response = create_error_response(exc, include_traceback=True)
        error_message = error_response["message"]
        extra["traceback"] = error_response["traceback"]

    return JSONResponse(
        status_code=500,
        content=_envelope(request, "internal_server_error", error_message, **extra),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configura todos los manejadores de excepciones de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    logger.info("🔧 Configurando manejadores de excepciones...")

    # Manejadores específicos (orden de especificidad)
    app.add_exception_handler(ValidationException, validation_exception_handler)
    app.add_exception_handler(UpstreamFetchException, upstream_fetch_exception_handler)
    app.add_exception_handler(CommerceAPIException, commerce_api_exception_handler)
    app.add_exception_handler(StoreNotFoundException, store_not_found_exception_handler)
    app.add_exception_handler(SettingsException, settings_exception_handler)
    app.add_exception_handler(WishlistException, wishlist_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)

    # Manejadores HTTP estándar
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)

    # Manejador global (debe ser el último)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("✅ Manejadores de excepciones configurados correctamente")
