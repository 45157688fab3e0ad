"""
Sistema de health checks para monitoreo de servicios.

Verifica el backend de comercio (del que depende toda la analítica) y los
recursos locales del sistema.
"""

import asyncio
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import httpx
import psutil

from app.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Variable global para tracking de uptime
_app_start_time = datetime.now(timezone.utc)


async def get_health_status() -> Dict[str, Any]:
    """
    Obtiene el estado de salud de todos los servicios.

    Returns:
        Dict: ``overall``, resultado por servicio, uptime y timestamp
    """
    health_checks = [
        ("commerce", check_commerce_health),
        ("memory", check_memory_usage),
        ("disk_space", check_disk_space),
    ]

    results = await asyncio.gather(
        *(
            run_health_check_with_timeout(service_name, check_func, settings.HEALTH_CHECK_TIMEOUT)
            for service_name, check_func in health_checks
        )
    )

    health_results = {service_name: result for (service_name, _), result in zip(health_checks, results, strict=True)}
    overall_healthy = all(result["status"] == "healthy" for result in health_results.values())

    return {
        "overall": overall_healthy,
        "services": health_results,
        "uptime": get_uptime_info(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def run_health_check_with_timeout(service_name: str, check_func, timeout: float) -> Dict[str, Any]:
    """
    Ejecuta una verificación de salud individual con timeout específico.

    Args:
        service_name: Nombre del servicio
        check_func: Función de verificación
        timeout: Timeout en segundos

    Returns:
        Dict: Resultado de la verificación
    """
    start_time = time.time()

    try:
        result = await asyncio.wait_for(check_func(), timeout=timeout)
        return {
            "status": "healthy" if result else "unhealthy",
            "latency_ms": round((time.time() - start_time) * 1000, 2),
        }

    except asyncio.TimeoutError:
        logger.warning(f"Health check timeout for {service_name} after {timeout}s")
        return {
            "status": "timeout",
            "error": f"Health check timeout after {timeout}s",
            "latency_ms": round((time.time() - start_time) * 1000, 2),
        }

    except Exception as e:
        logger.error(f"Health check failed for {service_name}: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "latency_ms": round((time.time() - start_time) * 1000, 2),
        }


async def check_commerce_health() -> bool:
    """
    Verifica que el backend de comercio responda.

    Returns:
        bool: True si el endpoint de health del backend responde 2xx
    """
    async with httpx.AsyncClient(timeout=settings.HEALTH_CHECK_TIMEOUT) as client:
        response = await client.get(f"{settings.COMMERCE_API_URL}/health")
        return response.is_success


async def check_disk_space() -> bool:
    """
    Verifica el espacio en disco disponible.

    Returns:
        bool: True si hay suficiente espacio
    """
    disk_usage = psutil.disk_usage("/")
    free_percent = (disk_usage.free / disk_usage.total) * 100
    return free_percent > settings.DISK_SPACE_THRESHOLD


async def check_memory_usage() -> bool:
    """Verifica que el uso de memoria esté dentro de límites."""
    return psutil.virtual_memory().percent < settings.MEMORY_USAGE_THRESHOLD


def get_uptime_info() -> Dict[str, Any]:
    """
    Obtiene información de uptime de la aplicación.

    Returns:
        Dict: Información de uptime
    """
    current_time = datetime.now(timezone.utc)
    uptime_delta = current_time - _app_start_time

    return {
        "start_time": _app_start_time.isoformat(),
        "uptime_seconds": int(uptime_delta.total_seconds()),
        "uptime_human": format_uptime(uptime_delta),
    }


def format_uptime(uptime_delta: timedelta) -> str:
    """
    Formatea el uptime en formato legible.

    Args:
        uptime_delta: Delta de tiempo de uptime

    Returns:
        str: Uptime formateado (ej: "1d 2h 5m")
    """
    days = uptime_delta.days
    hours, remainder = divmod(uptime_delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds or not parts:
        parts.append(f"{seconds}s")

    return " ".join(parts)
