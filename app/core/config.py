"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Storefront Analytics Backend"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    WORKERS: int = Field(default=1)
    LOG_LEVEL: str = Field(default="INFO")

    # === CONFIGURACIÓN DE SEGURIDAD ===
    # Lista separada por comas
    ALLOWED_HOSTS: Optional[str] = Field(default=None)

    # === CONFIGURACIÓN DEL BACKEND DE COMERCIO ===
    COMMERCE_API_URL: str = Field(default="http://localhost:9000")
    COMMERCE_API_TOKEN: Optional[str] = Field(default=None)
    COMMERCE_API_TIMEOUT: int = Field(default=30)
    COMMERCE_MAX_RETRIES: int = Field(default=3)
    COMMERCE_PAGE_SIZE: int = Field(default=100)
    COMMERCE_ORDERS_PATH: str = Field(default="/admin/orders")
    COMMERCE_LINE_ITEMS_PATH: str = Field(default="/admin/order-line-items")
    COMMERCE_STORES_PATH: str = Field(default="/admin/stores")
    COMMERCE_CUSTOMERS_PATH: str = Field(default="/admin/customers")

    # === CONFIGURACIÓN DE ANALÍTICA ===
    STORE_CURRENCY_CODE: str = Field(default="chf")
    ANALYTICS_TOP_PRODUCTS_LIMIT: int = Field(default=5)
    ANALYTICS_UNKNOWN_PRODUCT_TITLE: str = Field(default="Unbekanntes Produkt")

    # === CONFIGURACIÓN DE INSTAGRAM ===
    INSTAGRAM_ACCESS_TOKEN: Optional[str] = Field(default=None)
    INSTAGRAM_GRAPH_URL: str = Field(default="https://graph.instagram.com")
    INSTAGRAM_POST_LIMIT: int = Field(default=12)
    # 15 minutos
    INSTAGRAM_CACHE_TTL_SECONDS: int = Field(default=900)

    # === CONFIGURACIÓN DE LA TIENDA ===
    # Siempre en unidades menores (Rappen)
    DEFAULT_FREE_SHIPPING_THRESHOLD: int = Field(default=6900)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default="logs/app.log")
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)

    # === CONFIGURACIÓN DE MÉTRICAS Y MONITOREO ===
    HEALTH_CHECK_TIMEOUT: int = Field(default=5)
    SLOW_REQUEST_THRESHOLD: float = Field(default=5.0)
    DISK_SPACE_THRESHOLD: int = Field(default=10)  # Porcentaje libre mínimo
    MEMORY_USAGE_THRESHOLD: int = Field(default=90)  # Porcentaje

    # === CONFIGURACIÓN DE DOCUMENTACIÓN ===
    ENABLE_DOCS: bool = Field(default=True)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("STORE_CURRENCY_CODE")
    @classmethod
    def validate_currency_code(cls, v):
        """Valida que el código de moneda tenga 3 letras."""
        if len(v.strip()) != 3:
            raise ValueError("STORE_CURRENCY_CODE debe ser un código ISO de 3 letras")
        return v.strip().lower()

    @field_validator("COMMERCE_API_URL", "INSTAGRAM_GRAPH_URL")
    @classmethod
    def validate_base_url(cls, v):
        """Valida que la URL base tenga esquema y no termine en barra."""
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v.rstrip("/")

    @field_validator("ANALYTICS_TOP_PRODUCTS_LIMIT", "COMMERCE_PAGE_SIZE", "INSTAGRAM_POST_LIMIT")
    @classmethod
    def validate_positive(cls, v):
        """Valida que los límites sean positivos."""
        if v < 1:
            raise ValueError("El valor debe ser mayor o igual a 1")
        return v

    @field_validator("DEFAULT_FREE_SHIPPING_THRESHOLD")
    @classmethod
    def validate_threshold(cls, v):
        """Valida que el umbral de envío gratis no sea negativo."""
        if v < 0:
            raise ValueError("DEFAULT_FREE_SHIPPING_THRESHOLD no puede ser negativo")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT debe estar entre 1 y 65535")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def allowed_hosts_list(self) -> List[str]:
        """Parsea ALLOWED_HOSTS como lista separada por comas."""
        if not self.ALLOWED_HOSTS:
            return []
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene la instancia de configuración (singleton con cache).

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """
    Obtiene información del entorno actual.

    Returns:
        dict: Información del entorno
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "is_production": settings.is_production,
        "log_level": settings.LOG_LEVEL,
        "features": {
            "docs": settings.ENABLE_DOCS,
            "instagram_feed": bool(settings.INSTAGRAM_ACCESS_TOKEN),
            "commerce_auth": bool(settings.COMMERCE_API_TOKEN),
        },
    }
