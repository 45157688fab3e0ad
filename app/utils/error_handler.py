"""
Sistema de manejo de errores personalizado.

Este módulo define todas las excepciones personalizadas de la aplicación
y proporciona utilidades para manejo consistente de errores.
"""

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    # Errores generales
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Errores del backend de comercio
    COMMERCE_CONNECTION_FAILED = "COMMERCE_CONNECTION_FAILED"
    COMMERCE_API_ERROR = "COMMERCE_API_ERROR"
    UPSTREAM_FETCH_FAILED = "UPSTREAM_FETCH_FAILED"

    # Errores de la tienda
    STORE_NOT_FOUND = "STORE_NOT_FOUND"
    SETTINGS_LOAD_FAILED = "SETTINGS_LOAD_FAILED"
    SETTINGS_UPDATE_FAILED = "SETTINGS_UPDATE_FAILED"

    # Errores de clientes de la tienda
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    WISHLIST_LOAD_FAILED = "WISHLIST_LOAD_FAILED"
    WISHLIST_UPDATE_FAILED = "WISHLIST_UPDATE_FAILED"

    # Errores de feeds externos
    FEED_API_ERROR = "FEED_API_ERROR"


class ErrorSeverity(Enum):
    """
    Niveles de severidad para errores.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        is_retryable: bool = False,
        is_critical: bool = False,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            status_code: Código HTTP asociado
            severity: Severidad del error
            is_retryable: Si la operación puede reintentarse
            is_critical: Si requiere alerta inmediata
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.severity = severity
        self.is_retryable = is_retryable
        self.is_critical = is_critical
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
            "is_critical": self.is_critical,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class ValidationException(AppException):
    """
    Excepción para errores de validación de datos.
    """

    def __init__(
        self,
        message: str,
        field: str,
        invalid_value: Any = None,
        expected_format: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción de validación.

        Args:
            message: Mensaje de error
            field: Campo que falló la validación
            invalid_value: Valor que causó el error
            expected_format: Formato esperado
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.field = field
        self.invalid_value = invalid_value
        self.expected_format = expected_format

        self.details.update(
            {
                "field": field,
                "invalid_value": str(invalid_value) if invalid_value is not None else None,
                "expected_format": expected_format,
            }
        )


class CommerceAPIException(AppException):
    """
    Excepción para errores de la API administrativa del backend de comercio.
    """

    def __init__(
        self,
        message: str,
        api_response_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        **kwargs,
    ):
        """
        Inicializa la excepción del backend de comercio.

        Args:
            message: Mensaje de error
            api_response_code: Código HTTP devuelto por el backend
            endpoint: Endpoint que falló
            **kwargs: Argumentos adicionales para AppException
        """
        error_code = ErrorCode.COMMERCE_API_ERROR
        severity = ErrorSeverity.MEDIUM

        if api_response_code is None:
            error_code = ErrorCode.COMMERCE_CONNECTION_FAILED
            severity = ErrorSeverity.HIGH
        elif api_response_code >= 500:
            severity = ErrorSeverity.HIGH

        super().__init__(
            message=message,
            error_code=error_code,
            status_code=503,
            severity=severity,
            is_retryable=True,
            **kwargs,
        )

        self.api_response_code = api_response_code
        self.endpoint = endpoint

        self.details.update({"api_response_code": api_response_code, "endpoint": endpoint})


class UpstreamFetchException(AppException):
    """
    Excepción para fallos al obtener los datos crudos de pedidos y líneas.

    No se devuelve ningún snapshot parcial: el error se propaga hasta la capa HTTP
    con un mensaje genérico y el detalle del error original adjunto.
    """

    def __init__(self, upstream_error: str, message: str = "Failed to load analytics data.", **kwargs):
        """
        Inicializa la excepción de obtención de datos.

        Args:
            upstream_error: Detalle del error original
            message: Mensaje genérico para el cliente
            **kwargs: Argumentos adicionales para AppException
        """
        super().__init__(
            message=message,
            error_code=ErrorCode.UPSTREAM_FETCH_FAILED,
            status_code=500,
            severity=ErrorSeverity.HIGH,
            is_retryable=True,
            **kwargs,
        )
        self.upstream_error = upstream_error
        self.details.update({"upstream_error": upstream_error})


class StoreNotFoundException(AppException):
    """
    Excepción cuando el backend de comercio no devuelve ninguna tienda.
    """

    def __init__(self, message: str = "Store not found.", **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.STORE_NOT_FOUND,
            status_code=404,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )


class SettingsException(AppException):
    """
    Excepción para errores al leer o actualizar la configuración de la tienda.
    """

    def __init__(self, message: str, operation: str, **kwargs):
        """
        Inicializa la excepción de configuración.

        Args:
            message: Mensaje de error
            operation: Operación que falló (load, update)
            **kwargs: Argumentos adicionales para AppException
        """
        error_code = ErrorCode.SETTINGS_UPDATE_FAILED if operation == "update" else ErrorCode.SETTINGS_LOAD_FAILED
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=500,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        self.operation = operation
        self.details.update({"operation": operation})


class CustomerNotFoundException(AppException):
    """
    Excepción cuando el backend de comercio no encuentra al cliente.
    """

    def __init__(self, customer_id: str, message: str = "Customer not found.", **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.CUSTOMER_NOT_FOUND,
            status_code=404,
            severity=ErrorSeverity.LOW,
            **kwargs,
        )
        self.customer_id = customer_id
        self.details.update({"customer_id": customer_id})


class WishlistException(AppException):
    """
    Excepción para errores al leer o modificar la lista de deseos de un cliente.
    """

    def __init__(self, message: str, operation: str, **kwargs):
        """
        Inicializa la excepción de lista de deseos.

        Args:
            message: Mensaje de error
            operation: Operación que falló (load, add, remove)
            **kwargs: Argumentos adicionales para AppException
        """
        error_code = ErrorCode.WISHLIST_LOAD_FAILED if operation == "load" else ErrorCode.WISHLIST_UPDATE_FAILED
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=500,
            severity=ErrorSeverity.MEDIUM,
            **kwargs,
        )
        self.operation = operation
        self.details.update({"operation": operation})


class FeedException(AppException):
    """
    Excepción para errores de la Instagram Graph API.
    """

    def __init__(self, message: str, api_response_code: Optional[int] = None, **kwargs):
        super().__init__(
            message=message,
            error_code=ErrorCode.FEED_API_ERROR,
            status_code=502,
            severity=ErrorSeverity.LOW,
            is_retryable=True,
            **kwargs,
        )
        self.api_response_code = api_response_code
        self.details.update({"api_response_code": api_response_code})


# === FUNCIONES DE UTILIDAD ===


def convert_to_app_exception(exception: Exception, context: Optional[Dict[str, Any]] = None) -> AppException:
    """
    Convierte una excepción estándar a AppException.

    Args:
        exception: Excepción a convertir
        context: Contexto adicional

    Returns:
        AppException: Excepción convertida
    """
    if isinstance(exception, AppException):
        exception.details.update(context or {})
        return exception

    context = context or {}
    exception_type = type(exception).__name__

    return AppException(
        message=f"{exception_type}: {exception}",
        details={"original_exception": exception_type, **context},
    )


def create_error_response(exception: Union[AppException, Exception], include_traceback: bool = False) -> Dict[str, Any]:
    """
    Crea respuesta de error estandardizada.

    Args:
        exception: Excepción a convertir
        include_traceback: Si incluir traceback

    Returns:
        Dict: Respuesta de error
    """
    error_dict = convert_to_app_exception(exception).to_dict()

    if include_traceback:
        error_dict["traceback"] = "".join(traceback.format_exception(exception))

    return {"error": True, **error_dict}


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    context = context or {}

    log_data = {
        "exception_type": type(exception).__name__,
        "exception_message": str(exception),
        **context,
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data.update(
            {
                "error_code": exception.error_code.value,
                "severity": exception.severity.value,
                "is_retryable": exception.is_retryable,
            }
        )
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {exception}"

    logger.log(level, message, extra=log_data)
