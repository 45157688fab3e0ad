"""
Normalización de pedidos y líneas crudas del backend de comercio.

Convierte el snapshot crudo (diccionarios tal como los devuelve la API
administrativa) en una vista tipada para la agregación:

- una lista de ``NormalizedOrder`` en el mismo orden de entrada
- un diccionario ``line_item_id -> LineItem`` (la última aparición gana)

Ningún registro malformado aborta el lote: los totales ilegibles se degradan
a cero para que el dashboard siempre pueda renderizarse.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.models import LineItem, NormalizedOrder, OrderItemRef, OrderTotals
from app.domain.models.order_snapshot import UNKNOWN_STATUS

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Montos o cantidades con más de 16 dígitos enteros se consideran datos corruptos
MAX_AMOUNT_EXPONENT = 15


def coerce_amount(value: Any) -> Decimal:
    """
    Convierte un valor numérico arbitrario a un Decimal finito y no negativo.

    Args:
        value: Valor crudo (número, string numérico, None, ...)

    Returns:
        Decimal: El valor parseado, o 0 si falta, no es numérico, es negativo
            o tiene más de 16 dígitos enteros
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        if not value.strip():
            return ZERO
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite() or amount < 0:
        return ZERO
    if amount.adjusted() > MAX_AMOUNT_EXPONENT:
        logger.warning(f"⚠️ Valor numérico fuera de rango, se normaliza a 0: {amount}")
        return ZERO
    return amount


def resolve_summary_totals(order: Mapping[str, Any]) -> OrderTotals:
    """
    Resuelve los totales del resumen de un pedido.

    El resumen puede venir plano en ``summary`` o anidado en
    ``summary.totals``; ambas formas se aceptan. Si ninguna trae campos
    numéricos los tres totales quedan en cero.

    Args:
        order: Pedido crudo

    Returns:
        OrderTotals: Totales canónicos del pedido
    """
    summary = order.get("summary")
    if not isinstance(summary, Mapping):
        summary = {}

    totals = summary.get("totals")
    if not isinstance(totals, Mapping) or not totals:
        totals = summary

    return OrderTotals(
        order_total=coerce_amount(totals.get("current_order_total")),
        paid_total=coerce_amount(totals.get("paid_total")),
        pending_amount=coerce_amount(totals.get("pending_difference")),
    )


def parse_created_at(value: Any) -> datetime | None:
    """
    Parsea la fecha de creación de un pedido a un datetime UTC.

    Args:
        value: String ISO-8601 o datetime

    Returns:
        datetime con timezone, o None si no se puede interpretar
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    # Si es naive (sin timezone), asumir que es UTC
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _normalize_item(raw_item: Any) -> OrderItemRef:
    if not isinstance(raw_item, Mapping):
        return OrderItemRef(id=None, item_id=None)

    return OrderItemRef(
        id=_optional_str(raw_item.get("id")),
        item_id=_optional_str(raw_item.get("item_id")),
        quantity=coerce_amount(raw_item.get("quantity")),
        unit_price=coerce_amount(raw_item.get("unit_price")),
    )


def normalize_order(raw_order: Any) -> NormalizedOrder:
    """
    Normaliza un pedido crudo.

    Args:
        raw_order: Pedido tal como lo devuelve el backend

    Returns:
        NormalizedOrder: Pedido con totales resueltos
    """
    if not isinstance(raw_order, Mapping):
        logger.debug(f"Registro de pedido no válido, se normaliza vacío: {type(raw_order).__name__}")
        raw_order = {}

    raw_items = raw_order.get("items")
    if not isinstance(raw_items, (list, tuple)):
        raw_items = []

    return NormalizedOrder(
        id=_optional_str(raw_order.get("id")),
        status=str(raw_order.get("status") or UNKNOWN_STATUS),
        created_at=parse_created_at(raw_order.get("created_at")),
        currency_code=_optional_str(raw_order.get("currency_code")),
        totals=resolve_summary_totals(raw_order),
        items=tuple(_normalize_item(item) for item in raw_items),
    )


def normalize_orders(raw_orders: Iterable[Any]) -> list[NormalizedOrder]:
    """
    Normaliza todos los pedidos preservando el orden de entrada.

    Args:
        raw_orders: Pedidos crudos

    Returns:
        list[NormalizedOrder]: Un pedido normalizado por cada pedido de entrada
    """
    return [normalize_order(raw_order) for raw_order in raw_orders]


def build_line_item_lookup(raw_line_items: Iterable[Any]) -> dict[str, LineItem]:
    """
    Construye el índice de líneas por identificador.

    Los identificadores duplicados se tratan como un problema de calidad de
    datos: la última aparición gana.

    Args:
        raw_line_items: Líneas crudas

    Returns:
        dict: Identificador de línea -> LineItem
    """
    lookup: dict[str, LineItem] = {}
    duplicates = 0

    for raw in raw_line_items:
        if not isinstance(raw, Mapping):
            continue

        line_item_id = _optional_str(raw.get("id"))
        if line_item_id is None:
            continue

        if line_item_id in lookup:
            duplicates += 1

        lookup[line_item_id] = LineItem(
            id=line_item_id,
            title=_optional_str(raw.get("title")),
            product_id=_optional_str(raw.get("product_id")),
            variant_id=_optional_str(raw.get("variant_id")),
            unit_price=coerce_amount(raw.get("unit_price")),
            quantity=coerce_amount(raw.get("quantity")),
        )

    if duplicates:
        logger.debug(f"⚠️ {duplicates} líneas con identificador duplicado (se conserva la última)")

    return lookup
