"""
Motor de agregación de analítica de pedidos.

Calcula, a partir de la vista normalizada, las métricas del dashboard del
comerciante: ingresos realizados y pendientes por ventana temporal, conteos,
tasa de conversión, ranking de productos, serie diaria de 30 días y desgloses
por estado y por pago.

Reglas de clasificación:
- Cancelado: ``status == "canceled"``. Solo cuenta en ``canceled_orders`` y en
  el desglose por estado.
- Pagado: activo con ``paid_total > 0``.
- Sin pago: activo con ``paid_total == 0``.

Todos los importes se acumulan en unidades mayores con Decimal y se convierten
a unidades menores (x100, redondeo half-up) solo al construir el snapshot.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from app.domain.models import (
    AnalyticsSnapshot,
    LineItem,
    NormalizedOrder,
    ProductSalesAggregate,
    TopProduct,
)
from app.domain.value_objects import Money, round_half_up

logger = logging.getLogger(__name__)

WINDOW_30D = timedelta(days=30)
WINDOW_7D = timedelta(days=7)
REVENUE_SERIES_DAYS = 30
DEFAULT_TOP_PRODUCTS_LIMIT = 5
DEFAULT_UNKNOWN_PRODUCT_TITLE = "Unbekanntes Produkt"

ZERO = Decimal("0")


def sum_paid(orders: Iterable[NormalizedOrder]) -> Decimal:
    """Suma ``paid_total`` de los pedidos."""
    return sum((order.totals.paid_total for order in orders), ZERO)


def sum_order_value(orders: Iterable[NormalizedOrder]) -> Decimal:
    """Suma ``order_total`` de los pedidos."""
    return sum((order.totals.order_total for order in orders), ZERO)


def conversion_rate(completed: int, total: int, canceled: int) -> int:
    """
    Porcentaje de pedidos pagados sobre los pedidos no cancelados.

    Args:
        completed: Pedidos pagados
        total: Todos los pedidos
        canceled: Pedidos cancelados

    Returns:
        int: Porcentaje redondeado, 0 si no hay pedidos activos
    """
    non_canceled = total - canceled
    if non_canceled <= 0:
        return 0
    return round_half_up(Decimal(completed) / Decimal(non_canceled) * 100)


def day_key(moment: datetime) -> str:
    """Clave de día UTC ``YYYY-MM-DD``."""
    return moment.date().isoformat()


def seed_revenue_series(now: datetime, days: int = REVENUE_SERIES_DAYS) -> dict[str, Decimal]:
    """
    Serie diaria con ``days`` claves consecutivas que terminan en ``now``.

    Args:
        now: Momento de referencia (UTC)
        days: Número de días de la serie

    Returns:
        dict: Fecha -> 0, de la más antigua a la más reciente
    """
    return {day_key(now - timedelta(days=offset)): ZERO for offset in range(days - 1, -1, -1)}


def _as_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


class OrderAnalyticsAggregator:
    """
    Agregador de métricas del dashboard.

    Es una función pura de sus entradas: no realiza I/O, no guarda estado entre
    llamadas y no lanza errores de dominio.
    """

    def __init__(
        self,
        currency_code: str = "chf",
        top_products_limit: int = DEFAULT_TOP_PRODUCTS_LIMIT,
        unknown_product_title: str = DEFAULT_UNKNOWN_PRODUCT_TITLE,
    ):
        """
        Args:
            currency_code: Moneda de la tienda reportada en el snapshot
            top_products_limit: Cantidad de productos en el ranking
            unknown_product_title: Título para líneas sin título resoluble
        """
        if top_products_limit < 1:
            raise ValueError(f"top_products_limit debe ser mayor o igual a 1: {top_products_limit}")
        self.currency_code = currency_code
        self.top_products_limit = top_products_limit
        self.unknown_product_title = unknown_product_title

    def _minor(self, amount: Decimal) -> int:
        return Money(amount=amount, currency=self.currency_code).to_minor_units()

    def aggregate(
        self,
        orders: Sequence[NormalizedOrder],
        line_items: Mapping[str, LineItem],
        now: datetime,
    ) -> AnalyticsSnapshot:
        """
        Calcula el snapshot completo de analítica.

        Args:
            orders: Pedidos normalizados
            line_items: Índice de líneas por identificador
            now: Momento de la solicitud (UTC)

        Returns:
            AnalyticsSnapshot: Métricas del dashboard
        """
        now = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)

        active = [order for order in orders if not order.is_canceled]
        canceled = [order for order in orders if order.is_canceled]
        paid = [order for order in active if order.is_paid]
        unpaid = [order for order in active if order.is_unpaid]

        # --- Ventanas de 30 y 7 días ---
        active_30d = [order for order in active if order.created_since(now - WINDOW_30D)]
        paid_30d = [order for order in active_30d if order.is_paid]
        unpaid_30d = [order for order in active_30d if order.is_unpaid]

        active_7d = [order for order in active if order.created_since(now - WINDOW_7D)]
        paid_7d = [order for order in active_7d if order.is_paid]
        unpaid_7d = [order for order in active_7d if order.is_unpaid]

        total_revenue = sum_paid(paid)
        completed_count = len(paid)
        pending_count = len(unpaid)
        canceled_count = len(canceled)
        total_orders = len(orders)

        average_order_value = total_revenue / completed_count if completed_count else ZERO

        snapshot = AnalyticsSnapshot(
            total_revenue=self._minor(total_revenue),
            revenue_30d=self._minor(sum_paid(paid_30d)),
            revenue_7d=self._minor(sum_paid(paid_7d)),
            average_order_value=self._minor(average_order_value),
            pending_revenue=self._minor(sum_order_value(unpaid)),
            pending_revenue_30d=self._minor(sum_order_value(unpaid_30d)),
            pending_revenue_7d=self._minor(sum_order_value(unpaid_7d)),
            total_order_value=self._minor(sum_order_value(active)),
            total_orders=total_orders,
            completed_orders=completed_count,
            pending_orders=pending_count,
            canceled_orders=canceled_count,
            orders_30d=len(paid_30d),
            pending_orders_30d=len(unpaid_30d),
            orders_7d=len(paid_7d),
            pending_orders_7d=len(unpaid_7d),
            conversion_rate=conversion_rate(completed_count, total_orders, canceled_count),
            currency_code=self.currency_code,
            top_products=self.rank_products(paid, line_items),
            revenue_by_day=self.revenue_by_day(paid_30d, now),
            status_breakdown=self.status_breakdown(orders),
            payment_breakdown={"paid": completed_count, "unpaid": pending_count, "canceled": canceled_count},
        )

        logger.debug(
            f"📊 Analítica calculada: {total_orders} pedidos "
            f"({completed_count} pagados, {pending_count} sin pago, {canceled_count} cancelados)"
        )
        return snapshot

    def product_sales(
        self, paid_orders: Iterable[NormalizedOrder], line_items: Mapping[str, LineItem]
    ) -> dict[str, ProductSalesAggregate]:
        """
        Acumula cantidad e ingresos por producto sobre pedidos pagados.

        La clave es el ``product_id`` de la línea, luego su título y por último
        el identificador de la línea. El precio unitario del ítem del pedido
        tiene prioridad sobre el de la línea.
        """
        sales: dict[str, ProductSalesAggregate] = {}

        for order in paid_orders:
            for item in order.items:
                line_item = line_items.get(item.item_id) if item.item_id else None

                key = (line_item and (line_item.product_id or line_item.title)) or item.item_id or ""
                title = (line_item and line_item.title) or self.unknown_product_title
                unit_price = item.unit_price or (line_item.unit_price if line_item else ZERO)

                if key not in sales:
                    sales[key] = ProductSalesAggregate(key=key, title=title)
                sales[key].add_sale(item.quantity, unit_price)

        return sales

    def rank_products(
        self, paid_orders: Iterable[NormalizedOrder], line_items: Mapping[str, LineItem]
    ) -> tuple[TopProduct, ...]:
        """Top N productos por cantidad vendida (orden estable en empates)."""
        ranked = sorted(
            self.product_sales(paid_orders, line_items).values(),
            key=lambda aggregate: aggregate.quantity,
            reverse=True,
        )
        return tuple(
            TopProduct(
                title=aggregate.title,
                quantity=_as_number(aggregate.quantity),
                revenue=self._minor(aggregate.revenue),
            )
            for aggregate in ranked[: self.top_products_limit]
        )

    def revenue_by_day(self, paid_orders_30d: Iterable[NormalizedOrder], now: datetime) -> dict[str, int]:
        """
        Serie de ingresos diarios de los últimos 30 días (UTC).

        Los pedidos cuyo día no pertenece a la serie se descartan.
        """
        series = seed_revenue_series(now)
        dropped = 0

        for order in paid_orders_30d:
            key = day_key(order.created_at)
            if key in series:
                series[key] += order.totals.paid_total
            else:
                dropped += 1

        if dropped:
            logger.debug(f"{dropped} pedidos fuera de la serie diaria (fecha fuera de rango)")

        return {key: self._minor(amount) for key, amount in series.items()}

    @staticmethod
    def status_breakdown(orders: Iterable[NormalizedOrder]) -> dict[str, int]:
        """Cantidad de pedidos por estado, cancelados incluidos."""
        counts: dict[str, int] = {}
        for order in orders:
            counts[order.status] = counts.get(order.status, 0) + 1
        return counts
