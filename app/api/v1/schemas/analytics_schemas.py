"""
Modelos Pydantic para la respuesta de analítica del dashboard.

Todos los importes son enteros en unidades menores de la moneda de la tienda
(por ejemplo, céntimos).
"""

from typing import Dict, List, Union

from pydantic import BaseModel, Field


class TopProductSchema(BaseModel):
    """Producto del ranking por cantidad vendida."""

    title: str
    quantity: Union[int, float]
    revenue: int = Field(..., ge=0)


class PaymentBreakdownSchema(BaseModel):
    """Conteo de pedidos por estado de pago."""

    paid: int = Field(..., ge=0)
    unpaid: int = Field(..., ge=0)
    canceled: int = Field(..., ge=0)


class AnalyticsResponse(BaseModel):
    """Métricas de pedidos para el dashboard del comerciante."""

    total_revenue: int = Field(..., ge=0, description="Ingresos capturados de pedidos pagados")
    revenue_30d: int = Field(..., ge=0)
    revenue_7d: int = Field(..., ge=0)
    average_order_value: int = Field(..., ge=0)
    pending_revenue: int = Field(..., ge=0, description="Valor de pedidos activos sin pago")
    pending_revenue_30d: int = Field(..., ge=0)
    pending_revenue_7d: int = Field(..., ge=0)
    total_order_value: int = Field(..., ge=0, description="Valor total de pedidos no cancelados")
    total_orders: int = Field(..., ge=0)
    completed_orders: int = Field(..., ge=0)
    pending_orders: int = Field(..., ge=0)
    canceled_orders: int = Field(..., ge=0)
    orders_30d: int = Field(..., ge=0)
    pending_orders_30d: int = Field(..., ge=0)
    orders_7d: int = Field(..., ge=0)
    pending_orders_7d: int = Field(..., ge=0)
    conversion_rate: int = Field(..., ge=0, le=100, description="Porcentaje de pedidos activos pagados")
    top_products: List[TopProductSchema]
    revenue_by_day: Dict[str, int] = Field(..., description="Ingresos por día (YYYY-MM-DD), últimos 30 días")
    status_breakdown: Dict[str, int]
    payment_breakdown: PaymentBreakdownSchema
    currency_code: str
