"""
Módulo de acceso a datos externos.

- commerce_clients: API administrativa del backend de comercio
  (pedidos, líneas de pedido, tienda y clientes)
- InstagramGraphClient: posts recientes de la cuenta de Instagram
"""

from app.db.commerce_clients import (
    BaseCommerceClient,
    CommerceCustomerClient,
    CommerceOrderClient,
    CommerceStoreClient,
)
from app.db.instagram_client import InstagramGraphClient

__all__ = [
    "BaseCommerceClient",
    "CommerceCustomerClient",
    "CommerceOrderClient",
    "CommerceStoreClient",
    "InstagramGraphClient",
]
