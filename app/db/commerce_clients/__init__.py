"""
Clients for the commerce framework's admin API.

- BaseCommerceClient: session, auth, retries and pagination
- CommerceOrderClient: raw orders and line items for the analytics
- CommerceStoreClient: store record and settings metadata
- CommerceCustomerClient: customer record and wishlist metadata
"""

from .base_client import BaseCommerceClient
from .customer_client import CommerceCustomerClient
from .order_client import CommerceOrderClient
from .store_client import CommerceStoreClient

__all__ = ["BaseCommerceClient", "CommerceCustomerClient", "CommerceOrderClient", "CommerceStoreClient"]
