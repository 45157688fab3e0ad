"""
Lista de deseos de los clientes de la tienda.

La lista es un arreglo de IDs de producto guardado en ``metadata.wishlist``
del cliente en el backend de comercio. El resto de la metadata del cliente
se conserva en cada escritura.
"""

import logging
from typing import Any, Dict, List

from app.db.commerce_clients import CommerceCustomerClient
from app.utils.error_handler import CustomerNotFoundException, ValidationException, WishlistException

logger = logging.getLogger(__name__)

WISHLIST_METADATA_KEY = "wishlist"


def validate_product_id(product_id: Any) -> str:
    """
    Valida el ID de producto recibido.

    Raises:
        ValidationException: Si falta o no es un string no vacío (400)
    """
    if not isinstance(product_id, str) or not product_id.strip():
        raise ValidationException(
            "product_id is required.",
            field="product_id",
            invalid_value=product_id,
            expected_format="non-empty string",
        )
    return product_id.strip()


class WishlistService:
    """Servicio para leer y modificar la lista de deseos de un cliente."""

    def __init__(self, customer_client: CommerceCustomerClient):
        self.customer_client = customer_client

    @staticmethod
    def _metadata_of(customer: Dict[str, Any]) -> Dict[str, Any]:
        metadata = customer.get("metadata")
        return dict(metadata) if isinstance(metadata, dict) else {}

    @staticmethod
    def _wishlist_of(metadata: Dict[str, Any]) -> List[str]:
        wishlist = metadata.get(WISHLIST_METADATA_KEY)
        if not isinstance(wishlist, list):
            return []
        return [product_id for product_id in wishlist if isinstance(product_id, str)]

    async def _require_customer(self, customer_id: str) -> Dict[str, Any]:
        customer = await self.customer_client.get_customer(customer_id)
        if not customer:
            raise CustomerNotFoundException(customer_id)
        return customer

    async def _save(self, customer_id: str, metadata: Dict[str, Any], wishlist: List[str]) -> None:
        await self.customer_client.update_customer_metadata(
            customer_id, {**metadata, WISHLIST_METADATA_KEY: wishlist}
        )

    async def get_wishlist(self, customer_id: str) -> Dict[str, List[str]]:
        """
        Obtiene la lista de deseos del cliente.

        Returns:
            Dict: ``{"wishlist": [product_id, ...]}``

        Raises:
            CustomerNotFoundException: Si el cliente no existe
            WishlistException: Si no se puede leer el cliente
        """
        try:
            customer = await self._require_customer(customer_id)
        except CustomerNotFoundException:
            raise
        except Exception as e:
            logger.error(f"❌ Error cargando lista de deseos de {customer_id}: {e}")
            raise WishlistException("Failed to load wishlist.", operation="load") from e

        return {"wishlist": self._wishlist_of(self._metadata_of(customer))}

    async def add_product(self, customer_id: str, product_id: Any) -> Dict[str, List[str]]:
        """
        Agrega un producto a la lista de deseos.

        Agregar un producto que ya está en la lista no escribe nada y devuelve
        la lista sin cambios.

        Raises:
            ValidationException: Si falta ``product_id``
            CustomerNotFoundException: Si el cliente no existe
            WishlistException: Si la actualización falla
        """
        product_id = validate_product_id(product_id)

        try:
            customer = await self._require_customer(customer_id)
            metadata = self._metadata_of(customer)
            wishlist = self._wishlist_of(metadata)

            if product_id in wishlist:
                return {"wishlist": wishlist}

            wishlist = [*wishlist, product_id]
            await self._save(customer_id, metadata, wishlist)
        except CustomerNotFoundException:
            raise
        except Exception as e:
            logger.error(f"❌ Error agregando {product_id} a la lista de deseos de {customer_id}: {e}")
            raise WishlistException("Failed to add to wishlist.", operation="add") from e

        logger.info(f"💜 Producto {product_id} agregado a la lista de deseos de {customer_id}")
        return {"wishlist": wishlist}

    async def remove_product(self, customer_id: str, product_id: Any) -> Dict[str, List[str]]:
        """
        Quita un producto de la lista de deseos.

        Raises:
            ValidationException: Si falta ``product_id``
            CustomerNotFoundException: Si el cliente no existe
            WishlistException: Si la actualización falla
        """
        product_id = validate_product_id(product_id)

        try:
            customer = await self._require_customer(customer_id)
            metadata = self._metadata_of(customer)
            wishlist = [item for item in self._wishlist_of(metadata) if item != product_id]
            await self._save(customer_id, metadata, wishlist)
        except CustomerNotFoundException:
            raise
        except Exception as e:
            logger.error(f"❌ Error quitando {product_id} de la lista de deseos de {customer_id}: {e}")
            raise WishlistException("Failed to remove from wishlist.", operation="remove") from e

        return {"wishlist": wishlist}
