"""
Modelos Pydantic para la lista de deseos.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class WishlistAddRequest(BaseModel):
    """
    Producto a agregar.

    ``product_id`` se valida en el servicio para responder 400 cuando falta.
    """

    product_id: Optional[Any] = Field(None, description="ID del producto")


class WishlistResponse(BaseModel):
    """Lista de deseos actual del cliente."""

    wishlist: List[str] = Field(default_factory=list, description="IDs de producto en orden de alta")
