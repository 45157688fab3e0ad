"""
Wishlist endpoints for logged-in storefront customers.

The customer is resolved by the auth gateway and forwarded in the
``X-Customer-ID`` header.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_customer_id, get_wishlist_service
from app.api.v1.schemas.wishlist_schemas import WishlistAddRequest, WishlistResponse
from app.services.wishlist import WishlistService

router = APIRouter()


@router.get(
    "",
    response_model=WishlistResponse,
    summary="Get wishlist",
    description="Product ids saved by the current customer",
)
async def get_wishlist(
    customer_id: str = Depends(get_customer_id),
    service: WishlistService = Depends(get_wishlist_service),
) -> dict[str, Any]:
    return await service.get_wishlist(customer_id)


@router.post(
    "",
    response_model=WishlistResponse,
    summary="Add to wishlist",
    description="Adds a product id; adding an existing product leaves the list unchanged",
)
async def add_to_wishlist(
    payload: Optional[WishlistAddRequest] = None,
    customer_id: str = Depends(get_customer_id),
    service: WishlistService = Depends(get_wishlist_service),
) -> dict[str, Any]:
    """
    Add a product to the customer's wishlist.

    Returns:
        The resulting wishlist
    """
    return await service.add_product(customer_id, payload.product_id if payload else None)


@router.delete(
    "/{product_id}",
    response_model=WishlistResponse,
    summary="Remove from wishlist",
)
async def remove_from_wishlist(
    product_id: str,
    customer_id: str = Depends(get_customer_id),
    service: WishlistService = Depends(get_wishlist_service),
) -> dict[str, Any]:
    return await service.remove_product(customer_id, product_id)
