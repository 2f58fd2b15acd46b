"""
Cart API routes
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Union
import uuid

from app.core.database import get_db
from app.models import User
from app.schemas.base import MessageResponse
from app.api.v1.auth.dependencies import get_current_user
from .schemas import CartCreate, CartItemAdd, CartItemUpdate, CartCheckout, CartResponse
from .services import CartService

router = APIRouter()

@router.get(
    "/",
    response_model=CartResponse,
    summary="Get active cart",
    description="Active cart for the store, or the most recently updated one"
)
async def get_cart(
    store: Optional[uuid.UUID] = Query(None, description="Store of the cart"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    return await service.get_active_cart(current_user.id, store)

@router.post(
    "/",
    response_model=CartResponse,
    summary="Create or replace cart",
    description="Replace every line of the cart for a store"
)
async def create_cart(
    payload: CartCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    return await service.create_or_replace_cart(current_user.id, payload.store, payload.items)

@router.put(
    "/add",
    response_model=CartResponse,
    summary="Add item to cart"
)
async def add_to_cart(
    payload: CartItemAdd,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    return await service.add_item(current_user.id, payload.product_id, payload.quantity, payload.notes)

@router.put(
    "/update/{item_id}",
    response_model=CartResponse,
    summary="Update cart item"
)
async def update_cart_item(
    item_id: uuid.UUID,
    payload: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    return await service.update_item(current_user.id, item_id, payload.quantity, payload.notes)

@router.delete(
    "/remove/{item_id}",
    response_model=Union[CartResponse, MessageResponse],
    summary="Remove cart item",
    description="Removing the last item deletes the cart"
)
async def remove_cart_item(
    item_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    cart = await service.remove_item(current_user.id, item_id)
    if cart is None:
        return MessageResponse(message="Cart is now empty")
    return CartResponse.model_validate(cart)

@router.delete(
    "/",
    response_model=MessageResponse,
    summary="Clear cart"
)
async def clear_cart(
    store: Optional[uuid.UUID] = Query(None, description="Store of the cart"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    await service.clear_cart(current_user.id, store)
    return MessageResponse(message="Cart cleared")

@router.put(
    "/checkout",
    response_model=CartResponse,
    summary="Prepare cart for checkout",
    description="Re-check availability and stock, then apply the fees"
)
async def checkout_cart(
    payload: CartCheckout,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = CartService(db)
    return await service.prepare_checkout(
        current_user.id,
        payload.delivery_fee,
        payload.service_fee,
        payload.tip,
        payload.store
    )
