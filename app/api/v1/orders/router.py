"""
Orders API routes
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.core.database import get_db
from app.models import User, OrderStatus
from app.api.v1.auth.dependencies import get_current_user, require_admin, require_staff
from app.utils.dependencies import get_pagination_params
from app.utils.pagination import PaginationParams
from .schemas import (
    OrderCreate,
    OrderStatusUpdate,
    ShopperAssignment,
    DeliveryTimeUpdate,
    PaymentStatusUpdate,
    OrderResponse,
    OrderListResponse
)
from .services import OrderService

router = APIRouter()

@router.get(
    "/",
    response_model=OrderListResponse,
    summary="List my orders",
    description="Orders of the current user, newest first"
)
async def get_my_orders(
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.list_user_orders(current_user.id, pagination)

@router.get(
    "/all",
    response_model=OrderListResponse,
    summary="List all orders",
    description="Admins see every order; shoppers see the orders assigned to them"
)
async def get_all_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.list_all_orders(current_user, pagination, status_filter)

@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order"
)
async def get_order(
    order_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.get_order_for_user(order_id, current_user)

@router.post(
    "/",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Check out an active cart into an order"
)
async def create_order(
    payload: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.create_order(current_user, payload)

@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status",
    description="Admin or the assigned shopper"
)
async def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.update_status(order_id, current_user, payload.status, payload.note)

@router.put(
    "/{order_id}/assign",
    response_model=OrderResponse,
    summary="Assign shopper",
    description="Admin only"
)
async def assign_shopper(
    order_id: uuid.UUID,
    payload: ShopperAssignment,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.assign_shopper(order_id, payload.shopper_id)

@router.put(
    "/{order_id}/delivery-time",
    response_model=OrderResponse,
    summary="Set delivery time",
    description="Admin or the assigned shopper"
)
async def set_delivery_time(
    order_id: uuid.UUID,
    payload: DeliveryTimeUpdate,
    current_user: User = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.set_delivery_time(order_id, current_user, payload.delivery_time)

@router.put(
    "/{order_id}/payment-status",
    response_model=OrderResponse,
    summary="Update payment status",
    description="Admin only"
)
async def update_payment_status(
    order_id: uuid.UUID,
    payload: PaymentStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = OrderService(db)
    return await service.update_payment_status(order_id, payload.payment_status)
