"""
Order service layer
Handles order creation and fulfilment
"""

from typing import Optional
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, desc
import logging
import uuid

from app.models import Order, OrderItem, OrderStatus, PaymentStatus, Cart, User, UserRole
from app.core.config import settings
from app.core.exceptions import (
    NotFoundException,
    BadRequestException,
    ForbiddenException,
    InsufficientStockException,
    ProductUnavailableException,
    InvalidStatusTransitionException
)
from app.middleware.security import InputSanitizer
from app.utils.helpers import generate_order_number
from app.utils.pagination import PaginationParams, paginate
from app.api.v1.inventory.services import InventoryService
from .schemas import OrderCreate
from .state_machine import OrderStateMachine

logger = logging.getLogger(__name__)

class OrderService:
    """Order service for business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.inventory = InventoryService(db)
        self.state_machine = OrderStateMachine()

    async def generate_order_number(self) -> str:
        """
        Generate an order number not used by any existing order

        Returns:
            Order number in the ORD-YYMMDD-XXXX format

        Raises:
            RuntimeError: Every attempt collided
        """
        for _ in range(settings.ORDER_NUMBER_MAX_ATTEMPTS):
            candidate = generate_order_number()
            existing = await self.db.scalar(
                select(Order.id).where(Order.order_number == candidate)
            )
            if existing is None:
                return candidate

            logger.warning(f"Order number {candidate} already taken, retrying")

        raise RuntimeError("Could not generate a unique order number")

    async def create_order(self, user: User, data: OrderCreate) -> Order:
        """
        Convert the caller's cart into an order

        The order insert, the stock decrements and the cart deactivation
        share the request transaction; any failure rolls all of them back.

        Args:
            user: Customer checking out
            data: Cart, payment and delivery details

        Returns:
            Created order

        Raises:
            NotFoundException: Cart missing, inactive or not owned by the caller
            BadRequestException: Empty cart
            ProductUnavailableException: A product was removed or deactivated
            InsufficientStockException: Not enough stock for a line
        """
        result = await self.db.execute(
            select(Cart).where(
                and_(
                    Cart.id == data.cart_id,
                    Cart.user_id == user.id,
                    Cart.is_active == True
                )
            )
        )
        cart = result.scalar_one_or_none()

        if not cart:
            raise NotFoundException("Cart not found")

        if not cart.items:
            raise BadRequestException("Cart is empty")

        for item in cart.items:
            product = item.product
            if not product or not product.is_active:
                raise ProductUnavailableException(product.name if product else str(item.product_id))
            if not product.has_stock(item.quantity):
                raise InsufficientStockException(product.name, product.stock)

        order = Order(
            order_number=await self.generate_order_number(),
            user_id=user.id,
            store_id=cart.store_id,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            subtotal=cart.subtotal,
            tax=cart.tax,
            delivery_fee=cart.delivery_fee,
            service_fee=cart.service_fee,
            tip=cart.tip,
            total=cart.total,
            payment_method=data.payment_method.model_dump(by_alias=True, exclude_none=True),
            payment_id=data.payment_id,
            delivery_address=data.delivery_address.model_dump(by_alias=True),
            delivery_instructions=InputSanitizer.sanitize_instructions(data.delivery_instructions),
            items=[
                OrderItem(
                    product_id=item.product_id,
                    name=item.product.name,
                    quantity=item.quantity,
                    price=item.price,
                    notes=item.notes,
                    position=position,
                )
                for position, item in enumerate(cart.items)
            ],
            status_history=[],
        )
        order.record_status(OrderStatus.PENDING, "Order created")

        self.db.add(order)
        await self.db.flush()

        for item in cart.items:
            taken = await self.inventory.decrement_stock(item.product_id, item.quantity)
            if not taken:
                await self.db.refresh(item.product)
                raise InsufficientStockException(item.product.name, item.product.stock)

        cart.is_active = False
        await self.db.flush()

        logger.info(f"Order {order.order_number} created from cart {cart.id} for user {user.id}")
        return order

    async def get_order(self, order_id: uuid.UUID) -> Order:
        """
        Get order by ID

        Raises:
            NotFoundException: If order not found
        """
        order = await self.db.get(Order, order_id)
        if not order:
            raise NotFoundException("Order not found")
        return order

    def can_view(self, order: Order, user: User) -> bool:
        """Owner, admins and the assigned shopper may see an order"""
        if user.role == UserRole.ADMIN:
            return True
        if order.user_id == user.id:
            return True
        return user.role == UserRole.SHOPPER and order.shopper_id == user.id

    def can_fulfil(self, order: Order, user: User) -> bool:
        """Admins and the assigned shopper may move an order along"""
        if user.role == UserRole.ADMIN:
            return True
        return user.role == UserRole.SHOPPER and order.shopper_id == user.id

    async def get_order_for_user(self, order_id: uuid.UUID, user: User) -> Order:
        """
        Get an order the user is allowed to see

        Raises:
            NotFoundException: If order not found
            ForbiddenException: Caller is not owner, admin or assigned shopper
        """
        order = await self.get_order(order_id)
        if not self.can_view(order, user):
            raise ForbiddenException("Not authorized")
        return order

    async def list_user_orders(self, user_id: uuid.UUID, pagination: PaginationParams) -> dict:
        """The caller's orders, newest first"""
        query = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(desc(Order.created_at))
        )
        page = await paginate(self.db, query, pagination)
        return {"orders": page["items"], "pagination": page["pagination"]}

    async def list_all_orders(
        self,
        user: User,
        pagination: PaginationParams,
        status: Optional[OrderStatus] = None
    ) -> dict:
        """
        Orders for staff: admins see all, shoppers only those assigned to them

        Args:
            user: Admin or shopper
            pagination: Page and limit
            status: Optional status filter
        """
        conditions = []
        if status:
            conditions.append(Order.status == status)
        if user.role == UserRole.SHOPPER:
            conditions.append(Order.shopper_id == user.id)

        query = select(Order).order_by(desc(Order.created_at))
        if conditions:
            query = query.where(and_(*conditions))

        page = await paginate(self.db, query, pagination)
        return {"orders": page["items"], "pagination": page["pagination"]}

    def apply_status(self, order: Order, new_status: OrderStatus, note: Optional[str] = None) -> Order:
        """
        Set the status and append one history entry

        Raises:
            InvalidStatusTransitionException: Transition refused while
                transition enforcement is on
        """
        if settings.ENFORCE_STATUS_TRANSITIONS and not self.state_machine.can_transition(order.status, new_status):
            raise InvalidStatusTransitionException(order.status.value, new_status.value)

        previous = order.status
        order.status = new_status
        order.record_status(new_status, note)

        logger.info(f"Order {order.order_number} status {previous.value} -> {new_status.value}")
        return order

    async def update_status(
        self,
        order_id: uuid.UUID,
        user: User,
        new_status: OrderStatus,
        note: Optional[str] = None
    ) -> Order:
        """
        Move an order to a new status

        Raises:
            NotFoundException: If order not found
            ForbiddenException: Shopper not assigned to the order
            InvalidStatusTransitionException: Refused transition
        """
        order = await self.get_order(order_id)
        if not self.can_fulfil(order, user):
            raise ForbiddenException("Not authorized")

        self.apply_status(order, new_status, InputSanitizer.sanitize_text(note))
        await self.db.flush()
        return order

    async def assign_shopper(self, order_id: uuid.UUID, shopper_id: uuid.UUID) -> Order:
        """
        Assign a shopper to the order

        Raises:
            NotFoundException: Order or user not found
            BadRequestException: User is not a shopper
        """
        order = await self.get_order(order_id)

        shopper = await self.db.get(User, shopper_id)
        if not shopper:
            raise NotFoundException("Shopper not found")
        if shopper.role != UserRole.SHOPPER:
            raise BadRequestException("User is not a shopper")

        order.shopper_id = shopper.id
        order.record_status(order.status, "Shopper assigned")
        await self.db.flush()

        logger.info(f"Shopper {shopper.id} assigned to order {order.order_number}")
        return order

    async def set_delivery_time(
        self,
        order_id: uuid.UUID,
        user: User,
        delivery_time: datetime
    ) -> Order:
        """
        Set the expected delivery time

        Raises:
            NotFoundException: If order not found
            ForbiddenException: Shopper not assigned to the order
        """
        order = await self.get_order(order_id)
        if not self.can_fulfil(order, user):
            raise ForbiddenException("Not authorized")

        order.delivery_time = delivery_time
        order.record_status(order.status, f"Delivery time set to {delivery_time.isoformat()}")
        await self.db.flush()
        return order

    async def update_payment_status(self, order_id: uuid.UUID, payment_status: PaymentStatus) -> Order:
        """
        Overwrite the payment status by hand

        Raises:
            NotFoundException: If order not found
        """
        order = await self.get_order(order_id)

        order.payment_status = payment_status
        order.record_status(order.status, f"Payment status updated to {payment_status.value}")
        await self.db.flush()

        logger.info(f"Order {order.order_number} payment status set to {payment_status.value}")
        return order
