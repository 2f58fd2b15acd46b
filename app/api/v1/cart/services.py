"""
Cart service layer
Handles shopping cart business logic
"""

from typing import List, Optional
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, desc
import logging
import uuid

from app.models import Cart, CartItem, Product, Store
from app.core.config import settings
from app.core.exceptions import (
    NotFoundException,
    BadRequestException,
    InsufficientStockException,
    ProductUnavailableException
)
from app.middleware.security import InputSanitizer
from app.utils.helpers import round_money
from .schemas import CartLineInput

logger = logging.getLogger(__name__)

class CartService:
    """Shopping cart service"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def calculate_totals(cart: Cart, tax_rate: Decimal = None) -> Cart:
        """
        Recompute the derived money fields of a cart

        subtotal = sum(price * quantity), tax = subtotal * tax rate,
        total = subtotal + tax + delivery fee + service fee + tip.
        Every amount is rounded to cents, half-up.
        """
        rate = settings.TAX_RATE if tax_rate is None else Decimal(str(tax_rate))

        subtotal = round_money(sum(
            (Decimal(item.price) * item.quantity for item in cart.items),
            Decimal("0")
        ))
        tax = round_money(subtotal * rate)
        delivery_fee = round_money(cart.delivery_fee or 0)
        service_fee = round_money(cart.service_fee or 0)
        tip = round_money(cart.tip or 0)

        cart.subtotal = subtotal
        cart.tax = tax
        cart.delivery_fee = delivery_fee
        cart.service_fee = service_fee
        cart.tip = tip
        cart.total = round_money(subtotal + tax + delivery_fee + service_fee + tip)
        return cart

    async def find_active_cart(
        self,
        user_id: uuid.UUID,
        store_id: Optional[uuid.UUID] = None
    ) -> Optional[Cart]:
        """Active cart for (user, store), or the most recently updated one"""
        conditions = [Cart.user_id == user_id, Cart.is_active == True]
        if store_id:
            conditions.append(Cart.store_id == store_id)

        result = await self.db.execute(
            select(Cart)
            .where(and_(*conditions))
            .order_by(desc(Cart.updated_at))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_active_cart(
        self,
        user_id: uuid.UUID,
        store_id: Optional[uuid.UUID] = None
    ) -> Cart:
        """
        Get the caller's active cart

        Raises:
            NotFoundException: If there is no active cart
        """
        cart = await self.find_active_cart(user_id, store_id)
        if not cart:
            raise NotFoundException("Cart not found")
        return cart

    async def create_or_replace_cart(
        self,
        user_id: uuid.UUID,
        store_id: uuid.UUID,
        items: List[CartLineInput]
    ) -> Cart:
        """
        Replace the items of the (user, store) cart, creating it if needed

        Every line is validated before anything changes.

        Args:
            user_id: Cart owner
            store_id: Store the products must belong to
            items: Requested lines; repeated products are merged

        Returns:
            Saved cart with fresh totals

        Raises:
            BadRequestException: Unknown store, foreign or inactive product
            InsufficientStockException: Requested more than is in stock
        """
        if not await self.db.get(Store, store_id):
            raise BadRequestException("Store not found")

        merged = {}
        for line in items:
            if line.product in merged:
                merged[line.product]["quantity"] += line.quantity
                if line.notes:
                    merged[line.product]["notes"] = line.notes
            else:
                merged[line.product] = {"quantity": line.quantity, "notes": line.notes}

        validated = []
        for product_id, line in merged.items():
            result = await self.db.execute(
                select(Product).where(
                    and_(
                        Product.id == product_id,
                        Product.store_id == store_id,
                        Product.is_active == True
                    )
                )
            )
            product = result.scalar_one_or_none()

            if not product:
                raise BadRequestException(
                    f"Product {product_id} not found or does not belong to this store"
                )

            if not product.has_stock(line["quantity"]):
                raise InsufficientStockException(product.name, product.stock)

            validated.append((product, line))

        cart = await self.find_active_cart(user_id, store_id)
        if cart:
            cart.items.clear()
            await self.db.flush()
        else:
            cart = Cart(user_id=user_id, store_id=store_id, items=[])
            self.db.add(cart)

        for position, (product, line) in enumerate(validated):
            cart.items.append(CartItem(
                product=product,
                product_id=product.id,
                quantity=line["quantity"],
                price=round_money(product.effective_price),
                notes=InputSanitizer.sanitize_note(line["notes"]),
                position=position,
            ))

        self.calculate_totals(cart)
        await self.db.flush()

        logger.info(f"Cart {cart.id} set with {len(cart.items)} lines for user {user_id}")
        return cart

    async def add_item(
        self,
        user_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int,
        notes: Optional[str] = None
    ) -> Cart:
        """
        Add a product to the cart of its store

        An existing line keeps its price and gets the quantity added.

        Raises:
            BadRequestException: Product missing or inactive
            InsufficientStockException: Stock below the requested quantity
        """
        product = await self.db.get(Product, product_id)
        if not product or not product.is_active:
            raise BadRequestException("Product not found")

        if not product.has_stock(quantity):
            raise InsufficientStockException(product.name, product.stock)

        notes = InputSanitizer.sanitize_note(notes)

        cart = await self.find_active_cart(user_id, product.store_id)
        if not cart:
            cart = Cart(user_id=user_id, store_id=product.store_id, items=[])
            self.db.add(cart)

        existing = next((item for item in cart.items if item.product_id == product.id), None)

        if existing:
            existing.quantity += quantity
            if notes:
                existing.notes = notes
        else:
            position = max((item.position for item in cart.items), default=-1) + 1
            cart.items.append(CartItem(
                product=product,
                product_id=product.id,
                quantity=quantity,
                price=round_money(product.effective_price),
                notes=notes,
                position=position,
            ))

        self.calculate_totals(cart)
        await self.db.flush()
        return cart

    async def _find_cart_with_item(self, user_id: uuid.UUID, item_id: uuid.UUID):
        result = await self.db.execute(
            select(Cart)
            .join(CartItem, CartItem.cart_id == Cart.id)
            .where(
                and_(
                    CartItem.id == item_id,
                    Cart.user_id == user_id,
                    Cart.is_active == True
                )
            )
        )
        cart = result.scalars().first()
        if not cart:
            raise NotFoundException("Cart or item not found")

        item = next((item for item in cart.items if item.id == item_id), None)
        if not item:
            raise NotFoundException("Item not found in cart")

        return cart, item

    async def update_item(
        self,
        user_id: uuid.UUID,
        item_id: uuid.UUID,
        quantity: int,
        notes: Optional[str] = None
    ) -> Cart:
        """
        Change the quantity (and optionally notes) of a cart line

        Raises:
            NotFoundException: No such line in the caller's active carts
            InsufficientStockException: Current stock below the new quantity
        """
        cart, item = await self._find_cart_with_item(user_id, item_id)

        product = item.product
        if not product or not product.is_active:
            raise ProductUnavailableException(product.name if product else str(item.product_id))

        if not product.has_stock(quantity):
            raise InsufficientStockException(product.name, product.stock)

        item.quantity = quantity
        if notes is not None:
            item.notes = InputSanitizer.sanitize_note(notes)

        self.calculate_totals(cart)
        await self.db.flush()
        return cart

    async def remove_item(self, user_id: uuid.UUID, item_id: uuid.UUID) -> Optional[Cart]:
        """
        Remove a cart line

        Returns:
            The updated cart, or None when the last line was removed and
            the cart itself was deleted

        Raises:
            NotFoundException: No such line in the caller's active carts
        """
        cart, item = await self._find_cart_with_item(user_id, item_id)

        cart.items.remove(item)

        if not cart.items:
            await self.db.delete(cart)
            await self.db.flush()
            logger.info(f"Cart {cart.id} deleted after its last item was removed")
            return None

        self.calculate_totals(cart)
        await self.db.flush()
        return cart

    async def clear_cart(self, user_id: uuid.UUID, store_id: Optional[uuid.UUID] = None) -> None:
        """
        Delete the caller's active cart

        Raises:
            NotFoundException: If there is no active cart
        """
        cart = await self.get_active_cart(user_id, store_id)
        await self.db.delete(cart)
        await self.db.flush()

    async def prepare_checkout(
        self,
        user_id: uuid.UUID,
        delivery_fee: Decimal,
        service_fee: Decimal,
        tip: Decimal = Decimal("0"),
        store_id: Optional[uuid.UUID] = None
    ) -> Cart:
        """
        Re-validate the cart lines and apply the checkout fees

        Raises:
            NotFoundException: No active cart
            ProductUnavailableException: A product was removed or deactivated
            InsufficientStockException: A line exceeds the current stock
        """
        cart = await self.get_active_cart(user_id, store_id)

        for item in cart.items:
            product = item.product
            if not product or not product.is_active:
                raise ProductUnavailableException(product.name if product else str(item.product_id))

            if not product.has_stock(item.quantity):
                raise InsufficientStockException(product.name, product.stock)

        cart.delivery_fee = delivery_fee
        cart.service_fee = service_fee
        cart.tip = tip or Decimal("0")

        self.calculate_totals(cart)
        await self.db.flush()
        return cart
