"""Inventory service: the only writer of Product.stock"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update, and_
from sqlalchemy.orm.attributes import set_committed_value
import logging
import uuid

from app.models import Product
from app.core.exceptions import BadRequestException

logger = logging.getLogger(__name__)

class InventoryService:
    """Stock reservation and adjustment"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def decrement_stock(self, product_id: uuid.UUID, quantity: int) -> bool:
        """
        Take quantity units of a product in one conditional UPDATE

        The row only changes while enough stock is left and the product is
        active, so two buyers racing for the last unit cannot both win.

        Args:
            product_id: Product to decrement
            quantity: Units to take

        Returns:
            True if the stock was taken, False if no row matched
        """
        if quantity <= 0:
            raise BadRequestException("Quantity must be at least 1")

        result = await self.db.execute(
            update(Product)
            .where(
                and_(
                    Product.id == product_id,
                    Product.stock >= quantity,
                    Product.is_active == True
                )
            )
            .values(stock=Product.stock - quantity)
            .returning(Product.stock)
            .execution_options(synchronize_session=False)
        )
        remaining = result.scalar_one_or_none()

        if remaining is None:
            logger.info(f"Stock decrement of {quantity} refused for product {product_id}")
            return False

        # Keep an already loaded instance in step with the row
        product = await self.db.get(Product, product_id)
        set_committed_value(product, "stock", remaining)

        logger.info(f"Stock of product {product_id} decremented by {quantity}")
        return True

    async def set_stock(self, product: Product, stock: int) -> Product:
        """
        Overwrite the stock level of a product (restock or correction)

        Raises:
            BadRequestException: If stock is negative
        """
        if stock < 0:
            raise BadRequestException("Stock cannot be negative")

        old_stock = product.stock
        product.stock = stock
        await self.db.flush()

        logger.info(f"Stock of product {product.id} set from {old_stock} to {stock}")
        return product
