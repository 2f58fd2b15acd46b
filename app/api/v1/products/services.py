"""
Product service layer
Handles business logic for products
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, desc
import logging
import uuid

from app.models import Product, Store, Category
from app.core.exceptions import NotFoundException, BadRequestException
from app.middleware.security import InputSanitizer
from app.utils.pagination import PaginationParams, paginate
from app.api.v1.inventory.services import InventoryService
from .schemas import ProductCreate, ProductUpdate, ProductFilters

logger = logging.getLogger(__name__)

class ProductService:
    """Product service for business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.inventory = InventoryService(db)

    async def get_product(self, product_id: uuid.UUID, include_inactive: bool = False) -> Product:
        """
        Get product by ID

        Raises:
            NotFoundException: If product missing or inactive
        """
        product = await self.db.get(Product, product_id)
        if not product or (not product.is_active and not include_inactive):
            raise NotFoundException("Product not found")
        return product

    async def list_products(self, filters: ProductFilters, pagination: PaginationParams) -> dict:
        """
        List active products

        Args:
            filters: Store, category, search text, sale flag and price range
            pagination: Page and limit

        Returns:
            Dictionary with products and the pagination block
        """
        conditions = [Product.is_active == True]

        if filters.store:
            conditions.append(Product.store_id == filters.store)
        if filters.category:
            conditions.append(Product.category_id == filters.category)
        if filters.on_sale is not None:
            conditions.append(Product.on_sale == filters.on_sale)
        if filters.min_price is not None:
            conditions.append(Product.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Product.price <= filters.max_price)
        if filters.search:
            term = f"%{filters.search.strip()}%"
            conditions.append(
                or_(
                    Product.name.ilike(term),
                    Product.description.ilike(term),
                    Product.brand.ilike(term)
                )
            )

        query = select(Product).where(and_(*conditions)).order_by(desc(Product.created_at), Product.name)
        page = await paginate(self.db, query, pagination)

        return {"products": page["items"], "pagination": page["pagination"]}

    async def create_product(self, data: ProductCreate) -> Product:
        """
        Create new product

        Raises:
            BadRequestException: Unknown store or category
        """
        if not await self.db.get(Store, data.store_id):
            raise BadRequestException("Store not found")

        if data.category_id and not await self.db.get(Category, data.category_id):
            raise BadRequestException("Category not found")

        values = InputSanitizer.sanitize_product_data(
            data.model_dump(exclude={"stock"})
        )
        product = Product(**values, stock=0)
        self.db.add(product)
        await self.db.flush()

        await self.inventory.set_stock(product, data.stock)

        logger.info(f"Product {product.id} created in store {product.store_id}")
        return product

    async def update_product(self, product_id: uuid.UUID, data: ProductUpdate) -> Product:
        """
        Update product fields; stock goes through the inventory service

        Raises:
            NotFoundException: If product missing
            BadRequestException: Unknown category
        """
        product = await self.get_product(product_id, include_inactive=True)

        values = InputSanitizer.sanitize_product_data(
            data.model_dump(exclude_unset=True, exclude={"stock"})
        )

        if values.get("category_id") and not await self.db.get(Category, values["category_id"]):
            raise BadRequestException("Category not found")

        product.update_from_dict(values)

        if data.stock is not None:
            await self.inventory.set_stock(product, data.stock)

        await self.db.flush()
        return product

