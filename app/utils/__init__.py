"""Utilities package"""

from .helpers import generate_slug, round_money, generate_order_number, generate_tx_ref
from .pagination import paginate, PaginationParams
from .dependencies import get_pagination_params

__all__ = [
    "generate_slug",
    "round_money",
    "generate_order_number",
    "generate_tx_ref",
    "paginate",
    "PaginationParams",
    "get_pagination_params",
]
