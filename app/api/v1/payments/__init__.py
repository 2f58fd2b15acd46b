"""Payments module exports"""

from . import router, schemas, services, gateways, webhooks

__all__ = ["router", "schemas", "services", "gateways", "webhooks"]
