"""
Service layer for the invoice dashboard.

Services wrap the Supabase query builder (persistence) and the view cache.
Actions call services; routes call actions.
"""

from .cache import revalidate_path, view_cache
from .invoice_service import (
    delete_invoice,
    insert_invoice,
    list_invoices,
    update_invoice,
)

__all__ = [
    "insert_invoice",
    "update_invoice",
    "delete_invoice",
    "list_invoices",
    "revalidate_path",
    "view_cache",
]
