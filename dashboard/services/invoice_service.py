"""
Invoice persistence service.

Statement shapes against the invoices table:
- insert: customer_id, amount (cents), status, date
- update: customer_id, amount (cents), status WHERE id
- delete: WHERE id

RLS is enforced automatically via the authenticated Supabase client.
Failures are raised to the caller; the actions decide what the user sees.
"""

import logging
from typing import Any, Dict, List, cast

from supabase import Client

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"


async def insert_invoice(
    supabase_client: Client,
    customer_id: str,
    amount_in_cents: int,
    status: str,
    date: str,
) -> Dict[str, Any]:
    """
    Insert a new invoice row.

    Args:
        supabase_client: Authenticated Supabase client (with user token)
        customer_id: UUID of an existing customer
        amount_in_cents: Amount as integer cents
        status: "pending" or "paid"
        date: ISO calendar date the invoice is created on

    Returns:
        The created invoice record (includes the generated id)

    Raises:
        Exception: If the database operation fails or returns no row
    """
    invoice_data = {
        "customer_id": customer_id,
        "amount": amount_in_cents,
        "status": status,
        "date": date,
    }

    logger.info(f"Creating invoice for customer {customer_id}: status={status}, date={date}")

    result = supabase_client.table(INVOICES_TABLE).insert(invoice_data).execute()

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to create invoice: no data returned")

    created_invoice = cast(Dict[str, Any], result.data[0])

    logger.info(f"Invoice created successfully: id={created_invoice.get('id')}")

    return created_invoice


async def update_invoice(
    supabase_client: Client,
    invoice_id: str,
    customer_id: str,
    amount_in_cents: int,
    status: str,
) -> List[Dict[str, Any]]:
    """
    Overwrite the mutable fields of an invoice.

    Only customer_id, amount and status are written. id and date are
    immutable and never part of the payload.

    Returns:
        The updated rows (empty if no invoice matched invoice_id)

    Raises:
        Exception: If the database operation fails
    """
    updates = {
        "customer_id": customer_id,
        "amount": amount_in_cents,
        "status": status,
    }

    logger.info(f"Updating invoice {invoice_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .update(updates)
        .eq("id", invoice_id)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    if not rows:
        logger.warning(f"Invoice {invoice_id} not found or not accessible")
    else:
        logger.info(f"Invoice {invoice_id} updated successfully")

    return rows


async def delete_invoice(
    supabase_client: Client,
    invoice_id: str,
) -> List[Dict[str, Any]]:
    """
    Delete the invoice matching invoice_id, and nothing else.

    Returns:
        The deleted rows (empty if no invoice matched)

    Raises:
        Exception: If the database operation fails
    """
    logger.info(f"Deleting invoice {invoice_id}")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .delete()
        .eq("id", invoice_id)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    if not rows:
        logger.warning(f"Delete matched no invoice for id {invoice_id}")
    else:
        logger.info(f"Invoice {invoice_id} deleted")

    return rows


async def list_invoices(
    supabase_client: Client,
    limit: int = 50,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """
    Fetch invoices, newest first.

    Args:
        supabase_client: Authenticated Supabase client
        limit: Maximum number of invoices to return
        offset: Number of invoices to skip (for pagination)
    """
    logger.debug(f"Fetching invoices (limit={limit}, offset={offset})")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .select("id, customer_id, amount, status, date")
        .order("date", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )

    invoices = cast(List[Dict[str, Any]], result.data)

    logger.info(f"Fetched {len(invoices)} invoices")

    return invoices
