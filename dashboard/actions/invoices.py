"""
Invoice form actions.

Each action runs validation -> persistence -> revalidation -> navigation and
never raises for expected failures:

- invalid input: InvoiceFormState with field errors, no database call
- database failure: InvoiceFormState with a generic message (details are logged)
- success: Redirect to the invoices listing (delete stays on the page)

Redirects are built only after the persistence try/except has closed.
"""

import logging
from datetime import date
from typing import Any, Mapping, Optional

from supabase import Client

from dashboard.actions.outcomes import Redirect
from dashboard.config import settings
from dashboard.schemas.invoices import (
    InvoiceDeleted,
    InvoiceFormState,
    validate_invoice_form,
)
from dashboard.services import invoice_service
from dashboard.services.cache import revalidate_path

logger = logging.getLogger(__name__)

CREATE_MISSING_FIELDS = "Missing Fields. Failed to Create Invoice."
CREATE_DATABASE_ERROR = "Database Error: Failed to Create Invoice."
UPDATE_MISSING_FIELDS = "Missing Fields. Failed to Update Invoice."
UPDATE_DATABASE_ERROR = "Database Error: Failed to Update Invoice."
DELETE_SUCCESS = "Deleted Invoice."
DELETE_DATABASE_ERROR = "Database Error: Failed to Delete Invoice."


async def create_invoice(
    supabase_client: Client,
    prev_state: Optional[InvoiceFormState],
    form_data: Mapping[str, Any],
) -> InvoiceFormState | Redirect:
    """
    Create an invoice from submitted form data.

    Args:
        supabase_client: Authenticated Supabase client
        prev_state: State from the previous submission (unused)
        form_data: Raw form fields (customerId, amount, status)

    Returns:
        Redirect to the invoices listing, or InvoiceFormState describing the failure
    """
    validated = validate_invoice_form(form_data)
    if not validated.success or validated.data is None:
        logger.info(f"Create invoice rejected: invalid fields {sorted(validated.errors)}")
        return InvoiceFormState(errors=validated.errors, message=CREATE_MISSING_FIELDS)

    form = validated.data
    today = date.today().isoformat()

    try:
        await invoice_service.insert_invoice(
            supabase_client,
            customer_id=form.customer_id,
            amount_in_cents=form.amount_in_cents,
            status=form.status,
            date=today,
        )
    except Exception as e:
        logger.error(f"Failed to create invoice: {e}", exc_info=True)
        return InvoiceFormState(message=CREATE_DATABASE_ERROR)

    revalidate_path(settings.INVOICES_PATH)
    return Redirect(settings.INVOICES_PATH)


async def update_invoice(
    supabase_client: Client,
    invoice_id: str,
    form_data: Mapping[str, Any],
) -> InvoiceFormState | Redirect:
    """
    Overwrite customer, amount and status of an existing invoice.

    The invoice id and its creation date are never modified.
    """
    validated = validate_invoice_form(form_data)
    if not validated.success or validated.data is None:
        logger.info(
            f"Update of invoice {invoice_id} rejected: invalid fields {sorted(validated.errors)}"
        )
        return InvoiceFormState(errors=validated.errors, message=UPDATE_MISSING_FIELDS)

    form = validated.data

    try:
        await invoice_service.update_invoice(
            supabase_client,
            invoice_id=invoice_id,
            customer_id=form.customer_id,
            amount_in_cents=form.amount_in_cents,
            status=form.status,
        )
    except Exception as e:
        logger.error(f"Failed to update invoice {invoice_id}: {e}", exc_info=True)
        return InvoiceFormState(message=UPDATE_DATABASE_ERROR)

    revalidate_path(settings.INVOICES_PATH)
    return Redirect(settings.INVOICES_PATH)


async def delete_invoice(
    supabase_client: Client,
    invoice_id: str,
) -> InvoiceFormState:
    """Delete one invoice. The caller stays on the listing page.

    Returns InvoiceDeleted on success, a plain InvoiceFormState on failure.
    """
    try:
        await invoice_service.delete_invoice(supabase_client, invoice_id=invoice_id)
    except Exception as e:
        logger.error(f"Failed to delete invoice {invoice_id}: {e}", exc_info=True)
        return InvoiceFormState(message=DELETE_DATABASE_ERROR)

    revalidate_path(settings.INVOICES_PATH)
    return InvoiceDeleted(message=DELETE_SUCCESS)
