"""
Invoice form endpoints.

Each POST reads the submitted form, runs one action, and maps its outcome:
- Redirect -> 303 to the target path
- InvoiceFormState with field errors -> 422
- InvoiceFormState with a database error -> 500
- delete confirmation -> 200

GET /dashboard/invoices serves each user's listing from the view cache, refilling it
from the database after any mutation has revalidated the path.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from dashboard.actions import create_invoice, delete_invoice, update_invoice
from dashboard.actions.outcomes import Redirect
from dashboard.auth.dependencies import AuthenticatedUser, get_authenticated_user
from dashboard.config import settings
from dashboard.db.client import get_supabase_client
from dashboard.schemas.invoices import (
    InvoiceDeleted,
    InvoiceFormState,
    InvoiceListItem,
    InvoiceListResponse,
)
from dashboard.services import list_invoices, view_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.INVOICES_PATH, tags=["invoices"])


def _form_state_response(state: InvoiceFormState, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=state.model_dump(exclude_none=True),
    )


def _mutation_response(outcome: InvoiceFormState | Redirect) -> Response:
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.url, status_code=outcome.status_code)
    if outcome.errors:
        return _form_state_response(outcome, status.HTTP_422_UNPROCESSABLE_ENTITY)
    return _form_state_response(outcome, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get(
    "",
    response_model=InvoiceListResponse,
    status_code=status.HTTP_200_OK,
    summary="List invoices",
)
async def get_invoices(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> InvoiceListResponse:
    """Return the invoices listing, newest first."""
    cached = view_cache.get(settings.INVOICES_PATH, scope=auth_user.user_id)
    if cached is not None:
        logger.debug("Serving invoices listing from cache")
        return cached

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        invoices = await list_invoices(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch invoices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoices from database"
            }
        )

    listing = InvoiceListResponse(
        invoices=[InvoiceListItem.model_validate(inv) for inv in invoices],
        count=len(invoices),
    )
    view_cache.set(settings.INVOICES_PATH, listing, scope=auth_user.user_id)

    return listing


@router.post(
    "/create",
    summary="Create an invoice from the invoice form",
    responses={
        303: {"description": "Created; redirect to the invoices listing"},
        422: {"model": InvoiceFormState, "description": "Invalid form fields"},
        500: {"model": InvoiceFormState, "description": "Database error"},
    },
)
async def create_invoice_form(
    request: Request,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> Response:
    form_data = await request.form()
    logger.info(f"Create invoice submitted by user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)
    outcome = await create_invoice(supabase_client, None, form_data)

    return _mutation_response(outcome)


@router.post(
    "/{invoice_id}/edit",
    summary="Update an invoice from the edit form",
    responses={
        303: {"description": "Updated; redirect to the invoices listing"},
        422: {"model": InvoiceFormState, "description": "Invalid form fields"},
        500: {"model": InvoiceFormState, "description": "Database error"},
    },
)
async def update_invoice_form(
    invoice_id: str,
    request: Request,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> Response:
    form_data = await request.form()
    logger.info(f"Update of invoice {invoice_id} submitted by user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)
    outcome = await update_invoice(supabase_client, invoice_id, form_data)

    return _mutation_response(outcome)


@router.post(
    "/{invoice_id}/delete",
    response_model=InvoiceFormState,
    summary="Delete an invoice",
    responses={500: {"model": InvoiceFormState, "description": "Database error"}},
)
async def delete_invoice_form(
    invoice_id: str,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> Response:
    logger.info(f"Delete of invoice {invoice_id} requested by user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)
    state = await delete_invoice(supabase_client, invoice_id)

    if isinstance(state, InvoiceDeleted):
        return _form_state_response(state, status.HTTP_200_OK)
    return _form_state_response(state, status.HTTP_500_INTERNAL_SERVER_ERROR)
