"""
Pydantic schemas for the invoice form actions.

InvoiceForm is the declarative validator for a submitted invoice form. It is
built once at import time and shared by the create and update actions.
"""

from decimal import Decimal
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

InvoiceStatus = Literal["pending", "paid"]

# One message per field, keyed by the form's input names
FIELD_ERROR_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than $0.",
    "status": "Please select an invoice status.",
}

FORM_FIELDS = ("customerId", "amount", "status")

# Up to 9,999,999,999.99 dollars
AMOUNT_MAX_DIGITS = 12


# --- Form models ---

class InvoiceForm(BaseModel):
    """
    Validated invoice form input (the mutable fields of an invoice).

    - customerId must be a non-empty string (the FK is enforced by the database)
    - amount is coerced from text to Decimal dollars, must be > 0 and carry at
      most two decimal places, so every accepted amount is a whole number of cents
    - status must be one of "pending" | "paid"
    """
    customer_id: StrictStr = Field(..., alias="customerId", min_length=1)
    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=AMOUNT_MAX_DIGITS,
        decimal_places=2,
        description="Amount in dollars",
    )
    status: InvoiceStatus

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    @property
    def amount_in_cents(self) -> int:
        """Amount as an integer count of cents."""
        return int(self.amount * 100)


class InvoiceFormValidation(BaseModel):
    """
    Outcome of validating a raw invoice form.

    Exactly one of data / errors is meaningful, selected by success.
    """
    success: bool
    data: Optional[InvoiceForm] = None
    errors: Dict[str, List[str]] = Field(default_factory=dict)


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else ""
        if field == "customer_id":
            field = "customerId"
        message = FIELD_ERROR_MESSAGES.get(field, error.get("msg", "Invalid value."))
        messages = errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return errors


def validate_invoice_form(form_data: Mapping[str, Any]) -> InvoiceFormValidation:
    """
    Validate raw form input without raising.

    Args:
        form_data: Any mapping with .get() (starlette FormData, dict, ...).
                   Only customerId, amount and status are read.

    Returns:
        InvoiceFormValidation with either the typed form or field errors.
    """
    raw = {name: form_data.get(name) for name in FORM_FIELDS}
    try:
        form = InvoiceForm.model_validate(raw)
    except ValidationError as exc:
        return InvoiceFormValidation(success=False, errors=_field_errors(exc))
    return InvoiceFormValidation(success=True, data=form)


# --- Action state models ---

class InvoiceFormState(BaseModel):
    """
    State returned to the invoice form after a failed (or confirmed) action.

    errors: field name -> messages, present only for validation failures
    message: summary shown above the form
    """
    errors: Optional[Dict[str, List[str]]] = Field(
        None,
        description="Field-scoped validation messages",
        examples=[{"amount": ["Please enter an amount greater than $0."]}]
    )
    message: Optional[str] = Field(
        None,
        examples=["Missing Fields. Failed to Create Invoice."]
    )


class InvoiceDeleted(InvoiceFormState):
    """Confirmation that a delete went through; message only."""


# --- Listing models ---

class InvoiceListItem(BaseModel):
    """A single row of the invoices listing."""
    id: str = Field(..., description="Invoice UUID")
    customer_id: str = Field(..., description="Customer UUID")
    amount: int = Field(..., description="Amount in cents")
    status: InvoiceStatus
    date: str = Field(..., description="ISO calendar date the invoice was created")


class InvoiceListResponse(BaseModel):
    """Response for GET /dashboard/invoices."""
    invoices: List[InvoiceListItem] = Field(..., description="Invoices, newest first")
    count: int = Field(..., description="Number of invoices returned")
