"""
Form actions: the single request/response path behind each dashboard form.

Actions return data (form state, a message, or a navigation outcome) and never
perform the redirect themselves.
"""

from .auth import authenticate
from .invoices import create_invoice, delete_invoice, update_invoice
from .outcomes import Redirect, SignedIn

__all__ = [
    "create_invoice",
    "update_invoice",
    "delete_invoice",
    "authenticate",
    "Redirect",
    "SignedIn",
]
