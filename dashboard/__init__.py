"""
Invoice dashboard backend.

Server-side form actions (create/update/delete invoices, credential sign-in)
exposed through FastAPI and persisted in Supabase.
"""

__version__ = "0.1.0"
