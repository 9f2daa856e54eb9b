"""
Pydantic schemas for form validation and API responses.

Form input is validated by these models; malformed input is reported as
field errors, never raised to the client.
"""
