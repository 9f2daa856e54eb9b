"""
FastAPI routers.

Routers are thin: read the request, call one action or service, and map the
outcome to an HTTP response.
"""
