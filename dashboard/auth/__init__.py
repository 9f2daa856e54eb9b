"""
Authentication for the invoice dashboard.

- credentials: email/password sign-in against Supabase Auth
- dependencies: token verification for protected dashboard routes
"""
