# Middleware package init
"""
Inventory API: Middleware Package
===================================

What:  Cross-cutting concerns applied to every request, plus the bearer
       token dependency used by protected routers.

Middleware Chain (order matters):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS answers preflight requests before anything else runs
    2. Request ID: correlation ID for logs, error bodies and the response header
    3. Logging: one access line with status and duration

auth.py is not middleware in the Starlette sense: `require_user` is a
FastAPI dependency attached to the kategori, produk and stok routers.
"""
