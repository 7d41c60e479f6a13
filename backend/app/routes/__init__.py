# Routes package init
"""
Inventory API: Routes Package
===============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:    GET  /, GET /health
    - auth.py:      POST /api/auth/register, /login, /logout; GET /api/auth/me
    - kategori.py:  GET/POST /api/kategori, GET/PUT/DELETE /api/kategori/{id}
    - produk.py:    GET/POST /api/produk, GET/PUT/DELETE /api/produk/{id}
    - stok.py:      GET/POST /api/stok, GET/PUT/DELETE /api/stok/{id}
    - files.py:     GET  /uploads/{filename}

Routes stay thin: extract data from the request, call a service, return the
response model. Business rules live in app/services.
"""
