# Services package init
"""
Inventory API: Services Layer
===============================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service is a class with a module-level instance. Per-request
       collaborators (session, TokenService, FileService) are passed in by
       the route, so one instance serves every request.

Service Inventory:
    - AuthService:      register, login, current user
    - TokenService:     issue/verify bearer tokens (JWT)
    - CategoryService:  tbl_kategori CRUD
    - ProductService:   tbl_produk CRUD with photo handling
    - StockService:     tbl_stok CRUD
    - FileService:      photo validation, storage, serving and cleanup
"""
