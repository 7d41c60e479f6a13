"""
Inventory API: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for each error category.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       HTTP status codes and JSON bodies.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    InventoryError (base)
    ├── ValidationError          → 400 Bad Request
    ├── ConflictError            → 400 Bad Request (duplicate email)
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error

Messages are in Indonesian, matching the API's field names and the clients
that consume it. `context` is logged server-side and only returned to the
client for 400-class errors.
"""

from typing import Any, Dict, Optional


class InventoryError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "Terjadi kesalahan server",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InventoryError):
    """
    Raised when client input fails validation.

    When:    Bad upload type or size, more than one photo, missing photo
             content, a reference the store refuses (FK violation).
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Hanya file gambar yang diperbolehkan (jpeg, jpg, png, gif)",
            "details": {"field": "foto_produk", "extension": ".txt"}
        }
    """

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Data tidak valid",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(InventoryError):
    """
    Raised when a unique value is already taken.

    When:    Registering an email that already exists.
    HTTP:    400 Bad Request (the public contract does not use 409)
    """

    status_code = 400
    error_code = "conflict"

    def __init__(
        self,
        message: str = "Data sudah ada",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(InventoryError):
    """
    Raised when the caller cannot be authenticated.

    When:    Missing or malformed Authorization header, bad or expired token,
             wrong email/password at login.
    HTTP:    401 Unauthorized, with a `WWW-Authenticate: Bearer` header

    Login failures use one message for both unknown email and wrong password
    so the endpoint cannot be used to discover registered accounts.
    """

    status_code = 401
    error_code = "unauthenticated"

    def __init__(
        self,
        message: str = "Token tidak valid",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(InventoryError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE by an identifier that matches no row.
    HTTP:    404 Not Found
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "Data",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} tidak ditemukan"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(InventoryError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, upload directory not writable.
    HTTP:    500 Internal Server Error (paths are logged, never returned)
    """

    def __init__(
        self,
        message: str = "Gagal menyimpan file",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(InventoryError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, store unavailable, unexpected
             constraint failure.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Detailed error
    info (SQL, constraint names) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "Terjadi kesalahan server",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
