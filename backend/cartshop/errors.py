"""
Domain errors raised by the services.

Every error carries the HTTP status it maps to; the routers turn them into
``HTTPException`` and the app renders ``{"error": message}``.
"""


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShopError):
    status_code = 400


class AuthError(ShopError):
    status_code = 401


class ForbiddenError(ShopError):
    status_code = 403


class NotFoundError(ShopError):
    status_code = 404


class ConflictError(ShopError):
    # re-ordering or ordering an empty cart is reported as a bad request
    status_code = 400


class InternalError(ShopError):
    status_code = 500
