# =========================================================
# SHOP ERRORS
#
# Raised by the services, rendered by the handlers in main.py
# as {"error": message} with the matching status code.
# =========================================================


class ShopError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ShopError):
    status_code = 400


class InsufficientStockError(ValidationError):
    def __init__(self, product_name: str, available: int):
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}"
        )
        self.product_name = product_name
        self.available = available


class NotFoundError(ShopError):
    status_code = 404


class StoreError(ShopError):
    status_code = 500
