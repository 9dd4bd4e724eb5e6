"""
Domain-specific errors for the shops bounded context.

Exceptions here describe faults that escape the normal result flow,
mostly infrastructure failures surfaced through the repository port.
They are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class ShopDomainError(Exception):
    """Base error for all shops domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ShopPersistenceError(ShopDomainError):
    """Raised by repository adapters when the shop store cannot be used."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class DuplicateShopUrlError(ShopDomainError):
    """Raised when a shop URL is already taken by another shop."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Shop URL already in use: {url}")
        self.url = url
