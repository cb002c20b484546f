from typing import Iterable


class ApplicationError(Exception):
    """Base class for application-specific errors."""
    pass

class ProductNotFoundError(ApplicationError):
    """Raised when a product is not found."""
    pass

class ProductValidationError(ApplicationError):
    """Raised when a create or update payload is missing required fields."""
    def __init__(self, missing_fields: Iterable[str], message="All fields are required"):
        super().__init__(message)
        self.missing_fields = list(missing_fields)
