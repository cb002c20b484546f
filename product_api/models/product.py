from pydantic import BaseModel, Field, ConfigDict, StrictBool, StrictFloat, StrictInt, StrictStr
from typing import Optional, List, Dict, Union


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class ProductInput(BaseModel):
    """
    Fields a client provides to create or replace a product.

    Every field is optional at parse time; presence is checked by the store
    so that a missing field is reported as a single 400 error. Values are
    never coerced: a field of the wrong JSON type fails validation.
    """

    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    price: Optional[Union[StrictInt, StrictFloat]] = None
    category: Optional[StrictStr] = None
    in_stock: Optional[StrictBool] = Field(default=None, alias="inStock")

    model_config = ConfigDict(extra="ignore")

    def missing_fields(self) -> List[str]:
        """Names (wire spelling) of required fields that are absent or empty."""
        missing = []
        for name in ("name", "description", "category"):
            if not getattr(self, name):
                missing.append(name)
        # 0 and False are legitimate values here
        if self.price is None:
            missing.append("price")
        if self.in_stock is None:
            missing.append("inStock")
        return missing


class Product(BaseModel):
    """
    A stored product, as returned to clients.
    """

    id: str  # Generated by the store, immutable
    name: str
    description: str
    price: Union[int, float]
    category: str  # Compared case-insensitively
    in_stock: bool = Field(alias="inStock")

    model_config = ConfigDict(populate_by_name=True)


class ProductQuery(BaseModel):
    """
    Filter and pagination parameters for product listing.
    """

    category: Optional[str] = None
    search: Optional[str] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(
        cls,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "ProductQuery":
        """
        Build a query from raw query-string values.

        Non-integer page/limit fall back to the defaults, values below 1 are
        raised to 1, and empty filter strings count as absent.
        """
        return cls(
            category=category or None,
            search=search or None,
            page=_coerce_positive(page, DEFAULT_PAGE),
            limit=_coerce_positive(limit, DEFAULT_LIMIT),
        )


def _coerce_positive(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(number, 1)


class ProductList(BaseModel):
    """
    Response model for product listing.

    `total` is the size of the filtered set before pagination.
    """

    page: int
    limit: int
    total: int
    products: List[Product]


class CategoryStats(BaseModel):
    """
    Product counts grouped by lower-cased category.
    """

    total_categories: int = Field(alias="totalCategories")
    count_by_category: Dict[str, int] = Field(alias="countByCategory")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
