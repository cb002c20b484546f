from typing import Dict, List, Sequence

from product_api.models.product import CategoryStats, Product, ProductList, ProductQuery
from product_api.logging_config import get_child_logger, tracer

logger = get_child_logger("crud.query")


def filter_products(products: Sequence[Product], query: ProductQuery) -> List[Product]:
    """Apply the category and name-search filters, keeping input order."""
    filtered = list(products)

    if query.category:
        category = query.category.lower()
        filtered = [p for p in filtered if p.category.lower() == category]

    if query.search:
        term = query.search.lower()
        filtered = [p for p in filtered if term in p.name.lower()]

    return filtered


def list_products(products: Sequence[Product], query: ProductQuery) -> ProductList:
    """
    Filter products and return one page of the result.

    Args:
        products: Every product in insertion order
        query: Filter and pagination parameters

    Returns:
        The requested page, with `total` counting the whole filtered set
    """
    with tracer.start_as_current_span("list_products") as span:
        span.set_attribute("page", query.page)
        span.set_attribute("limit", query.limit)
        span.set_attribute("has_category", query.category is not None)
        span.set_attribute("has_search", query.search is not None)

        filtered = filter_products(products, query)

        start = (query.page - 1) * query.limit
        page = filtered[start:start + query.limit]

        span.set_attribute("products.total", len(filtered))
        span.set_attribute("products.count", len(page))

        logger.info(
            f"Listed {len(page)} of {len(filtered)} products",
            extra={
                "category": query.category,
                "search": query.search,
                "page": query.page,
                "limit": query.limit,
            },
        )

        return ProductList(page=query.page, limit=query.limit, total=len(filtered), products=page)


def category_stats(products: Sequence[Product]) -> CategoryStats:
    """
    Count products per lower-cased category over the whole collection.
    """
    with tracer.start_as_current_span("category_stats") as span:
        counts: Dict[str, int] = {}
        for product in products:
            category = product.category.lower()
            counts[category] = counts.get(category, 0) + 1

        span.set_attribute("categories.count", len(counts))

        return CategoryStats(total_categories=len(counts), count_by_category=counts)
