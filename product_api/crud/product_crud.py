import uuid

from product_api.models.product import ProductInput, Product
from product_api.store import ProductStore
from product_api.exceptions import ProductNotFoundError, ProductValidationError
from product_api.logging_config import get_child_logger, tracer

# Create a child logger for this module
logger = get_child_logger("crud.product")


def _validated_fields(payload: ProductInput) -> dict:
    """
    Return the product fields of a payload, or raise if any is missing.

    Raises:
        ProductValidationError: If a required field is absent or empty
    """
    missing = payload.missing_fields()
    if missing:
        logger.warning("Rejected product payload", extra={"missing_fields": missing})
        raise ProductValidationError(missing)
    return payload.model_dump(by_alias=True)


def get_product_by_id(store: ProductStore, product_id: str) -> Product:
    """
    Retrieve a product by its ID.

    Args:
        store: Product store to read from
        product_id: ID of the product to retrieve

    Returns:
        The matching product

    Raises:
        ProductNotFoundError: If the product doesn't exist
    """
    with tracer.start_as_current_span("get_product_by_id") as span:
        span.set_attribute("product.id", product_id)

        product = store.get(product_id)
        if product is None:
            logger.warning("Product not found", extra={"product_id": product_id})
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        logger.debug("Product retrieved", extra={"product_id": product_id})
        return product


def create_product(store: ProductStore, payload: ProductInput) -> Product:
    """
    Create a new product and append it to the store.

    Args:
        store: Product store to write to
        payload: Product data; every field is required

    Returns:
        Newly created product with its generated ID

    Raises:
        ProductValidationError: If a required field is missing
    """
    with tracer.start_as_current_span("create_product") as span:
        try:
            data = _validated_fields(payload)
        except ProductValidationError:
            span.set_attribute("error", True)
            span.set_attribute("error.type", "validation_error")
            raise

        data["id"] = str(uuid.uuid4())
        product = store.append(Product.model_validate(data))

        span.set_attribute("product.id", product.id)
        span.set_attribute("product.category", product.category)

        logger.info(
            "Product created",
            extra={
                "product_id": product.id,
                "category": product.category,
                "product_name": product.name,
            },
        )
        return product


def update_product(store: ProductStore, product_id: str, payload: ProductInput) -> Product:
    """
    Replace every field of an existing product except its ID.

    Args:
        store: Product store to write to
        product_id: ID of the product to replace
        payload: New product data; every field is required

    Returns:
        The updated product

    Raises:
        ProductNotFoundError: If the product doesn't exist
        ProductValidationError: If a required field is missing
    """
    with tracer.start_as_current_span("update_product") as span:
        span.set_attribute("product.id", product_id)

        if store.get(product_id) is None:
            span.set_attribute("error", True)
            span.set_attribute("error.type", "not_found")
            logger.warning("Product not found for update", extra={"product_id": product_id})
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        data = _validated_fields(payload)
        data["id"] = product_id

        updated = store.replace(Product.model_validate(data))
        if updated is None:
            # Removed between lookup and replace
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Product updated", extra={"product_id": product_id})
        return updated


def delete_product(store: ProductStore, product_id: str) -> Product:
    """
    Remove a product from the store.

    Returns:
        The removed product

    Raises:
        ProductNotFoundError: If the product doesn't exist
    """
    with tracer.start_as_current_span("delete_product") as span:
        span.set_attribute("product.id", product_id)

        removed = store.remove(product_id)
        if removed is None:
            span.set_attribute("error", True)
            span.set_attribute("error.type", "not_found")
            logger.warning("Product not found for deletion", extra={"product_id": product_id})
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info("Product deleted", extra={"product_id": product_id})
        return removed
