from typing import Optional
from fastapi import APIRouter, Body, HTTPException, Path, Query, Request, status, Depends
from product_api.models.product import (
    CategoryStats,
    ErrorResponse,
    Product,
    ProductInput,
    ProductList,
    ProductQuery,
)
from product_api.crud.product_crud import (
    get_product_by_id,
    create_product,
    delete_product,
    update_product
)
from product_api.crud.product_query import list_products, category_stats
from product_api.store import ProductStore

from product_api.exceptions import ProductNotFoundError, ProductValidationError

from product_api.logging_config import tracer, get_child_logger

# Create a child logger for this module
logger = get_child_logger("routes.product")

NOT_FOUND_MESSAGE = "Product not found"
VALIDATION_MESSAGE = "All fields are required"
INTERNAL_ERROR_MESSAGE = "Something went wrong!"

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)


def get_product_store(request: Request) -> ProductStore:
    return request.app.state.store


def _internal_error(action: str, exc: Exception) -> HTTPException:
    logger.error(f"Unexpected error during {action}: {exc}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_MESSAGE,
    )


@router.get("", response_model=ProductList)
async def get_products(
    category: Optional[str] = Query(None, title="Case-insensitive category to filter by"),
    search: Optional[str] = Query(None, title="Case-insensitive substring of the product name"),
    page: Optional[str] = Query(None, title="1-based page number"),
    limit: Optional[str] = Query(None, title="Maximum number of items per page"),
    store: ProductStore = Depends(get_product_store),
):
    with tracer.start_as_current_span("api_get_products") as span:
        try:
            query = ProductQuery.from_params(category=category, search=search, page=page, limit=limit)
            return list_products(store.all(), query)
        except Exception as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)
            raise _internal_error("product listing", e)


# Registered ahead of "/{product_id}" so "stats" is never taken for an ID
@router.get("/stats", response_model=CategoryStats)
async def get_product_stats(store: ProductStore = Depends(get_product_store)):
    try:
        return category_stats(store.all())
    except Exception as e:
        raise _internal_error("category stats", e)


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str = Path(..., title="The ID of the product to retrieve"),
    store: ProductStore = Depends(get_product_store),
):
    try:
        return get_product_by_id(store, product_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    except Exception as e:
        raise _internal_error(f"retrieval of product {product_id}", e)


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def add_new_product(
    payload: Optional[ProductInput] = Body(None, description="Product information to create"),
    store: ProductStore = Depends(get_product_store),
):
    try:
        return create_product(store, payload or ProductInput())
    except ProductValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=VALIDATION_MESSAGE)
    except Exception as e:
        raise _internal_error("product creation", e)


@router.put(
    "/{product_id}",
    response_model=Product,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def replace_existing_product(
    payload: Optional[ProductInput] = Body(None, description="Complete replacement product data"),
    product_id: str = Path(..., title="The ID of the product to update"),
    store: ProductStore = Depends(get_product_store),
):
    try:
        return update_product(store, product_id, payload or ProductInput())
    except ProductNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    except ProductValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=VALIDATION_MESSAGE)
    except Exception as e:
        raise _internal_error(f"update of product {product_id}", e)


@router.delete(
    "/{product_id}",
    response_model=Product,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def delete_existing_product(
    product_id: str = Path(..., title="The ID of the product to delete"),
    store: ProductStore = Depends(get_product_store),
):
    try:
        return delete_product(store, product_id)
    except ProductNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    except Exception as e:
        raise _internal_error(f"deletion of product {product_id}", e)
