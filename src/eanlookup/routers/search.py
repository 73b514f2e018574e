"""Product search endpoints.

Searches never answer 404: an upstream response without a product list is
reported as an empty page.
"""

from fastapi import APIRouter, Path, Query

from eanlookup.models import ProductListResponse
from eanlookup.routers.common import call_upstream, get_client
from eanlookup.routers.ean import BARCODE_PATTERN

router = APIRouter()


@router.get("", response_model=ProductListResponse)
async def product_search(
    name: str = Query(..., description="Text contained in the product name"),
    page: int = Query(0, ge=0, description="Result page, starting at 0"),
    language: int = Query(1, description="EAN-Search language id"),
) -> ProductListResponse:
    """Search products by name."""
    products = await call_upstream(get_client().product_search, name, page, language)
    return ProductListResponse(page=page, products=products or [])


@router.get("/similar", response_model=ProductListResponse)
async def similar_product_search(
    name: str = Query(..., description="Product name to find similar products for"),
    page: int = Query(0, ge=0, description="Result page, starting at 0"),
    language: int = Query(1, description="EAN-Search language id"),
) -> ProductListResponse:
    """Search products with a similar name."""
    products = await call_upstream(get_client().similar_product_search, name, page, language)
    return ProductListResponse(page=page, products=products or [])


@router.get("/category/{category}", response_model=ProductListResponse)
async def category_search(
    category: int,
    name: str = Query("", description="Optional name filter"),
    page: int = Query(0, ge=0, description="Result page, starting at 0"),
    language: int = Query(1, description="EAN-Search language id"),
) -> ProductListResponse:
    """List products in a category."""
    products = await call_upstream(get_client().category_search, category, name, page, language)
    return ProductListResponse(page=page, products=products or [])


@router.get("/prefix/{prefix}", response_model=ProductListResponse)
async def barcode_prefix_search(
    prefix: str = Path(..., pattern=BARCODE_PATTERN, description="Leading digits of the barcode"),
    page: int = Query(0, ge=0, description="Result page, starting at 0"),
    language: int = Query(1, description="EAN-Search language id"),
) -> ProductListResponse:
    """List products whose barcode starts with a prefix."""
    products = await call_upstream(get_client().barcode_prefix_search, prefix, page, language)
    return ProductListResponse(page=page, products=products or [])
