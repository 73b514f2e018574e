"""EAN/UPC/ISBN barcode lookup endpoints."""

from typing import Any

from fastapi import APIRouter, HTTPException, Path, Query

from eanlookup.models import (
    BarcodeImageResponse,
    ChecksumResponse,
    CountryResponse,
    NameResponse,
    ProductResponse,
)
from eanlookup.routers.common import call_upstream, get_client

router = APIRouter()

BARCODE_PATTERN = r"^[0-9]+$"
ISBN_PATTERN = r"^[0-9]+[0-9Xx]$"


def _not_found(code: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"No product found for barcode {code}")


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _product_response(code: str, record: dict[str, Any]) -> ProductResponse:
    return ProductResponse(
        ean=_opt_str(record.get("ean")) or code,
        name=_opt_str(record.get("name")),
        categoryId=_opt_str(record.get("categoryId")),
        categoryName=_opt_str(record.get("categoryName")),
        issuingCountry=_opt_str(record.get("issuingCountry")),
        record=record,
    )


@router.get("/ean/{ean}", response_model=ProductResponse)
async def lookup_ean(
    ean: str = Path(..., pattern=BARCODE_PATTERN, description="EAN/GTIN barcode"),
    language: int = Query(1, description="EAN-Search language id"),
) -> ProductResponse:
    """Look up the full product record for an EAN/GTIN."""
    record = await call_upstream(get_client().record_by_ean, ean, language)
    if record is None:
        raise _not_found(ean)
    return _product_response(ean, record)


@router.get("/ean/{ean}/name", response_model=NameResponse)
async def lookup_ean_name(
    ean: str = Path(..., pattern=BARCODE_PATTERN, description="EAN/GTIN barcode"),
    language: int = Query(1, description="EAN-Search language id"),
) -> NameResponse:
    """Look up only the product name for an EAN/GTIN."""
    name = await call_upstream(get_client().name_by_barcode, ean, language)
    if name is None:
        raise _not_found(ean)
    return NameResponse(code=ean, name=name)


@router.get("/ean/{ean}/checksum", response_model=ChecksumResponse)
async def verify_checksum(
    ean: str = Path(..., pattern=BARCODE_PATTERN, description="EAN/GTIN barcode"),
) -> ChecksumResponse:
    """Verify the check digit of a barcode."""
    valid = await call_upstream(get_client().verify_checksum, ean)
    if valid is None:
        raise _not_found(ean)
    return ChecksumResponse(ean=ean, valid=valid)


@router.get("/ean/{ean}/country", response_model=CountryResponse)
async def issuing_country(
    ean: str = Path(..., pattern=BARCODE_PATTERN, description="EAN/GTIN barcode"),
) -> CountryResponse:
    """Return the country that issued the barcode prefix."""
    country = await call_upstream(get_client().issuing_country, ean)
    if country is None:
        raise _not_found(ean)
    return CountryResponse(ean=ean, issuingCountry=country)


@router.get("/ean/{ean}/image", response_model=BarcodeImageResponse)
async def barcode_image(
    ean: str = Path(..., pattern=BARCODE_PATTERN, description="EAN/GTIN barcode"),
) -> BarcodeImageResponse:
    """Return a base64 encoded PNG of the barcode."""
    image = await call_upstream(get_client().barcode_image, ean)
    if image is None:
        raise _not_found(ean)
    return BarcodeImageResponse(ean=ean, barcode=image)


@router.get("/upc/{upc}", response_model=ProductResponse)
async def lookup_upc(
    upc: str = Path(..., pattern=BARCODE_PATTERN, description="12-digit UPC code"),
    language: int = Query(1, description="EAN-Search language id"),
) -> ProductResponse:
    """Look up the full product record for a 12-digit UPC code."""
    record = await call_upstream(get_client().record_by_upc, upc, language)
    if record is None:
        raise _not_found(upc)
    return _product_response(upc, record)


@router.get("/isbn/{isbn}", response_model=NameResponse)
async def lookup_isbn(
    isbn: str = Path(..., pattern=ISBN_PATTERN, description="ISBN-10 or ISBN-13"),
) -> NameResponse:
    """Look up a book title by ISBN."""
    title = await call_upstream(get_client().title_by_isbn, isbn)
    if title is None:
        raise HTTPException(status_code=404, detail=f"No book found for ISBN {isbn}")
    return NameResponse(code=isbn, name=title)
