"""Pydantic models for eanlookup API responses."""

from typing import Any

from pydantic import BaseModel


class ProductResponse(BaseModel):
    """Full product record from a barcode lookup.

    ``record`` holds every field the upstream API returned, untouched.
    """

    ean: str
    name: str | None = None
    categoryId: str | None = None
    categoryName: str | None = None
    issuingCountry: str | None = None
    record: dict[str, Any] = {}


class NameResponse(BaseModel):
    """Product name (or book title) for a code."""

    code: str
    name: str


class ChecksumResponse(BaseModel):
    """Result of a check digit verification."""

    ean: str
    valid: bool


class CountryResponse(BaseModel):
    """Issuing country of a barcode prefix."""

    ean: str
    issuingCountry: str


class BarcodeImageResponse(BaseModel):
    """Barcode rendering as returned by the upstream API."""

    ean: str
    #: Base64 encoded PNG.
    barcode: str


class ProductListResponse(BaseModel):
    """One page of search results."""

    page: int
    products: list[dict[str, Any]] = []


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    configured: bool
