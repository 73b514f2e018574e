"""Client for the EAN-Search barcode and product lookup API.

Every operation builds a query string on top of the shared base URL, fetches
it (retrying on rate limiting) and decodes the JSON body into either a scalar,
a single record or a list of records.  Records are kept as plain dicts since
the field set varies per operation.
"""

import json
import logging
import time
from typing import Any
from urllib.parse import quote_plus

import httpx

logger = logging.getLogger(__name__)

API_URL = "https://api.ean-search.org/api"
DEFAULT_TIMEOUT = 180
MAX_API_TRIES = 3
RATE_LIMIT_DELAY = 1.0

Record = dict[str, Any]


class DecodeError(ValueError):
    """The API answered with something that is not the expected JSON shape."""


class LookupClient:
    """Synchronous EAN-Search client bound to one API token."""

    def __init__(self, token: str, *, transport: httpx.BaseTransport | None = None) -> None:
        self._api_url = f"{API_URL}?token={token}&format=json"
        self._transport = transport
        self.timeout: float = DEFAULT_TIMEOUT

    def set_timeout(self, seconds: float) -> None:
        """Set the timeout (in seconds) used for subsequent requests."""
        self.timeout = seconds

    # ------------------------------------------------------------------
    # Barcode lookups
    # ------------------------------------------------------------------

    def name_by_barcode(self, barcode: str, language: int = 1) -> str | None:
        """Return the product name for an EAN/GTIN, or ``None`` if unknown."""
        record = self._first_record(f"&op=barcode-lookup&ean={barcode}&language={language}")
        return _field(record, "name")

    def title_by_isbn(self, isbn: str) -> str | None:
        """Return the book title for an ISBN, or ``None`` if unknown."""
        record = self._first_record(f"&op=barcode-lookup&isbn={isbn}")
        return _field(record, "name")

    def record_by_ean(self, barcode: str, language: int = 1) -> Record | None:
        """Return the full product record for an EAN/GTIN.

        The record typically carries ``ean``, ``name``, ``categoryId``,
        ``categoryName`` and ``issuingCountry`` but no key is guaranteed.
        """
        return self._first_record(f"&op=barcode-lookup&ean={barcode}&language={language}")

    def record_by_upc(self, barcode: str, language: int = 1) -> Record | None:
        """Return the full product record for a 12-digit UPC code."""
        # UPC codes go through the ean parameter as well
        return self._first_record(f"&op=barcode-lookup&ean={barcode}&language={language}")

    def verify_checksum(self, barcode: str) -> bool | None:
        """Ask the API whether the check digit of *barcode* is correct."""
        record = self._first_record(f"&op=verify-checksum&ean={barcode}")
        if record is None or record.get("valid") is None:
            return None
        return _parse_bool(record["valid"])

    def issuing_country(self, barcode: str) -> str | None:
        """Return the country code that issued the barcode prefix."""
        record = self._first_record(f"&op=issuing-country&ean={barcode}")
        return _field(record, "issuingCountry")

    def barcode_image(self, barcode: str) -> str | None:
        """Return a base64 encoded PNG rendering of the barcode."""
        record = self._first_record(f"&op=barcode-image&ean={barcode}")
        return _field(record, "barcode")

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def product_search(self, name: str, page: int = 0, language: int = 1) -> list[Record] | None:
        """Search products by (part of) their name."""
        return self._product_list(f"&op=product-search&name={quote_plus(name)}&page={page}&language={language}")

    def similar_product_search(self, name: str, page: int = 0, language: int = 1) -> list[Record] | None:
        """Search products with a name similar to *name*."""
        return self._product_list(
            f"&op=similar-product-search&name={quote_plus(name)}&page={page}&language={language}"
        )

    def category_search(
        self, category: int | str, name: str = "", page: int = 0, language: int = 1
    ) -> list[Record] | None:
        """Search products within a category, optionally filtered by name."""
        return self._product_list(
            f"&op=category-search&category={category}&name={quote_plus(name)}&page={page}&language={language}"
        )

    def barcode_prefix_search(self, prefix: int | str, page: int = 0, language: int = 1) -> list[Record] | None:
        """List products whose barcode starts with *prefix*."""
        return self._product_list(f"&op=barcode-prefix-search&prefix={prefix}&page={page}&language={language}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _first_record(self, query: str) -> Record | None:
        """Fetch an array response and return its first record.

        Returns ``None`` for an empty array or when the record carries the
        API's in-band ``error`` key.
        """
        data = _decode(self._fetch(self._api_url + query))
        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")
        if not data:
            return None
        record = data[0]
        if not isinstance(record, dict):
            raise DecodeError(f"Expected a JSON object in array, got {type(record).__name__}")
        if "error" in record:
            logger.debug("API reported error: %s", record["error"])
            return None
        return record

    def _product_list(self, query: str) -> list[Record] | None:
        """Fetch an object response and return its ``productlist`` field."""
        data = _decode(self._fetch(self._api_url + query))
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        products = data.get("productlist")
        if products is None:
            return None
        if not isinstance(products, list):
            raise DecodeError(f"Expected productlist to be an array, got {type(products).__name__}")
        return products

    def _fetch(self, url: str) -> str:
        """GET *url* and return the body, retrying on HTTP 429.

        At most ``MAX_API_TRIES`` attempts are made with a fixed delay in
        between.  Any other HTTP error status, or a 429 on the last attempt,
        raises :class:`httpx.HTTPStatusError`; transport errors propagate
        unchanged.
        """
        for attempt in range(1, MAX_API_TRIES + 1):
            logger.debug("GET %s (attempt %d)", _redact(url), attempt)
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(url)
            if response.status_code != 429 or attempt == MAX_API_TRIES:
                break
            logger.warning(
                "Rate limited by EAN-Search (attempt %d/%d), retrying in %.0fs",
                attempt,
                MAX_API_TRIES,
                RATE_LIMIT_DELAY,
            )
            time.sleep(RATE_LIMIT_DELAY)
        response.raise_for_status()
        return response.text


def _decode(contents: str) -> Any:
    try:
        return json.loads(contents)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Response is not valid JSON: {e}") from e


def _field(record: Record | None, key: str) -> str | None:
    if record is None or record.get(key) is None:
        return None
    return str(record[key])


def _parse_bool(value: Any) -> bool:
    """Interpret the API's ``valid`` flag, sent either as bool or as string."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise DecodeError(f"Unrecognised boolean value: {value!r}")


def _redact(url: str) -> str:
    """Hide the token when logging request URLs."""
    head, sep, rest = url.partition("token=")
    if not sep:
        return url
    _, amp, tail = rest.partition("&")
    return f"{head}token=***{amp}{tail}"
