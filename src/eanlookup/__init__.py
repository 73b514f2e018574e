"""eanlookup: EAN-Search barcode and product lookup client."""

from eanlookup.services.ean_search import DecodeError, LookupClient

__version__ = "0.1.0"

__all__ = ["DecodeError", "LookupClient", "__version__"]
