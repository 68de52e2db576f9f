"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .models import Product, Vendor, VendorKey


class CatalogRepository(Protocol):
    """Provides the master catalogs; raises FatalLoadError when a source is missing."""

    def load_products(self) -> Mapping[str, Product]:
        ...

    def load_vendors(self) -> Mapping[VendorKey, Vendor]:
        ...


class SalesFileRepository(Protocol):
    """Discovers sales files and reads their raw lines."""

    def list_sales_files(self) -> Sequence[str]:
        ...

    def read_lines(self, name: str) -> Sequence[str]:
        """Raise OSError or UnicodeDecodeError on a failed read."""
        ...


class LineSink(Protocol):
    """Destination for plain delimited text; each write replaces prior content."""

    def write_lines(self, name: str, lines: Sequence[str]) -> None:
        ...
