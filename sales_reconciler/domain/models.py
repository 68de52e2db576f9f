"""Domain models for the sales reconciliation pipeline.

These dataclasses capture the master catalogs and the values exchanged
between vendor identification, record parsing and aggregation.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .errors import RecordError


@dataclass(frozen=True)
class Product:
    """Catalog product with its unit price."""

    product_id: str
    name: str
    price: Decimal


@dataclass(frozen=True)
class VendorKey:
    """Join key between sales aggregation and the vendor catalog."""

    doc_type: str
    doc_number: str

    def __str__(self) -> str:
        return f"{self.doc_type};{self.doc_number}"


@dataclass(frozen=True)
class Vendor:
    """Catalog vendor identified by document type and number."""

    doc_type: str
    doc_number: str
    first_names: str
    last_names: str

    @property
    def key(self) -> VendorKey:
        return VendorKey(self.doc_type, self.doc_number)


class IdentificationRule(str, Enum):
    HEADER = "header"
    FILENAME_VENDOR = "filename_vendor"
    FILENAME_DIGITS = "filename_digits"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class VendorIdentification:
    """Outcome of resolving which vendor a sales file belongs to."""

    key: VendorKey
    rule: IdentificationRule
    header_consumed: bool = False
    diagnostic: RecordError | None = None

    @property
    def identified(self) -> bool:
        return self.rule is not IdentificationRule.UNKNOWN


@dataclass(frozen=True)
class SalesRecord:
    """A validated sales line routed to a vendor."""

    vendor_key: VendorKey
    product_id: str
    quantity: int
