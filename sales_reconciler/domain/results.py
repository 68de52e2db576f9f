"""Domain-level results for sales reconciliation."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Sequence

from .errors import RecordError
from .models import Product, Vendor, VendorKey


@dataclass
class SalesTotals:
    """Running per-vendor amounts and per-product unit counts."""

    vendor_totals: dict[VendorKey, Decimal] = field(default_factory=dict)
    product_quantities: dict[str, int] = field(default_factory=dict)

    @classmethod
    def seeded(cls, products: Mapping[str, Product]) -> SalesTotals:
        # catalog order, so unsold products still get a report row
        return cls(product_quantities={product_id: 0 for product_id in products})


@dataclass(frozen=True)
class ReconciliationSummary:
    products_loaded: int
    vendors_loaded: int
    sales_files: int
    valid_records: int
    diagnostics: int
    unidentified_files: int


@dataclass(frozen=True)
class ReconciliationResult:
    summary: ReconciliationSummary
    totals: SalesTotals
    products: Mapping[str, Product]
    vendors: Mapping[VendorKey, Vendor]
    errors: Sequence[RecordError] = field(default_factory=tuple)

    def has_errors(self) -> bool:
        return bool(self.errors)
