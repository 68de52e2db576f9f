"""Domain services implementing aggregation and ranking rules."""
from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Mapping

from sales_reconciler.config import MONEY_CONTEXT

from .models import Product, SalesRecord, Vendor, VendorKey
from .results import SalesTotals


def find_vendor_by_number(vendors: Mapping[VendorKey, Vendor], doc_number: str) -> Vendor | None:
    """First vendor in catalog order whose document number matches, whatever its type."""
    for key, vendor in vendors.items():
        if key.doc_number == doc_number:
            return vendor
    return None


class SalesAggregator:
    """Folds validated sales records into running totals."""

    def __init__(self, products: Mapping[str, Product]) -> None:
        self._products = products
        self.totals = SalesTotals.seeded(products)
        self.records = 0

    def add(self, record: SalesRecord) -> None:
        price = self._products[record.product_id].price
        vendor_totals = self.totals.vendor_totals
        with localcontext(MONEY_CONTEXT):
            vendor_totals[record.vendor_key] = vendor_totals.get(record.vendor_key, Decimal("0")) + price * record.quantity
        quantities = self.totals.product_quantities
        quantities[record.product_id] = quantities.get(record.product_id, 0) + record.quantity
        self.records += 1


def rank_vendor_totals(vendor_totals: Mapping[VendorKey, Decimal]) -> list[tuple[VendorKey, Decimal]]:
    """Highest amount first; ties keep accumulation order."""
    return sorted(vendor_totals.items(), key=lambda item: item[1], reverse=True)


def rank_product_quantities(product_quantities: Mapping[str, int]) -> list[tuple[str, int]]:
    return sorted(product_quantities.items(), key=lambda item: item[1], reverse=True)
