"""Master catalog parsers producing Product and Vendor lookup tables."""
from __future__ import annotations

import logging
from typing import Iterable

from sales_reconciler.domain.models import Product, Vendor, VendorKey
from sales_reconciler.infrastructure.parsing.utils import parse_price, split_fields

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = 3
VENDOR_FIELDS = 4


def parse_products(lines: Iterable[str], source_name: str, separator: str = ";") -> dict[str, Product]:
    """Build the product table; malformed lines are skipped with a warning.

    Later duplicates of an id replace earlier ones.
    """
    products: dict[str, Product] = {}
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        parts = split_fields(line, separator)
        if len(parts) < PRODUCT_FIELDS:
            logger.warning("%s: line %d has an invalid format, skipped", source_name, line_no)
            continue
        product_id = parts[0].strip()
        name = parts[1].strip()
        price_raw = parts[2].strip()
        try:
            price = parse_price(price_raw)
        except ValueError:
            logger.warning("%s: invalid price on line %d -> %s", source_name, line_no, price_raw)
            continue
        if price < 0:
            logger.warning(
                "%s: negative price on line %d (product %s), skipped", source_name, line_no, product_id
            )
            continue
        products[product_id] = Product(product_id=product_id, name=name, price=price)
    return products


def parse_vendors(lines: Iterable[str], source_name: str, separator: str = ";") -> dict[VendorKey, Vendor]:
    vendors: dict[VendorKey, Vendor] = {}
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        parts = split_fields(line, separator)
        if len(parts) < VENDOR_FIELDS:
            logger.warning("%s: line %d has an invalid format, skipped", source_name, line_no)
            continue
        vendor = Vendor(
            doc_type=parts[0].strip(),
            doc_number=parts[1].strip(),
            first_names=parts[2].strip(),
            last_names=parts[3].strip(),
        )
        vendors[vendor.key] = vendor
    return vendors
