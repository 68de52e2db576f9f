"""Sales file parsing: vendor identification and permissive record parsing."""
from __future__ import annotations

import re
from typing import Iterator, Mapping, Sequence

from sales_reconciler.config import DEFAULT_SETTINGS, Settings
from sales_reconciler.domain.errors import ErrorKind, RecordError
from sales_reconciler.domain.models import (
    IdentificationRule,
    Product,
    SalesRecord,
    Vendor,
    VendorIdentification,
    VendorKey,
)
from sales_reconciler.domain.services import find_vendor_by_number
from sales_reconciler.infrastructure.parsing.utils import parse_quantity, split_fields

VENDOR_FILENAME_PATTERN = re.compile(r"vendedor[_-]?([0-9]+)", re.IGNORECASE)
DIGITS_PATTERN = re.compile(r"([0-9]+)")


class VendorIdentifier:
    """Maps a sales file to a vendor key from its first line or its name.

    Rules, first match wins:

    1. the first line holds ``docType;docNumber`` (and is consumed as a header);
    2. the file name contains ``vendedor`` optionally followed by ``_``/``-``
       and digits;
    3. the file name contains any run of digits;
    4. otherwise the unknown sentinel key, with a diagnostic.

    Rules 2 and 3 borrow the document type of the first catalog vendor with the
    same number, or fall back to the unknown type.
    """

    def __init__(
        self,
        vendors: Mapping[VendorKey, Vendor],
        products: Mapping[str, Product],
        settings: Settings = DEFAULT_SETTINGS,
    ) -> None:
        self._vendors = vendors
        self._products = products
        self._settings = settings

    def identify(self, file_name: str, lines: Sequence[str]) -> VendorIdentification:
        if lines:
            header = self._header_key(lines[0])
            if header is not None:
                return VendorIdentification(key=header, rule=IdentificationRule.HEADER, header_consumed=True)

        match = VENDOR_FILENAME_PATTERN.search(file_name)
        if match:
            return self._from_number(match.group(1), IdentificationRule.FILENAME_VENDOR)

        match = DIGITS_PATTERN.search(file_name)
        if match:
            return self._from_number(match.group(1), IdentificationRule.FILENAME_DIGITS)

        return VendorIdentification(
            key=VendorKey(self._settings.unknown_doc_type, self._settings.unknown_doc_number),
            rule=IdentificationRule.UNKNOWN,
            diagnostic=RecordError.vendor_not_identified(file_name),
        )

    def _header_key(self, line: str) -> VendorKey | None:
        parts = split_fields(line, self._settings.field_separator)
        if len(parts) < 2:
            return None
        doc_type, doc_number = parts[0].strip(), parts[1].strip()
        if not doc_type or not doc_number:
            return None
        key = VendorKey(doc_type, doc_number)
        # a line that reads as a sale of a known product is data, not a header
        if key not in self._vendors and doc_type in self._products:
            return None
        return key

    def _from_number(self, doc_number: str, rule: IdentificationRule) -> VendorIdentification:
        vendor = find_vendor_by_number(self._vendors, doc_number)
        doc_type = vendor.doc_type if vendor is not None else self._settings.unknown_doc_type
        return VendorIdentification(key=VendorKey(doc_type, doc_number), rule=rule)


class SalesRecordParser:
    """Validates ``productId;quantity`` lines one at a time."""

    def __init__(self, products: Mapping[str, Product], settings: Settings = DEFAULT_SETTINGS) -> None:
        self._products = products
        self._separator = settings.field_separator

    def parse_line(self, file_name: str, vendor_key: VendorKey, line: str) -> SalesRecord | RecordError:
        parts = split_fields(line, self._separator)
        if len(parts) < 2:
            return RecordError.for_line(ErrorKind.INVALID_FORMAT, file_name, line)
        product_id = parts[0].strip()
        quantity_raw = parts[1].strip()
        if not product_id or not quantity_raw:
            return RecordError.for_line(ErrorKind.EMPTY_FIELD, file_name, line)
        try:
            quantity = parse_quantity(quantity_raw)
        except ValueError:
            return RecordError.for_line(ErrorKind.INVALID_QUANTITY, file_name, line)
        if quantity < 0:
            return RecordError.for_line(ErrorKind.NEGATIVE_QUANTITY, file_name, line)
        if product_id not in self._products:
            return RecordError.for_line(ErrorKind.PRODUCT_NOT_FOUND, file_name, line, product_id=product_id)
        return SalesRecord(vendor_key=vendor_key, product_id=product_id, quantity=quantity)

    def parse(
        self, file_name: str, vendor_key: VendorKey, lines: Sequence[str]
    ) -> Iterator[SalesRecord | RecordError]:
        for line in lines:
            yield self.parse_line(file_name, vendor_key, line)
