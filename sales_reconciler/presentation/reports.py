"""Report builders for the vendor and product rankings."""
from __future__ import annotations

import io
from decimal import Decimal, localcontext
from typing import Mapping, Sequence

import pandas as pd

from sales_reconciler.config import MONEY_CONTEXT, MONEY_QUANTUM, MONEY_ROUNDING
from sales_reconciler.domain.models import Product, Vendor, VendorKey
from sales_reconciler.domain.services import rank_product_quantities, rank_vendor_totals

VENDOR_REPORT_HEADER = ("Monto", "TipoDocumento", "NumeroDocumento", "Nombres", "Apellidos")
PRODUCT_REPORT_HEADER = ("Nombre", "Precio", "CantidadVendida")
UNKNOWN_PRODUCT_NAME = "UNKNOWN"


def format_money(value: Decimal) -> str:
    """Two decimals, no grouping, half-even rounding."""
    with localcontext(MONEY_CONTEXT):
        return f"{value.quantize(MONEY_QUANTUM, rounding=MONEY_ROUNDING):f}"


def build_vendor_report(
    vendor_totals: Mapping[VendorKey, Decimal],
    vendors: Mapping[VendorKey, Vendor],
    separator: str = ";",
) -> list[str]:
    lines = [separator.join(VENDOR_REPORT_HEADER)]
    for key, total in rank_vendor_totals(vendor_totals):
        vendor = vendors.get(key)
        if vendor is not None:
            row = (vendor.doc_type, vendor.doc_number, vendor.first_names, vendor.last_names)
        else:
            row = (key.doc_type, key.doc_number, "", "")
        lines.append(separator.join((format_money(total),) + row))
    return lines


def build_product_report(
    product_quantities: Mapping[str, int],
    products: Mapping[str, Product],
    separator: str = ";",
) -> list[str]:
    lines = [separator.join(PRODUCT_REPORT_HEADER)]
    for product_id, quantity in rank_product_quantities(product_quantities):
        product = products.get(product_id)
        if product is None:
            row = (UNKNOWN_PRODUCT_NAME, format_money(Decimal("0")), str(quantity))
        else:
            row = (product.name, format_money(product.price), str(quantity))
        lines.append(separator.join(row))
    return lines


def report_to_dataframe(lines: Sequence[str], separator: str = ";") -> pd.DataFrame:
    if not lines:
        return pd.DataFrame()
    header = lines[0].split(separator)
    rows = [line.split(separator) for line in lines[1:]]
    return pd.DataFrame(rows, columns=header, dtype=str)


def render_excel(reports: Mapping[str, Sequence[str]], separator: str = ";") -> bytes:
    """One worksheet per report, named after the output file stem."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for name, lines in reports.items():
            sheet = name.rsplit(".", 1)[0][:31] or "report"
            report_to_dataframe(lines, separator).to_excel(writer, sheet_name=sheet, index=False)
    return buffer.getvalue()
