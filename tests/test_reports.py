from decimal import Decimal, localcontext

from sales_reconciler.domain.models import Product, SalesRecord, Vendor, VendorKey
from sales_reconciler.domain.services import SalesAggregator, rank_vendor_totals
from sales_reconciler.presentation.reports import (
    build_product_report,
    build_vendor_report,
    format_money,
    report_to_dataframe,
)


def make_products() -> dict[str, Product]:
    return {
        "P1": Product("P1", "Widget", Decimal("10.00")),
        "P2": Product("P2", "Gadget", Decimal("1500.5")),
        "P3": Product("P3", "Gizmo", Decimal("0.333")),
    }


def test_format_money_uses_two_decimals_half_even():
    assert format_money(Decimal("1500.5")) == "1500.50"
    assert format_money(Decimal("30")) == "30.00"
    assert format_money(Decimal("0.125")) == "0.12"
    assert format_money(Decimal("0.135")) == "0.14"
    assert format_money(Decimal("1234567.891")) == "1234567.89"


def test_aggregator_sums_price_times_quantity_per_vendor():
    products = make_products()
    aggregator = SalesAggregator(products)
    cc1, ti2 = VendorKey("CC", "1"), VendorKey("TI", "2")

    aggregator.add(SalesRecord(cc1, "P1", 3))
    aggregator.add(SalesRecord(cc1, "P2", 2))
    aggregator.add(SalesRecord(ti2, "P1", 1))

    assert aggregator.totals.vendor_totals == {cc1: Decimal("3031.00"), ti2: Decimal("10.00")}
    assert aggregator.totals.product_quantities == {"P1": 4, "P2": 2, "P3": 0}
    assert aggregator.records == 3


def test_vendor_report_is_ranked_and_falls_back_to_key():
    vendors = {VendorKey("CC", "1"): Vendor("CC", "1", "Ana", "Lopez")}
    totals = {
        VendorKey("UNK", "77"): Decimal("5"),
        VendorKey("CC", "1"): Decimal("30"),
        VendorKey("UNK", "UNKNOWN"): Decimal("5"),
    }

    lines = build_vendor_report(totals, vendors)

    assert lines == [
        "Monto;TipoDocumento;NumeroDocumento;Nombres;Apellidos",
        "30.00;CC;1;Ana;Lopez",
        "5.00;UNK;77;;",
        "5.00;UNK;UNKNOWN;;",
    ]


def test_ties_keep_accumulation_order():
    totals = {VendorKey("B", "2"): Decimal("1"), VendorKey("A", "1"): Decimal("1")}

    assert [key for key, _ in rank_vendor_totals(totals)] == [VendorKey("B", "2"), VendorKey("A", "1")]


def test_product_report_lists_every_product_by_quantity():
    products = make_products()
    quantities = {"P1": 0, "P2": 7, "P3": 2, "PX": 1}

    lines = build_product_report(quantities, products)

    assert lines == [
        "Nombre;Precio;CantidadVendida",
        "Gadget;1500.50;7",
        "Gizmo;0.33;2",
        "UNKNOWN;0.00;1",
        "Widget;10.00;0",
    ]
    counts = [int(line.split(";")[2]) for line in lines[1:]]
    assert counts == sorted(counts, reverse=True)


def test_report_to_dataframe_keeps_text_columns():
    frame = report_to_dataframe(["Nombre;Precio;CantidadVendida", "Widget;10.00;3"])

    assert list(frame.columns) == ["Nombre", "Precio", "CantidadVendida"]
    assert frame.iloc[0]["Precio"] == "10.00"


def test_large_totals_are_exact_before_rounding():
    price = Decimal("0.1234567890123456789")
    products = {"P1": Product("P1", "Fine", price), "P2": Product("P2", "Max", Decimal("999999999999999.99"))}
    aggregator = SalesAggregator(products)
    key = VendorKey("CC", "1")

    aggregator.add(SalesRecord(key, "P1", 2147483647))
    aggregator.add(SalesRecord(key, "P2", 2147483647))

    with localcontext() as ctx:
        ctx.prec = 100
        expected = price * 2147483647 + Decimal("999999999999999.99") * 2147483647
    assert expected == Decimal("2147483647000000243646599.0451416265488629483")
    assert aggregator.totals.vendor_totals[key] == expected
    assert format_money(expected) == "2147483647000000243646599.05"
