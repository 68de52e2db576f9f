import logging
from decimal import Decimal
from pathlib import Path

import pytest

from sales_reconciler.domain.errors import FatalLoadError
from sales_reconciler.domain.models import VendorKey
from sales_reconciler.infrastructure.parsing.catalogs import parse_products, parse_vendors
from sales_reconciler.infrastructure.repositories.csv_repositories import CsvCatalogRepository


def test_products_are_parsed_with_decimal_prices():
    products = parse_products(["P1;Widget;10.00", "  P2 ; Gadget ; 1500.5 ;extra", ""], "productos.csv")

    assert list(products) == ["P1", "P2"]
    assert products["P1"].price == Decimal("10.00")
    assert products["P2"].name == "Gadget"
    assert products["P2"].price == Decimal("1500.5")


def test_malformed_product_lines_are_skipped_with_warning(caplog):
    lines = ["P1;Widget", "P2;Gadget;abc", "P3;Gizmo;-1", "P4;Thing;NaN", "P5;Ok;2"]

    with caplog.at_level(logging.WARNING):
        products = parse_products(lines, "productos.csv")

    assert list(products) == ["P5"]
    messages = [record.getMessage() for record in caplog.records]
    assert "productos.csv: line 1 has an invalid format, skipped" in messages
    assert any("invalid price on line 2" in m for m in messages)
    assert any("negative price on line 3 (product P3)" in m for m in messages)
    assert any("invalid price on line 4" in m for m in messages)


def test_duplicate_product_ids_keep_last_value():
    products = parse_products(["P1;Old;1", "P1;New;2"], "productos.csv")

    assert products["P1"].name == "New"
    assert products["P1"].price == Decimal("2")


def test_vendors_need_four_fields(caplog):
    with caplog.at_level(logging.WARNING):
        vendors = parse_vendors(["CC;1;Ana;Lopez", "CC;2;Solo", "TI;3;Luis;Perez;ignored"], "vendedores.csv")

    assert set(vendors) == {VendorKey("CC", "1"), VendorKey("TI", "3")}
    assert vendors[VendorKey("TI", "3")].last_names == "Perez"
    assert any("vendedores.csv: line 2" in record.getMessage() for record in caplog.records)


def test_duplicate_vendor_keys_overwrite_but_keep_position():
    vendors = parse_vendors(["CC;1;Ana;Lopez", "TI;2;Luis;Perez", "CC;1;Ana Maria;Lopez"], "vendedores.csv")

    assert list(vendors) == [VendorKey("CC", "1"), VendorKey("TI", "2")]
    assert vendors[VendorKey("CC", "1")].first_names == "Ana Maria"


def test_missing_catalog_file_is_fatal(tmp_path: Path):
    (tmp_path / "productos.csv").write_text("P1;Widget;10\n", encoding="utf-8")
    repo = CsvCatalogRepository.from_directory(tmp_path)

    assert "P1" in repo.load_products()
    with pytest.raises(FatalLoadError, match="vendors file not found"):
        repo.load_vendors()


def test_catalogs_can_be_loaded_from_bytes():
    repo = CsvCatalogRepository(b"P1;Widget;10\r\nP2;Gadget;5\r\n", b"CC;1;Ana;Lopez\n")

    assert list(repo.load_products()) == ["P1", "P2"]
    assert list(repo.load_vendors()) == [VendorKey("CC", "1")]


def test_prices_outside_plain_decimal_bounds_are_skipped(caplog):
    lines = ["P1;Big;1e30", "P2;Grouped;1_000", "P3;Arabic;١٢", "P4;Fine;0.00000000000000000001", "P5;Ok;999999999999999.99"]

    with caplog.at_level(logging.WARNING):
        products = parse_products(lines, "productos.csv")

    assert list(products) == ["P4", "P5"]
    messages = [record.getMessage() for record in caplog.records]
    assert any("invalid price on line 1" in m for m in messages)
    assert any("invalid price on line 2" in m for m in messages)
    assert any("invalid price on line 3" in m for m in messages)


def test_price_with_too_many_decimals_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        products = parse_products(["P1;Tiny;0.000000000000000000001", "P2;Padded;1.5000000000000000000000"], "productos.csv")

    assert list(products) == ["P2"]
    assert products["P2"].price == Decimal("1.5")
    assert any("invalid price on line 1" in record.getMessage() for record in caplog.records)
