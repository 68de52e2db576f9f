import json
import logging
from pathlib import Path

import pytest

from sales_reconciler.cli import main
from sales_reconciler.logging_setup import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_cli_writes_reports_and_summary(tmp_path: Path, capsys):
    (tmp_path / "productos.csv").write_text("P1;Widget;10.00\nP2;Gadget;1500.5\n", encoding="utf-8")
    (tmp_path / "vendedores.csv").write_text("CC;1;Ana;Lopez\n", encoding="utf-8")
    (tmp_path / "vendedor_1.csv").write_text("P1;5\nP9;1\n", encoding="utf-8")
    summary_path = tmp_path / "out" / "summary.json"

    code = main(["--directory", str(tmp_path), "--json", str(summary_path)])

    assert code == 0
    assert (tmp_path / "reporte_vendedores.csv").read_text().splitlines()[1] == "50.00;CC;1;Ana;Lopez"
    assert (tmp_path / "reporte_productos.csv").read_text().splitlines()[1:] == ["Widget;10.00;5", "Gadget;1500.50;0"]
    assert (tmp_path / "errores_log.txt").read_text().splitlines() == [
        "product not found (id=P9) in file vendedor_1.csv line: P9;1"
    ]

    payload = json.loads(summary_path.read_text(encoding="utf-8"))
    assert payload["summary"]["valid_records"] == 1
    assert payload["summary"]["diagnostics"] == 1
    assert payload["written"] == ["reporte_vendedores.csv", "reporte_productos.csv", "errores_log.txt"]

    out = capsys.readouterr().out
    assert "Reconciliation Summary" in out
    assert " - reporte_productos.csv" in out


def test_cli_applies_settings_override(tmp_path: Path):
    (tmp_path / "reconciler_settings.json").write_text(json.dumps({"products_file": "items.csv"}), encoding="utf-8")
    (tmp_path / "items.csv").write_text("P1;Widget;2\n", encoding="utf-8")
    (tmp_path / "vendedores.csv").write_text("CC;1;Ana;Lopez\n", encoding="utf-8")
    (tmp_path / "ventas.csv").write_text("CC;1\nP1;2\n", encoding="utf-8")

    assert main(["-d", str(tmp_path)]) == 0
    assert (tmp_path / "reporte_vendedores.csv").read_text().splitlines()[1] == "4.00;CC;1;Ana;Lopez"


def test_cli_missing_catalog_exits_with_error(tmp_path: Path, capsys):
    (tmp_path / "vendedores.csv").write_text("CC;1;Ana;Lopez\n", encoding="utf-8")

    code = main(["-d", str(tmp_path)])

    assert code == 1
    assert "Critical error: products file not found" in capsys.readouterr().err
    assert not (tmp_path / "reporte_vendedores.csv").exists()
    assert not (tmp_path / "reporte_productos.csv").exists()
