"""Central configuration for the sales reconciler package."""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import ROUND_HALF_EVEN, Context, Decimal
from pathlib import Path
from typing import Any

from sales_reconciler.infrastructure.storage.settings_store import (
    DEFAULT_FILE_NAME,
    load_overrides,
    save_overrides,
)

MONEY_QUANTUM = Decimal("0.01")
MONEY_ROUNDING = ROUND_HALF_EVEN
# wide enough that totals of bounded catalog prices are never rounded
MONEY_CONTEXT = Context(prec=100, rounding=MONEY_ROUNDING)


@dataclass(slots=True, frozen=True)
class Settings:
    products_file: str = "productos.csv"
    vendors_file: str = "vendedores.csv"
    vendor_report_file: str = "reporte_vendedores.csv"
    product_report_file: str = "reporte_productos.csv"
    error_log_file: str = "errores_log.txt"
    sales_file_suffix: str = ".csv"
    field_separator: str = ";"
    encoding: str | None = None
    unknown_doc_type: str = "UNK"
    unknown_doc_number: str = "UNKNOWN"

    @property
    def reserved_names(self) -> frozenset[str]:
        """File names never treated as sales files, lower-cased."""
        return frozenset(
            name.lower()
            for name in (
                self.products_file,
                self.vendors_file,
                self.vendor_report_file,
                self.product_report_file,
                self.error_log_file,
            )
        )

    @property
    def output_names(self) -> tuple[str, str, str]:
        return (self.vendor_report_file, self.product_report_file, self.error_log_file)


SETTING_NAMES = {f.name for f in fields(Settings)}

DEFAULT_SETTINGS = Settings()


def _coerce(overrides: dict[str, Any]) -> dict[str, Any]:
    coerced: dict[str, Any] = {}
    for key, value in overrides.items():
        if key == "encoding":
            coerced[key] = str(value) if value else None
        elif value is not None and str(value) != "":
            coerced[key] = str(value)
    return coerced


def load_settings(path: Path | None = None, base: Settings = DEFAULT_SETTINGS) -> Settings:
    """Return ``base`` merged with the JSON overrides stored at ``path``."""
    override_path = path or Path.cwd() / DEFAULT_FILE_NAME
    overrides = load_overrides(override_path, allowed=SETTING_NAMES)
    if not overrides:
        return base
    return replace(base, **_coerce(overrides))


def save_settings_override(overrides: dict[str, Any], path: Path, base: Settings = DEFAULT_SETTINGS) -> Settings:
    """Persist overrides to JSON and return the merged settings."""
    normalized = save_overrides(overrides, path, allowed=SETTING_NAMES)
    return replace(base, **_coerce(normalized))
