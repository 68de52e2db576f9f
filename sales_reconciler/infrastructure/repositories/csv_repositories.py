"""Delimited-text repositories for catalogs and sales files."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Mapping, Sequence

from sales_reconciler.config import DEFAULT_SETTINGS, Settings
from sales_reconciler.domain.errors import FatalLoadError
from sales_reconciler.domain.models import Product, Vendor, VendorKey
from sales_reconciler.domain.repositories import CatalogRepository, SalesFileRepository
from sales_reconciler.infrastructure.parsing.catalogs import parse_products, parse_vendors
from sales_reconciler.infrastructure.parsing.utils import decode_lines, ensure_bytes

Source = BytesIO | Path | bytes


def is_sales_file_name(name: str, settings: Settings = DEFAULT_SETTINGS) -> bool:
    lowered = name.lower()
    return lowered.endswith(settings.sales_file_suffix.lower()) and lowered not in settings.reserved_names


class CsvCatalogRepository(CatalogRepository):
    def __init__(self, products_source: Source, vendors_source: Source, settings: Settings = DEFAULT_SETTINGS) -> None:
        self._products_source = products_source
        self._vendors_source = vendors_source
        self._settings = settings

    @classmethod
    def from_directory(cls, directory: Path, settings: Settings = DEFAULT_SETTINGS) -> CsvCatalogRepository:
        return cls(directory / settings.products_file, directory / settings.vendors_file, settings)

    def load_products(self) -> Mapping[str, Product]:
        name = self._settings.products_file
        lines = self._read(self._products_source, name, "products")
        return parse_products(lines, name, self._settings.field_separator)

    def load_vendors(self) -> Mapping[VendorKey, Vendor]:
        name = self._settings.vendors_file
        lines = self._read(self._vendors_source, name, "vendors")
        return parse_vendors(lines, name, self._settings.field_separator)

    def _read(self, source: Source, name: str, label: str) -> list[str]:
        if isinstance(source, Path) and not source.exists():
            raise FatalLoadError(f"{label} file not found: {source}")
        try:
            return decode_lines(ensure_bytes(source), self._settings.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise FatalLoadError(f"cannot read {label} file {name}: {exc}") from exc


class DirectorySalesRepository(SalesFileRepository):
    """Sales files found directly in ``directory``, in filename order."""

    def __init__(self, directory: Path, settings: Settings = DEFAULT_SETTINGS) -> None:
        self._directory = Path(directory)
        self._settings = settings

    def list_sales_files(self) -> Sequence[str]:
        return sorted(
            path.name
            for path in self._directory.iterdir()
            if path.is_file() and is_sales_file_name(path.name, self._settings)
        )

    def read_lines(self, name: str) -> Sequence[str]:
        return decode_lines((self._directory / name).read_bytes(), self._settings.encoding)


class UploadedSalesRepository(SalesFileRepository):
    """Sales files held in memory, e.g. browser uploads keyed by file name."""

    def __init__(self, files: Mapping[str, Source], settings: Settings = DEFAULT_SETTINGS) -> None:
        self._files = {name: ensure_bytes(source) for name, source in files.items()}
        self._settings = settings

    def list_sales_files(self) -> Sequence[str]:
        return sorted(name for name in self._files if is_sales_file_name(name, self._settings))

    def read_lines(self, name: str) -> Sequence[str]:
        try:
            data = self._files[name]
        except KeyError:
            raise FileNotFoundError(name) from None
        return decode_lines(data, self._settings.encoding)
