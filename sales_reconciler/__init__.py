"""Sales-file reconciliation against product and vendor catalogs."""
from sales_reconciler.application.use_cases import (
    PublishReportsUseCase,
    ReconcileSalesUseCase,
    ReconciliationContext,
)
from sales_reconciler.config import DEFAULT_SETTINGS, Settings, load_settings
from sales_reconciler.domain.errors import FatalLoadError, RecordError
from sales_reconciler.infrastructure.repositories.csv_repositories import (
    CsvCatalogRepository,
    DirectorySalesRepository,
    UploadedSalesRepository,
)

__all__ = [
    "ReconcileSalesUseCase",
    "PublishReportsUseCase",
    "ReconciliationContext",
    "Settings",
    "DEFAULT_SETTINGS",
    "load_settings",
    "FatalLoadError",
    "RecordError",
    "CsvCatalogRepository",
    "DirectorySalesRepository",
    "UploadedSalesRepository",
]
