"""Application services orchestrating the sales reconciliation workflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sales_reconciler.application.dto import PublishedReports
from sales_reconciler.config import DEFAULT_SETTINGS, Settings
from sales_reconciler.domain.errors import RecordError
from sales_reconciler.domain.models import SalesRecord
from sales_reconciler.domain.repositories import CatalogRepository, LineSink, SalesFileRepository
from sales_reconciler.domain.results import ReconciliationResult, ReconciliationSummary
from sales_reconciler.domain.services import SalesAggregator
from sales_reconciler.infrastructure.parsing.sales import SalesRecordParser, VendorIdentifier
from sales_reconciler.infrastructure.parsing.utils import non_empty_lines
from sales_reconciler.presentation.reports import build_product_report, build_vendor_report

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationContext:
    catalog_repository: CatalogRepository
    sales_repository: SalesFileRepository
    settings: Settings = DEFAULT_SETTINGS


class ReconcileSalesUseCase:
    """Loads catalogs, then folds every sales file into the running totals.

    FatalLoadError from the catalog repository propagates; everything that goes
    wrong inside a sales file is collected as a RecordError.
    """

    def __init__(self, context: ReconciliationContext) -> None:
        self._context = context
        self._unidentified = 0

    def execute(self) -> ReconciliationResult:
        settings = self._context.settings
        products = self._context.catalog_repository.load_products()
        vendors = self._context.catalog_repository.load_vendors()
        logger.info("Loaded %d products and %d vendors", len(products), len(vendors))

        identifier = VendorIdentifier(vendors, products, settings)
        parser = SalesRecordParser(products, settings)
        aggregator = SalesAggregator(products)
        errors: list[RecordError] = []
        self._unidentified = 0

        names = self._context.sales_repository.list_sales_files()
        logger.info("Discovered %d sales files", len(names))
        for name in names:
            errors.extend(self._process_file(name, identifier, parser, aggregator))

        summary = ReconciliationSummary(
            products_loaded=len(products),
            vendors_loaded=len(vendors),
            sales_files=len(names),
            valid_records=aggregator.records,
            diagnostics=len(errors),
            unidentified_files=self._unidentified,
        )
        return ReconciliationResult(
            summary=summary,
            totals=aggregator.totals,
            products=products,
            vendors=vendors,
            errors=tuple(errors),
        )

    def _process_file(
        self,
        name: str,
        identifier: VendorIdentifier,
        parser: SalesRecordParser,
        aggregator: SalesAggregator,
    ) -> list[RecordError]:
        try:
            raw_lines = self._context.sales_repository.read_lines(name)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Failed to read %s: %s", name, exc)
            return [RecordError.read_failure(name, exc)]

        lines = non_empty_lines(raw_lines)
        if not lines:
            return [RecordError.empty_file(name)]

        errors: list[RecordError] = []
        identification = identifier.identify(name, lines)
        if not identification.identified:
            self._unidentified += 1
        if identification.diagnostic is not None:
            errors.append(identification.diagnostic)
        logger.debug("%s -> vendor %s (%s)", name, identification.key, identification.rule.value)

        body = lines[1:] if identification.header_consumed else lines
        for outcome in parser.parse(name, identification.key, body):
            if isinstance(outcome, SalesRecord):
                aggregator.add(outcome)
            else:
                errors.append(outcome)
        return errors


class PublishReportsUseCase:
    """Writes both rankings, and the error log when there is something to log."""

    def __init__(self, sink: LineSink, settings: Settings = DEFAULT_SETTINGS) -> None:
        self._sink = sink
        self._settings = settings

    def execute(self, result: ReconciliationResult) -> PublishedReports:
        settings = self._settings
        separator = settings.field_separator
        vendor_report = build_vendor_report(result.totals.vendor_totals, result.vendors, separator)
        product_report = build_product_report(result.totals.product_quantities, result.products, separator)
        error_log = [str(error) for error in result.errors]

        self._sink.write_lines(settings.vendor_report_file, vendor_report)
        self._sink.write_lines(settings.product_report_file, product_report)
        written = [settings.vendor_report_file, settings.product_report_file]
        if error_log:
            self._sink.write_lines(settings.error_log_file, error_log)
            written.append(settings.error_log_file)

        return PublishedReports(
            vendor_report=vendor_report,
            product_report=product_report,
            error_log=error_log,
            written=tuple(written),
        )
