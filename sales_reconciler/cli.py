"""Command-line entrypoint for sales reconciliation."""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from sales_reconciler.application.use_cases import (
    PublishReportsUseCase,
    ReconcileSalesUseCase,
    ReconciliationContext,
)
from sales_reconciler.config import load_settings
from sales_reconciler.domain.errors import FatalLoadError
from sales_reconciler.infrastructure.repositories.csv_repositories import (
    CsvCatalogRepository,
    DirectorySalesRepository,
)
from sales_reconciler.infrastructure.storage.line_sink import DirectoryLineSink
from sales_reconciler.infrastructure.storage.settings_store import DEFAULT_FILE_NAME
from sales_reconciler.logging_setup import configure_logging


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile per-vendor sales files against the product and vendor catalogs"
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=str,
        default=".",
        help="Folder holding the catalogs and sales files; reports are written here",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="",
        help=f"JSON settings overrides (default: <directory>/{DEFAULT_FILE_NAME})",
    )
    parser.add_argument("--json", type=str, default="", help="Write the run summary as JSON to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every processed sales file")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    directory = Path(args.directory)
    settings = load_settings(Path(args.config) if args.config else directory / DEFAULT_FILE_NAME)

    context = ReconciliationContext(
        catalog_repository=CsvCatalogRepository.from_directory(directory, settings),
        sales_repository=DirectorySalesRepository(directory, settings),
        settings=settings,
    )

    print("=== Sales reconciliation started ===")
    try:
        result = ReconcileSalesUseCase(context).execute()
    except FatalLoadError as exc:
        print(f"Critical error: {exc}", file=sys.stderr)
        return 1

    published = PublishReportsUseCase(DirectoryLineSink(directory, settings.encoding), settings).execute(result)

    summary = result.summary
    print("Reconciliation Summary")
    print("======================")
    print(f"Products loaded: {summary.products_loaded}")
    print(f"Vendors loaded: {summary.vendors_loaded}")
    print(f"Sales files processed: {summary.sales_files}")
    print(f"Valid records: {summary.valid_records}")
    print(f"Diagnostics: {summary.diagnostics}")
    if result.has_errors():
        print(f"{settings.error_log_file} written with {len(published.error_log)} entries.")

    print("\nGenerated files:")
    for name in published.written:
        print(f" - {name}")

    if args.json:
        out_path = Path(args.json)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"summary": asdict(summary), "written": list(published.written)}
        out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    print("=== Done ===")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
