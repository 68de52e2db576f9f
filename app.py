"""Streamlit front-end for the sales reconciliation pipeline."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from sales_reconciler import (
    DEFAULT_SETTINGS,
    CsvCatalogRepository,
    FatalLoadError,
    PublishReportsUseCase,
    ReconcileSalesUseCase,
    ReconciliationContext,
    UploadedSalesRepository,
)
from sales_reconciler.application.dto import PublishedReports
from sales_reconciler.domain.results import ReconciliationResult
from sales_reconciler.infrastructure.storage.line_sink import MemoryLineSink
from sales_reconciler.presentation.reports import render_excel, report_to_dataframe

SETTINGS = DEFAULT_SETTINGS

st.set_page_config(page_title="Sales Reconciler", layout="wide")
st.title("Sales Reconciliation")


def run_reconciliation(
    products_bytes: bytes, vendors_bytes: bytes, sales_files: dict[str, bytes]
) -> tuple[ReconciliationResult, PublishedReports, MemoryLineSink]:
    context = ReconciliationContext(
        catalog_repository=CsvCatalogRepository(products_bytes, vendors_bytes, SETTINGS),
        sales_repository=UploadedSalesRepository(sales_files, SETTINGS),
        settings=SETTINGS,
    )
    result = ReconcileSalesUseCase(context).execute()
    sink = MemoryLineSink()
    published = PublishReportsUseCase(sink, SETTINGS).execute(result)
    return result, published, sink


if "view" not in st.session_state:
    st.session_state["view"] = "upload"
if "result" not in st.session_state:
    st.session_state["result"] = None


if st.session_state["view"] == "upload":
    col1, col2 = st.columns(2)
    with col1:
        products_file = st.file_uploader(f"Upload products catalog ({SETTINGS.products_file})", type=["csv"])
    with col2:
        vendors_file = st.file_uploader(f"Upload vendors catalog ({SETTINGS.vendors_file})", type=["csv"])
    sales_uploads = st.file_uploader("Upload sales files", type=["csv"], accept_multiple_files=True)

    run_btn = st.button("Run Reconciliation", disabled=not (products_file and vendors_file))
    if run_btn and products_file and vendors_file:
        sales_files = {upload.name: upload.read() for upload in sales_uploads or []}
        try:
            with st.spinner("Reconciling..."):
                result, published, sink = run_reconciliation(products_file.read(), vendors_file.read(), sales_files)
        except FatalLoadError as exc:
            st.error(f"Critical error: {exc}")
        else:
            st.session_state["result"] = {"result": result, "published": published, "sink": sink}
            st.session_state["view"] = "results"
            st.rerun()
else:
    back_clicked = st.button("← Back", key="back_to_upload")
    if back_clicked:
        st.session_state["view"] = "upload"
        st.session_state["result"] = None
        st.rerun()

    state = st.session_state.get("result")
    if not state:
        st.info("No results available. Upload the catalogs and run the reconciliation first.")
    else:
        result: ReconciliationResult = state["result"]
        published: PublishedReports = state["published"]
        sink: MemoryLineSink = state["sink"]

        st.subheader("Summary")
        summary = result.summary
        st.metric("Products loaded", summary.products_loaded)
        st.metric("Vendors loaded", summary.vendors_loaded)
        st.metric("Sales files processed", summary.sales_files)
        st.metric("Valid records", summary.valid_records)
        st.metric("Diagnostics", summary.diagnostics)

        separator = SETTINGS.field_separator
        tabs = st.tabs(["Vendors", "Products", "Diagnostics"])
        with tabs[0]:
            st.dataframe(report_to_dataframe(published.vendor_report, separator))
            st.download_button(
                "Download vendor report",
                data=sink.render(SETTINGS.vendor_report_file),
                file_name=SETTINGS.vendor_report_file,
                mime="text/csv",
            )
        with tabs[1]:
            st.dataframe(report_to_dataframe(published.product_report, separator))
            st.download_button(
                "Download product report",
                data=sink.render(SETTINGS.product_report_file),
                file_name=SETTINGS.product_report_file,
                mime="text/csv",
            )
        with tabs[2]:
            if result.has_errors():
                st.dataframe(
                    pd.DataFrame(
                        [{"kind": e.kind.value, "file": e.file_name, "message": e.message} for e in result.errors]
                    )
                )
                st.download_button(
                    "Download error log",
                    data=sink.render(SETTINGS.error_log_file),
                    file_name=SETTINGS.error_log_file,
                    mime="text/plain",
                )
            else:
                st.success("No diagnostics recorded.")

        reports = published.as_mapping(SETTINGS.output_names[:2])
        st.download_button(
            "Download both reports (Excel)",
            data=render_excel(reports, separator),
            file_name="reportes.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
