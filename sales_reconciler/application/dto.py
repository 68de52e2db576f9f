"""Application-level DTOs for sales reconciliation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(slots=True, frozen=True)
class PublishedReports:
    vendor_report: Sequence[str]
    product_report: Sequence[str]
    error_log: Sequence[str]
    written: Sequence[str]

    def as_mapping(self, names: Sequence[str]) -> dict[str, Sequence[str]]:
        """Pair the given output names with vendor report, product report and error log."""
        return dict(zip(names, (self.vendor_report, self.product_report, self.error_log)))
