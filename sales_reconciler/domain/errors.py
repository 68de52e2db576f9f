"""Error taxonomy: fatal load failures versus per-record diagnostics."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FatalLoadError(Exception):
    """A master catalog could not be loaded; the whole run stops."""


class ErrorKind(str, Enum):
    EMPTY_FILE = "empty_file"
    VENDOR_NOT_IDENTIFIED = "vendor_not_identified"
    INVALID_FORMAT = "invalid_format"
    EMPTY_FIELD = "empty_field"
    INVALID_QUANTITY = "invalid_quantity"
    NEGATIVE_QUANTITY = "negative_quantity"
    PRODUCT_NOT_FOUND = "product_not_found"
    READ_FAILURE = "read_failure"


@dataclass(frozen=True)
class RecordError:
    """Recoverable anomaly collected into the error log."""

    kind: ErrorKind
    file_name: str
    message: str

    def __str__(self) -> str:
        return self.message

    @classmethod
    def empty_file(cls, file_name: str) -> RecordError:
        return cls(ErrorKind.EMPTY_FILE, file_name, f"empty file: {file_name}")

    @classmethod
    def vendor_not_identified(cls, file_name: str) -> RecordError:
        return cls(
            ErrorKind.VENDOR_NOT_IDENTIFIED,
            file_name,
            f"vendor not identified for file {file_name}",
        )

    @classmethod
    def read_failure(cls, file_name: str, reason: object) -> RecordError:
        return cls(ErrorKind.READ_FAILURE, file_name, f"read failure in file {file_name} -> {reason}")

    @classmethod
    def for_line(cls, kind: ErrorKind, file_name: str, line: str, product_id: str | None = None) -> RecordError:
        prefixes = {
            ErrorKind.INVALID_FORMAT: "invalid format",
            ErrorKind.EMPTY_FIELD: "empty field",
            ErrorKind.INVALID_QUANTITY: "invalid quantity",
            ErrorKind.NEGATIVE_QUANTITY: "negative quantity",
            ErrorKind.PRODUCT_NOT_FOUND: f"product not found (id={product_id})",
        }
        return cls(kind, file_name, f"{prefixes[kind]} in file {file_name} line: {line}")
