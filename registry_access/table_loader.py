"""
Table Loader — Reads a delimited registry export into an immutable Table.

The registry export is a flat CSV (or other delimited text) where every row
carries the same generic columns:

    identifier, levels, key1 .. key10, value

Column headers are matched case-insensitively: they are stripped and lowered
before validation, so "Key1", "KEY1" and " key1 " all satisfy "key1". Registry
exports that label the record number "irn" are accepted as "identifier".

Key behaviors:
  - Handles UTF-8 BOM encoding (common in Excel exports).
  - Strips whitespace from every header and cell; missing cells become "".
  - Extra columns are allowed and counted, but only the required ones are
    carried on each Record.
  - A missing required column raises MissingColumnsError before any Table is
    built. No other validation is performed.

Pipeline context:
    Used in Step 1 of the orchestrator pipeline. The returned Table (and the
    RegistryIndex it builds on construction) feeds every derivation step.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, TextIO, Tuple, Union

from .registry_index import RegistryIndex

logger = logging.getLogger(__name__)

KEY_COLUMNS = tuple(f"key{n}" for n in range(1, 11))
REQUIRED_COLUMNS = ("identifier", "levels") + KEY_COLUMNS + ("value",)

# Alternative header names seen in registry exports -> canonical column name
COLUMN_ALIASES = {
    "irn": "identifier",
}


class MissingColumnsError(ValueError):
    """Raised when a loaded table lacks one or more required columns."""

    def __init__(self, missing: Sequence[str], required: Sequence[str] = REQUIRED_COLUMNS):
        self.missing = list(missing)
        self.required = list(required)
        super().__init__(
            f"CSV file is missing required columns: {', '.join(self.missing)} "
            f"(required: {', '.join(self.required)})"
        )


@dataclass(frozen=True)
class Record:
    """One registry row, reduced to the required columns."""

    identifier: str = ""
    levels: str = ""
    key1: str = ""
    key2: str = ""
    key3: str = ""
    key4: str = ""
    key5: str = ""
    key6: str = ""
    key7: str = ""
    key8: str = ""
    key9: str = ""
    key10: str = ""
    value: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> "Record":
        return cls(**{col: row.get(col, "") for col in REQUIRED_COLUMNS})


class Table:
    """An ordered, read-only sequence of Records loaded from one source.

    Attributes:
        records: The rows, in source order.
        columns: Normalized (lower-case) column names of the source.
        source: Label of the source (usually the file name).
        index: RegistryIndex built once over the records.
    """

    def __init__(self, records: Iterable[Record], columns: Sequence[str] = REQUIRED_COLUMNS,
                 source: str = ""):
        self.records: Tuple[Record, ...] = tuple(records)
        self.columns: Tuple[str, ...] = tuple(columns)
        self.source = source
        self.index = RegistryIndex(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def row_count(self) -> int:
        return len(self.records)

    @property
    def column_count(self) -> int:
        return len(self.columns)


def normalize_column_name(name: str) -> str:
    """Lower-case and strip a header, then map known aliases."""
    normalized = (name or "").strip().lower()
    return COLUMN_ALIASES.get(normalized, normalized)


def check_required_columns(columns: Iterable[str]) -> None:
    """Raise MissingColumnsError if any required column is absent.

    ARGS:
        columns: Normalized column names.
    """
    present = set(columns)
    missing = [col for col in REQUIRED_COLUMNS if col not in present]
    if missing:
        raise MissingColumnsError(missing)


def read_table(stream: TextIO, delimiter: str = ",", source: str = "") -> Table:
    """Parse an open text stream into a validated Table.

    ARGS:
        stream: Text stream positioned at the header line
        delimiter: Field delimiter
        source: Label stored on the Table

    RETURNS:
        Table with one Record per data row

    RAISES:
        MissingColumnsError: If a required column is not present
    """
    reader = csv.reader(stream, delimiter=delimiter)
    header = next(reader, [])
    columns = [normalize_column_name(col) for col in header]
    check_required_columns(columns)

    records: List[Record] = []
    for raw in reader:
        if not any(cell.strip() for cell in raw):
            continue
        row = {}
        for position, col in enumerate(columns):
            # First occurrence wins when a header is repeated
            if col in row:
                continue
            cell = raw[position] if position < len(raw) else ""
            row[col] = cell.strip() if cell else ""
        records.append(Record.from_row(row))

    logger.debug("Parsed %d rows and %d columns from %s", len(records), len(columns), source or "<stream>")
    return Table(records, columns, source)


def load_table(source: Union[str, Path, TextIO], delimiter: str = ",",
               encoding: str = "utf-8-sig") -> Table:
    """Load a delimited registry export from a path or an open stream.

    ARGS:
        source: Path to the file, or a text stream
        delimiter: Field delimiter (default: comma)
        encoding: File encoding used when source is a path

    RETURNS:
        Validated Table

    RAISES:
        MissingColumnsError: If a required column is not present
        OSError: If the file cannot be opened
    """
    if hasattr(source, "read"):
        name = getattr(source, "name", "") or ""
        return read_table(source, delimiter, Path(name).name if name else "")

    path = Path(source)
    with open(path, "r", encoding=encoding, newline="") as f:
        return read_table(f, delimiter, path.name)
