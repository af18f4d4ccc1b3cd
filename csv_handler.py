"""
CSV import and export functionality for Financey
"""
from __future__ import annotations
import csv
from typing import Dict, List, Optional

from config import AppSettings
from exceptions import AmountParseError, FileProcessingError
from logger import setup_logger
from models import ExpenseRecord, LedgerState

logger = setup_logger(__name__)

ROW_SEPARATOR = "\r\n"
FIELD_SEPARATOR = ","


def _header_fields(settings: AppSettings) -> Dict[str, str]:
    """Map recognised header names to ExpenseRecord attributes"""
    return {
        settings.date_column: "date",
        settings.description_column: "name",
        settings.amount_column: "cost",
    }


def _parse_amount(raw: str, row_number: int) -> Optional[float]:
    """Parse an Amount cell and flip its sign; bank exports show spending as negative"""
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        raise AmountParseError(
            f"Row {row_number}: amount {raw!r} is not a number",
            details={"row": row_number, "value": raw},
        ) from None
    return -value or 0.0


def parse_expenses_csv(text: str, settings: Optional[AppSettings] = None) -> List[ExpenseRecord]:
    """
    Parse bank CSV text into expense records.
    Rows are split on CRLF and fields on commas; quoted fields are not supported.
    The first row is the header; unrecognised columns are skipped.
    Rows shorter than the header give records with the missing fields unset.
    """
    settings = settings or AppSettings()
    if not text:
        return []

    rows = text.split(ROW_SEPARATOR)
    # a terminating CRLF leaves one empty row behind
    if len(rows) > 1 and rows[-1] == "":
        rows.pop()

    known = _header_fields(settings)
    headers = rows[0].split(FIELD_SEPARATOR)
    columns = [(j, known[h]) for j, h in enumerate(headers) if h in known]
    logger.debug(f"Header {headers} mapped to {columns}")

    records = []
    for i, row in enumerate(rows[1:], start=2):
        fields = row.split(FIELD_SEPARATOR)
        record = ExpenseRecord()
        for j, attr in columns:
            if j >= len(fields):
                continue
            if attr == "cost":
                record.cost = _parse_amount(fields[j], i)
            else:
                setattr(record, attr, fields[j])
        records.append(record)

    logger.info(f"Parsed {len(records)} records from CSV")
    return records


def read_csv_text(filepath: str) -> str:
    """
    Read a CSV file into memory.
    The file is read without newline translation so CRLF rows survive.
    """
    try:
        with open(filepath, "r", encoding="utf-8-sig", newline="") as f:
            return f.read()
    except UnicodeDecodeError as ex:
        raise FileProcessingError(
            f"{filepath} is not UTF-8 text: {ex}", details={"path": filepath, "position": ex.start}
        ) from ex
    except OSError as ex:
        raise FileProcessingError(f"Cannot read {filepath}: {ex}", details={"path": filepath}) from ex


def import_expenses_from_csv(filepath: str, settings: Optional[AppSettings] = None) -> List[ExpenseRecord]:
    """Import expense records from a CSV file"""
    return parse_expenses_csv(read_csv_text(filepath), settings)


def _plain_field(value: Optional[str]) -> str:
    """Make a cell safe for the comma-split importer: no separators, no line breaks"""
    if not value:
        return ""
    return value.replace(FIELD_SEPARATOR, ";").replace("\r", " ").replace("\n", " ")


def export_classified_to_csv(state: LedgerState, filepath: str, settings: Optional[AppSettings] = None) -> int:
    """
    Export classified records to CSV file
    CSV columns: the configured date, description and amount columns, then Split
    Rows use the same unquoted format the importer reads, so commas in names
    and dates are written as semicolons. Amount is written the way the bank
    does (spending negative) so the file can be re-imported.
    Returns the number of rows written.
    """
    settings = settings or AppSettings()
    rows = [(r, "personal") for r in state.personal] + [(r, "shared") for r in state.shared]
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator=ROW_SEPARATOR, quoting=csv.QUOTE_NONE, quotechar=None)
        writer.writerow([settings.date_column, settings.description_column, settings.amount_column, "Split"])
        for r, split in rows:
            amount = "" if r.cost is None else f"{-r.cost or 0.0:.2f}"
            writer.writerow([_plain_field(r.date), _plain_field(r.name), amount, split])
    logger.info(f"Exported {len(rows)} classified records to {filepath}")
    return len(rows)
