"""
Unit tests for CSV parsing and export.
"""
import math

import pytest

from config import AppSettings
from computations import add_manual_item, classify_personal
from csv_handler import (
    export_classified_to_csv,
    import_expenses_from_csv,
    parse_expenses_csv,
    read_csv_text,
)
from exceptions import AmountParseError, CsvFormatError, FileProcessingError
from models import ExpenseRecord, LedgerState

HEADER = "Transaction Date,Description,Amount"


def test_parse_single_row_inverts_sign():
    """Spending shown as negative becomes a positive cost."""
    records = parse_expenses_csv(HEADER + "\r\n2024-01-05,Coffee,-4.50")
    assert records == [ExpenseRecord(name="Coffee", cost=4.50, date="2024-01-05")]


def test_parse_refund_becomes_negative_cost():
    records = parse_expenses_csv(HEADER + "\r\n2024-01-06,Refund,12.00")
    assert records[0].cost == -12.0


def test_parse_keeps_row_order():
    text = "\r\n".join([HEADER, "2024-01-01,A,-1", "2024-01-02,B,-2", "2024-01-03,C,-3"])
    records = parse_expenses_csv(text)
    assert [r.name for r in records] == ["A", "B", "C"]
    assert [r.cost for r in records] == [1.0, 2.0, 3.0]


def test_parse_empty_and_header_only():
    assert parse_expenses_csv("") == []
    assert parse_expenses_csv(HEADER) == []
    assert parse_expenses_csv(HEADER + "\r\n") == []


def test_parse_ignores_unknown_columns():
    text = "Posted Date,Transaction Date,Card No.,Description,Category,Amount\r\n" \
           "2024-02-02,2024-02-01,1234,Groceries,Food,-56.78"
    records = parse_expenses_csv(text)
    assert records == [ExpenseRecord(name="Groceries", cost=56.78, date="2024-02-01")]


def test_parse_header_match_is_exact():
    records = parse_expenses_csv("transaction date,Description ,Amount\r\n2024-01-05,Coffee,-4.50")
    assert records == [ExpenseRecord(name=None, cost=4.50, date=None)]


def test_parse_short_row_gives_partial_record():
    records = parse_expenses_csv(HEADER + "\r\n2024-01-05,Coffee")
    assert records == [ExpenseRecord(name="Coffee", cost=None, date="2024-01-05")]


def test_parse_empty_amount_is_unset():
    records = parse_expenses_csv(HEADER + "\r\n2024-01-05,Pending charge,")
    assert records[0].cost is None


def test_parse_lf_only_text_is_one_header_row():
    """Only CRLF separates rows; a LF-only file has no data rows."""
    records = parse_expenses_csv(HEADER + "\n2024-01-05,Coffee,-4.50")
    assert records == []


def test_parse_non_numeric_amount_raises():
    text = "\r\n".join([HEADER, "2024-01-01,A,-1", "2024-01-02,B,abc"])
    with pytest.raises(AmountParseError) as exc_info:
        parse_expenses_csv(text)
    assert exc_info.value.details == {"row": 3, "value": "abc"}
    assert isinstance(exc_info.value, CsvFormatError)


def test_parse_nan_literal_passes_through():
    records = parse_expenses_csv(HEADER + "\r\n2024-01-05,Odd,nan")
    assert math.isnan(records[0].cost)


def test_parse_with_custom_columns():
    settings = AppSettings(date_column="Date", description_column="Payee", amount_column="Value")
    records = parse_expenses_csv("Date,Payee,Value\r\n2024-03-01,Rent,-900", settings)
    assert records == [ExpenseRecord(name="Rent", cost=900.0, date="2024-03-01")]


def test_import_from_file_keeps_crlf(tmp_path):
    path = tmp_path / "bank.csv"
    path.write_bytes(b"Transaction Date,Description,Amount\r\n2024-01-05,Coffee,-4.50\r\n")
    records = import_expenses_from_csv(str(path))
    assert records == [ExpenseRecord(name="Coffee", cost=4.50, date="2024-01-05")]


def test_import_strips_byte_order_mark(tmp_path):
    path = tmp_path / "bank.csv"
    path.write_bytes("\ufeffTransaction Date,Description,Amount\r\n2024-01-05,Tea,-3".encode("utf-8"))
    assert read_csv_text(str(path)).startswith("Transaction Date")
    assert import_expenses_from_csv(str(path))[0].date == "2024-01-05"


def test_import_missing_file_raises(tmp_path):
    with pytest.raises(FileProcessingError):
        import_expenses_from_csv(str(tmp_path / "missing.csv"))


def test_export_classified_can_be_reimported(tmp_path):
    state = LedgerState(
        personal=[ExpenseRecord(name="Coffee", cost=4.5, date="2024-01-05")],
        shared=[ExpenseRecord(name="Dinner", cost=40.0, date="N/A"),
                ExpenseRecord(name="Partial", cost=None, date=None)],
    )
    path = tmp_path / "sorted.csv"
    assert export_classified_to_csv(state, str(path)) == 3

    text = read_csv_text(str(path))
    assert text.splitlines()[0] == "Transaction Date,Description,Amount,Split"
    assert "2024-01-05,Coffee,-4.50,personal" in text
    assert ",Partial,,shared" in text

    records = parse_expenses_csv(text)
    assert [r.cost for r in records] == [4.5, 40.0, None]


def test_parse_zero_amount_is_positive_zero():
    records = parse_expenses_csv(HEADER + "\r\n2024-01-05,Fee waived,0")
    assert records[0].cost == 0.0
    assert math.copysign(1.0, records[0].cost) == 1.0


def test_export_name_with_comma_can_be_reimported(tmp_path):
    state = LedgerState()
    add_manual_item(state, "Dinner, Bob", 10)
    add_manual_item(state, "Free\r\nsample", 0)
    classify_personal(state)
    classify_personal(state)

    path = tmp_path / "sorted.csv"
    export_classified_to_csv(state, str(path))
    text = read_csv_text(str(path))
    assert "N/A,Dinner; Bob,-10.00,personal\r\n" in text
    assert "N/A,Free  sample,0.00,personal\r\n" in text

    records = parse_expenses_csv(text)
    assert [r.name for r in records] == ["Dinner; Bob", "Free  sample"]
    assert [r.cost for r in records] == [10.0, 0.0]


def test_export_uses_configured_columns(tmp_path):
    settings = AppSettings(date_column="Date", description_column="Payee", amount_column="Value")
    state = LedgerState(shared=[ExpenseRecord(name="Rent", cost=900.0, date="2024-03-01")])
    path = tmp_path / "sorted.csv"
    export_classified_to_csv(state, str(path), settings)

    text = read_csv_text(str(path))
    assert text.startswith("Date,Payee,Value,Split\r\n")
    assert parse_expenses_csv(text, settings) == [ExpenseRecord(name="Rent", cost=900.0, date="2024-03-01")]


def test_read_non_utf8_file_raises(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes("Transaction Date,Description,Amount\r\n2024-01-05,Café,-3.20".encode("latin-1"))
    with pytest.raises(FileProcessingError) as exc_info:
        read_csv_text(str(path))
    assert exc_info.value.details["path"] == str(path)
    with pytest.raises(FileProcessingError):
        import_expenses_from_csv(str(path))
