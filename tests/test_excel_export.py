"""
Unit tests for Excel report export.
"""
import pytest
from openpyxl import load_workbook

from computations import add_manual_item, classify_personal, classify_shared, import_csv
from excel_export import export_excel
from exceptions import ExportError
from models import LedgerState


@pytest.fixture
def sorted_state():
    state = LedgerState()
    import_csv(state, "Transaction Date,Description,Amount\r\n2024-01-05,Coffee,-4.50\r\n2024-01-06,Dinner,-40.01")
    add_manual_item(state, "Gift", 12.345)
    classify_personal(state)
    classify_shared(state)
    return state


def test_export_sheets(tmp_path, sorted_state):
    path = tmp_path / "report.xlsx"
    export_excel(sorted_state, str(path))

    wb = load_workbook(path)
    assert wb.sheetnames == ["Personal", "Shared", "Summary"]

    personal = list(wb["Personal"].iter_rows(values_only=True))
    assert personal == [("Date", "Item", "Cost"), ("2024-01-05", "Coffee", 4.5)]

    shared = list(wb["Shared"].iter_rows(values_only=True))
    assert shared[0] == ("Date", "Item", "Cost", "My half", "Owed half")
    assert shared[1] == ("2024-01-06", "Dinner", 40.01, 20.01, 20.01)

    summary = {row[0]: row[1:] for row in wb["Summary"].iter_rows(min_row=2, values_only=True)}
    assert summary["Spent on me"] == (24.51, 2)
    assert summary["Owed to me"] == (20.01, 1)
    assert summary["Still pending"] == (None, 1)


def test_export_empty_state(tmp_path):
    path = tmp_path / "empty.xlsx"
    export_excel(LedgerState(), str(path))
    wb = load_workbook(path)
    assert wb["Personal"].max_row == 1
    assert wb["Shared"].max_row == 1


def test_export_to_missing_directory(tmp_path):
    with pytest.raises(ExportError):
        export_excel(LedgerState(), str(tmp_path / "nope" / "report.xlsx"))
