"""
Excel export functionality for Financey
"""
from __future__ import annotations

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from computations import compute_summary, record_cost, shared_half
from exceptions import ExportError
from logger import setup_logger
from models import LedgerState

logger = setup_logger(__name__)


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _money_format(ws, first_col, last_col):
    for r in range(2, ws.max_row + 1):
        for c in range(first_col, last_col + 1):
            ws.cell(r, c).number_format = "0.00"


def export_excel(state: LedgerState, filepath: str) -> None:
    """
    Export classified items to Excel file with sheets:
    - Personal: items spent on me
    - Shared: items split with the co-payer, with each half
    - Summary: running totals
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    ws = wb.create_sheet("Personal")
    ws.append(["Date", "Item", "Cost"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for r in state.personal:
        ws.append([r.date, r.name, r.cost])
    _money_format(ws, 3, 3)
    _autosize_columns(ws)

    ws = wb.create_sheet("Shared")
    ws.append(["Date", "Item", "Cost", "My half", "Owed half"])
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    for r in state.shared:
        half = shared_half(record_cost(r))
        ws.append([r.date, r.name, r.cost, half, half])
    _money_format(ws, 3, 5)
    _autosize_columns(ws)

    ws = wb.create_sheet("Summary")
    summary = compute_summary(state)
    ws.append(["Category", "Amount", "Items"])
    _style_header(ws, 1)
    ws.append(["Spent on me", summary["spent_on_me"], summary["personal_count"] + summary["shared_count"]])
    ws.append(["Owed to me", summary["owed_to_me"], summary["shared_count"]])
    ws.append(["Still pending", None, summary["pending_count"]])
    _money_format(ws, 2, 2)
    _autosize_columns(ws)

    try:
        wb.save(filepath)
    except OSError as ex:
        raise ExportError(f"Cannot write {filepath}: {ex}", details={"path": filepath}) from ex
    logger.info(f"Exported Excel report to {filepath}")
