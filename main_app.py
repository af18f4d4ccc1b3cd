"""
Main application window for Financey GUI
"""
from __future__ import annotations
import os
from typing import Optional

try:
    import tkinter as tk
    from tkinter import ttk, messagebox, filedialog
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None
    filedialog = None

from models import LedgerState
from config import AppSettings
from computations import (
    add_manual_item,
    classify_personal,
    classify_shared,
    compute_summary,
    current_pending,
    import_csv,
    remaining_count,
)
from csv_handler import export_classified_to_csv, read_csv_text
from exceptions import FinanceyError
from excel_export import export_excel
from gui_dialogs import AddItemDialog
from logger import setup_logger
from utils import format_money

logger = setup_logger(__name__)


class FinanceyApp(ttk.Frame):
    """Main application window"""

    def __init__(self, master: tk.Tk, settings: Optional[AppSettings] = None):
        super().__init__(master, padding=8)
        self.master = master
        self.master.title("Financey")
        self.master.geometry("820x720")
        self.grid(row=0, column=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)

        self.settings = settings or AppSettings()
        self.state = LedgerState()
        self.selected_file: Optional[str] = None

        self._build_menu()
        self._build_ui()
        self.refresh_all()

    # ---------- Menu ----------
    def _build_menu(self):
        """Build application menu bar"""
        menubar = tk.Menu(self.master)
        filem = tk.Menu(menubar, tearoff=0)
        filem.add_command(label="Import CSV…", command=self.import_csv_dialog)
        filem.add_command(label="Add Item…", command=self.add_item)
        filem.add_separator()
        filem.add_command(label="Export CSV…", command=self.export_csv_dialog)
        filem.add_command(label="Export Excel…", command=self.export_excel_dialog)
        filem.add_separator()
        filem.add_command(label="Exit", command=self.master.destroy)
        menubar.add_cascade(label="File", menu=filem)
        self.master.config(menu=menubar)

    # ---------- UI ----------
    def _build_ui(self):
        """Build main UI: pending card, sorted lists, totals, upload"""
        self.columnconfigure(0, weight=1)

        header = ttk.Frame(self)
        header.grid(row=0, column=0, sticky="ew")
        ttk.Label(header, text="Finances", font=("TkDefaultFont", 20, "bold")).pack(anchor="w")
        ttk.Label(header, text="Decide what to do with each item").pack(anchor="w")

        self._build_pending_card()
        self._build_sorted_lists()
        self._build_summary()
        self._build_upload()

    def _build_pending_card(self):
        """Current pending item with Just Me / Shared buttons"""
        box = ttk.Frame(self, padding=(0, 10))
        box.grid(row=1, column=0, sticky="ew")
        box.columnconfigure(0, weight=1)

        self.pending_frame = ttk.LabelFrame(box, text="Next item", padding=10)
        self.pending_frame.grid(row=0, column=0, sticky="ew")
        self.pending_frame.columnconfigure(1, weight=1)

        self.v_title = tk.StringVar()
        self.v_price = tk.StringVar()
        self.v_date = tk.StringVar()
        self.v_remaining = tk.StringVar()
        ttk.Label(self.pending_frame, textvariable=self.v_title,
                  font=("TkDefaultFont", 14, "bold")).grid(row=0, column=0, columnspan=3, sticky="w")
        ttk.Label(self.pending_frame, textvariable=self.v_price).grid(row=1, column=0, columnspan=3, sticky="w")
        ttk.Label(self.pending_frame, textvariable=self.v_date).grid(row=2, column=0, columnspan=3, sticky="w")
        ttk.Label(self.pending_frame, textvariable=self.v_remaining).grid(row=3, column=0, columnspan=3, sticky="w")

        ttk.Button(self.pending_frame, text="Just Me", command=self.on_personal).grid(
            row=4, column=0, sticky="w", pady=(8, 0))
        ttk.Button(self.pending_frame, text="Shared", command=self.on_shared).grid(
            row=4, column=2, sticky="e", pady=(8, 0))

        self.empty_label = ttk.Label(box, text="Nothing left to sort. Upload a CSV or add an item.")
        self.empty_label.grid(row=1, column=0, sticky="w")

        ttk.Button(box, text="Add Item…", command=self.add_item).grid(row=2, column=0, sticky="w", pady=(8, 0))

    def _make_tree(self, parent, title: str, column: int):
        """Build a titled list of classified items"""
        frm = ttk.Frame(parent)
        frm.grid(row=0, column=column, sticky="nsew", padx=4)
        frm.rowconfigure(1, weight=1)
        frm.columnconfigure(0, weight=1)
        ttk.Label(frm, text=title, font=("TkDefaultFont", 12, "bold")).grid(row=0, column=0, sticky="w")

        cols = ("date", "item", "cost")
        tree = ttk.Treeview(frm, columns=cols, show="headings", height=12)
        for c, w in zip(cols, [95, 190, 80]):
            tree.heading(c, text=c)
            tree.column(c, width=w, anchor="w")
        tree.grid(row=1, column=0, sticky="nsew")

        yscroll = ttk.Scrollbar(frm, orient="vertical", command=tree.yview)
        tree.configure(yscroll=yscroll.set)
        yscroll.grid(row=1, column=1, sticky="ns")
        return tree

    def _build_sorted_lists(self):
        """Personal and Shared item lists side by side"""
        lists = ttk.Frame(self)
        lists.grid(row=2, column=0, sticky="nsew")
        self.rowconfigure(2, weight=1)
        lists.rowconfigure(0, weight=1)
        lists.columnconfigure(0, weight=1)
        lists.columnconfigure(1, weight=1)
        self.personal_tree = self._make_tree(lists, "Personal Items", 0)
        self.shared_tree = self._make_tree(lists, "Shared Items", 1)

    def _build_summary(self):
        """Running totals"""
        frm = ttk.Frame(self, padding=(0, 10))
        frm.grid(row=3, column=0, sticky="ew")
        frm.columnconfigure(0, weight=1)
        frm.columnconfigure(1, weight=1)

        self.v_my_total = tk.StringVar()
        self.v_owed_total = tk.StringVar()
        for col, (label, var) in enumerate([("Spent on me", self.v_my_total), ("Owed to me", self.v_owed_total)]):
            box = ttk.LabelFrame(frm, text=label, padding=10)
            box.grid(row=0, column=col, sticky="ew", padx=4)
            ttk.Label(box, textvariable=var, font=("TkDefaultFont", 18, "bold")).pack(anchor="w")

    def _build_upload(self):
        """File picker and Upload button"""
        frm = ttk.LabelFrame(self, text="Upload CSV File", padding=10)
        frm.grid(row=4, column=0, sticky="ew")
        frm.columnconfigure(1, weight=1)

        self.v_selected = tk.StringVar(value="No file chosen")
        ttk.Button(frm, text="Choose File…", command=self.choose_file).grid(row=0, column=0, sticky="w")
        ttk.Label(frm, textvariable=self.v_selected).grid(row=0, column=1, sticky="w", padx=8)
        ttk.Button(frm, text="Upload", command=self.upload_file).grid(row=0, column=2, sticky="e")

    # ---------- Classification ----------
    def on_personal(self):
        """Just Me button"""
        self._classify(classify_personal)

    def on_shared(self):
        """Shared button"""
        self._classify(classify_shared)

    def _classify(self, operation):
        try:
            operation(self.state)
        except FinanceyError as ex:
            messagebox.showinfo("Nothing to sort", ex.message)
        self.refresh_all()

    def add_item(self):
        """Add a manual item to the end of the pending queue"""
        dlg = AddItemDialog(self.master)
        self.master.wait_window(dlg)
        if dlg.result:
            name, price = dlg.result
            add_manual_item(self.state, name, price)
            self.refresh_all()

    # ---------- File ops ----------
    def choose_file(self):
        """Remember a CSV file for the next Upload"""
        fp = filedialog.askopenfilename(
            title="Choose bank CSV",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not fp:
            return False
        self.selected_file = fp
        self.v_selected.set(os.path.basename(fp))
        return True

    def upload_file(self):
        """Import the chosen file; does nothing if no file was chosen"""
        if not self.selected_file:
            return
        self._import_path(self.selected_file)

    def import_csv_dialog(self):
        """Choose and import a CSV file in one step"""
        if self.choose_file():
            self.upload_file()

    def _import_path(self, fp: str):
        try:
            count = import_csv(self.state, read_csv_text(fp), self.settings)
        except FinanceyError as ex:
            logger.error(f"Import of {fp} failed: {ex}")
            messagebox.showerror("Import failed", str(ex))
            return
        if not count:
            messagebox.showinfo("Import CSV", "No items found in CSV file.")
        self.refresh_all()

    def export_csv_dialog(self):
        """Export classified items to CSV file"""
        if not self.state.personal and not self.state.shared:
            messagebox.showinfo("Export CSV", "No sorted items to export.")
            return

        fp = filedialog.asksaveasfilename(
            title="Export Sorted Items to CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")]
        )
        if not fp:
            return

        try:
            count = export_classified_to_csv(self.state, fp, self.settings)
            messagebox.showinfo("Export CSV", f"Exported {count} items to:\n{fp}")
        except OSError as ex:
            messagebox.showerror("Export failed", str(ex))

    def export_excel_dialog(self):
        """Export to Excel file"""
        fp = filedialog.asksaveasfilename(
            title="Export Excel",
            defaultextension=".xlsx",
            filetypes=[("Excel Workbook", "*.xlsx")]
        )
        if not fp:
            return
        try:
            export_excel(self.state, fp)
            messagebox.showinfo("Export", f"Exported: {fp}")
        except FinanceyError as ex:
            messagebox.showerror("Export failed", ex.message)

    # ---------- Refresh ----------
    def refresh_all(self):
        """Refresh all UI elements"""
        self.refresh_pending()
        self.refresh_lists()
        self.refresh_summary()

    def refresh_pending(self):
        """Show the pending card only while a record is waiting"""
        record = current_pending(self.state)
        if record is None:
            self.pending_frame.grid_remove()
            self.empty_label.grid()
            return
        self.empty_label.grid_remove()
        self.pending_frame.grid()
        self.v_title.set(record.name or "(no description)")
        self.v_price.set(format_money(record.cost))
        self.v_date.set(f"Date: {record.date or '-'}")
        self.v_remaining.set(f"{remaining_count(self.state)} left to sort")

    def refresh_lists(self):
        """Refresh personal and shared tree views"""
        for tree, records in ((self.personal_tree, self.state.personal), (self.shared_tree, self.state.shared)):
            for iid in tree.get_children():
                tree.delete(iid)
            for r in records:
                tree.insert("", "end", values=(r.date or "", r.name or "", format_money(r.cost)))

    def refresh_summary(self):
        """Refresh running totals"""
        summary = compute_summary(self.state)
        self.v_my_total.set(f"${summary['spent_on_me']:.2f}")
        self.v_owed_total.set(f"${summary['owed_to_me']:.2f}")
