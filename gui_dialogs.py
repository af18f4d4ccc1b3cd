"""
Dialog windows for Financey GUI
"""
from __future__ import annotations
from typing import Optional, Tuple

try:
    import tkinter as tk
    from tkinter import ttk, messagebox
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None

from utils import safe_float


class AddItemDialog(tk.Toplevel):
    """Dialog for entering a manual item (name + price)"""

    def __init__(self, master):
        super().__init__(master)
        self.title("Create New Item")
        self.resizable(False, False)
        self.result: Optional[Tuple[str, float]] = None

        self._bind_enter_to_ok()

        frm = ttk.Frame(self, padding=10)
        frm.grid(row=0, column=0, sticky="nsew")

        self.v_name = tk.StringVar(value="")
        self.v_price = tk.StringVar(value="")

        ttk.Label(frm, text="Item Name").grid(row=0, column=0, sticky="w", pady=2)
        name_entry = ttk.Entry(frm, textvariable=self.v_name, width=28)
        name_entry.grid(row=0, column=1, sticky="w")

        ttk.Label(frm, text="Price").grid(row=1, column=0, sticky="w", pady=2)
        ttk.Entry(frm, textvariable=self.v_price, width=14).grid(row=1, column=1, sticky="w")

        btns = ttk.Frame(frm)
        btns.grid(row=2, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Add Item", command=self._ok).grid(row=0, column=0, padx=4)
        ttk.Button(btns, text="Cancel", command=self._cancel).grid(row=0, column=1, padx=4)

        name_entry.focus_set()
        self.grab_set()
        self.transient(master)

    def _bind_enter_to_ok(self):
        """Bind Enter/Return to OK"""

        def on_enter(event=None):
            self._ok()
            return "break"

        self.bind("<Return>", on_enter)
        self.bind("<KP_Enter>", on_enter)

    def _ok(self):
        """Validate and close; both fields are required"""
        name = self.v_name.get().strip()
        if not name:
            messagebox.showerror("Missing name", "Please enter an item name.", parent=self)
            return

        price = safe_float(self.v_price.get(), None)
        if price is None:
            messagebox.showerror("Invalid price", "Price must be a number.", parent=self)
            return

        self.result = (name, price)
        self.destroy()

    def _cancel(self):
        """Cancel and close"""
        self.result = None
        self.destroy()
