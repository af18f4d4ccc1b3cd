"""
Financey GUI
- Import a bank CSV or add items by hand.
- Sort each item into "Just Me" or "Shared" and watch what you spent and what you are owed.

Run:
  python financey_gui.py

Dependencies:
  pip install openpyxl
(Tkinter ships with most Python distributions; on some Linux you may need: sudo apt-get install python3-tk)
"""
from __future__ import annotations
import os

try:
    import tkinter as tk
except ModuleNotFoundError:
    tk = None

from main_app import FinanceyApp
from config import SETTINGS_FILE, get_default_settings, save_settings
from logger import set_level, setup_logger
from utils import app_dir

logger = setup_logger(__name__)


def main():
    """Main entry point for the application"""
    if tk is None:
        raise RuntimeError(
            'tkinter is not available. Install it (e.g., on Ubuntu: sudo apt-get install python3-tk) '
            'and re-run to use the GUI.'
        )

    path = os.path.join(app_dir(), SETTINGS_FILE)
    settings = get_default_settings(path)
    if not os.path.exists(path):
        save_settings(settings, path)
    set_level(settings.log_level)
    logger.info(f"Starting Financey (settings: {path})")

    root = tk.Tk()
    FinanceyApp(root, settings)
    root.mainloop()


if __name__ == "__main__":
    main()
