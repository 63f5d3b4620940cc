# -*- coding: utf-8 -*-

"""
Main entry point for launching the DD Switch application.
"""

import logging
import tkinter as tk

from dd_switch.app import DDSwitchApp
from dd_switch.config import ConfigManager
from dd_switch.logging_config import setup_logging


def main():
    """
    Configure logging, main window, and launch application.
    """
    setup_logging()
    ui_config = ConfigManager().get_ui_config()

    root = tk.Tk()
    root.title(ui_config.get("title", "DD Switch"))
    window_width = int(ui_config.get("width", 560))
    window_height = int(ui_config.get("height", 640))
    # Center the window
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    # Use modern theme if available
    try:
        from sv_ttk import set_theme
        set_theme(ui_config.get("theme", "light"))
    except ImportError:
        logging.warning("'sv-ttk' theme is not installed.")

    DDSwitchApp(root)

    root.mainloop()
    logging.info("===== Application terminated =====")


if __name__ == '__main__':
    main()
