from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, ttk
from typing import Optional


class SettingsDialog:
    """Edits the configuration root override.

    Use: value = SettingsDialog.ask_root(parent, current_override, default_root)
    Returns the new override ("" to use the default) or None if cancelled.
    The folder-missing hint is informational; saving is never blocked.
    """

    @staticmethod
    def ask_root(parent: tk.Widget, current: Optional[str], default_root: str) -> str | None:
        top = tk.Toplevel(parent)
        top.title("Settings")
        top.transient(parent.winfo_toplevel())
        top.resizable(True, False)

        container = ttk.Frame(top, padding=(12, 10))
        container.grid(row=0, column=0, sticky="nsew")
        top.columnconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        ttk.Label(container, text="Configuration folder (leave empty for the default):").grid(
            row=0, column=0, columnspan=2, sticky="w", pady=(0, 6)
        )
        var = tk.StringVar(value=current or "")
        entry = ttk.Entry(container, textvariable=var, width=52)
        entry.grid(row=1, column=0, sticky="ew")

        def _browse() -> None:
            chosen = filedialog.askdirectory(parent=top, initialdir=var.get().strip() or default_root)
            if chosen:
                var.set(chosen)

        ttk.Button(container, text="Browse…", command=_browse).grid(row=1, column=1, padx=(6, 0))
        ttk.Label(container, text=f"Default: {default_root}", foreground="#888888").grid(
            row=2, column=0, columnspan=2, sticky="w", pady=(4, 0)
        )

        hint_var = tk.StringVar()
        ttk.Label(container, textvariable=hint_var, foreground="#CC6600").grid(
            row=3, column=0, columnspan=2, sticky="w"
        )

        def _refresh_hint(*_args) -> None:
            text = var.get().strip()
            if text and not Path(text).expanduser().is_dir():
                hint_var.set("Folder does not exist")
            else:
                hint_var.set("")

        var.trace_add("write", _refresh_hint)
        _refresh_hint()

        result: list[str | None] = [None]

        def _ok() -> None:
            result[0] = var.get().strip()
            top.destroy()

        def _cancel() -> None:
            top.destroy()

        btns = ttk.Frame(container)
        btns.grid(row=4, column=0, columnspan=2, sticky="e", pady=(10, 0))
        ttk.Button(btns, text="Cancel", command=_cancel).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Save", style="Accent.TButton", command=_ok).grid(row=0, column=1)

        entry.bind("<Return>", lambda _e: _ok())
        top.bind("<Escape>", lambda _e: _cancel())
        top.protocol("WM_DELETE_WINDOW", _cancel)
        entry.focus_set()

        try:
            top.grab_set()
        except tk.TclError:
            pass
        top.wait_window(top)
        return result[0]
