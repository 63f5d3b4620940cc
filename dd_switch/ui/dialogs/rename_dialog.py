from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional


class RenameDialog:
    """Modal single-line name prompt used for "New" and "Rename".

    Use: value = RenameDialog.ask_string(parent, title, prompt, initialvalue)
    Returns the entered string or None if cancelled. An optional
    ``validate`` callback returns an error message to keep the dialog open.
    """

    @staticmethod
    def ask_string(
        parent: tk.Widget,
        title: str,
        prompt: str,
        initialvalue: str = "",
        validate: Optional[Callable[[str], Optional[str]]] = None,
    ) -> str | None:
        top = tk.Toplevel(parent)
        top.title(title)
        top.transient(parent.winfo_toplevel())
        top.resizable(True, False)

        container = ttk.Frame(top, padding=(12, 10))
        container.grid(row=0, column=0, sticky="nsew")
        top.columnconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        ttk.Label(container, text=prompt).grid(row=0, column=0, sticky="w", pady=(0, 6))

        var = tk.StringVar(value=str(initialvalue or ""))
        entry = ttk.Entry(container, textvariable=var, width=48)
        entry.grid(row=1, column=0, sticky="ew")

        error_var = tk.StringVar(value="")
        ttk.Label(container, textvariable=error_var, foreground="#CC0000").grid(row=2, column=0, sticky="w")

        btns = ttk.Frame(container)
        btns.grid(row=3, column=0, sticky="e", pady=(10, 0))

        result: list[str | None] = [None]

        def _ok() -> None:
            value = var.get()
            if not value.strip():
                error_var.set("Name must not be empty")
                return
            if validate:
                problem = validate(value)
                if problem:
                    error_var.set(problem)
                    return
            result[0] = value
            top.destroy()

        def _cancel() -> None:
            result[0] = None
            top.destroy()

        ttk.Button(btns, text="Cancel", command=_cancel).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="OK", style="Accent.TButton", command=_ok).grid(row=0, column=1)

        entry.bind("<Return>", lambda _e: _ok())
        entry.bind("<Escape>", lambda _e: _cancel())
        top.protocol("WM_DELETE_WINDOW", _cancel)

        entry.focus_set()
        entry.selection_range(0, tk.END)

        # Center over parent toplevel
        top.update_idletasks()
        w, h = 420, max(130, top.winfo_height())
        pr = parent.winfo_toplevel()
        x = pr.winfo_rootx() + (pr.winfo_width() - w) // 2
        y = pr.winfo_rooty() + (pr.winfo_height() - h) // 3
        top.geometry(f"{w}x{h}+{max(x, 0)}+{max(y, 0)}")
        top.minsize(360, 120)

        try:
            top.grab_set()
        except tk.TclError:
            # Another grab is active (e.g. window not yet viewable)
            pass
        top.wait_window(top)
        return result[0]
