"""Modal text editor for one configuration entry."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from dd_switch.core.services.model_format import validate_json
from dd_switch.ui.controllers.switch_controller import OperationResult

logger = logging.getLogger(__name__)

__all__ = ["EditorDialog"]


class EditorDialog:
    """Edits raw entry text.

    Invalid JSON is flagged below the editor but never blocks saving; the
    store treats content as opaque text.
    """

    def __init__(
        self,
        parent: tk.Widget,
        name: str,
        content: str,
        on_save: Callable[[str], OperationResult],
        on_normalize: Optional[Callable[[], OperationResult]] = None,
    ) -> None:
        self.parent = parent
        self.on_save = on_save
        self.on_normalize = on_normalize
        self.saved = False

        self.top = tk.Toplevel(parent)
        self.top.title(f"Edit: {name}")
        self.top.transient(parent.winfo_toplevel())
        self.top.geometry("640x520")
        self.top.minsize(420, 300)
        self.top.protocol("WM_DELETE_WINDOW", self.close)

        self._build(content)
        self._check_json()

    def _build(self, content: str) -> None:
        frame = ttk.Frame(self.top, padding=(10, 8))
        frame.pack(fill="both", expand=True)
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(0, weight=1)

        self.text = tk.Text(frame, wrap="none", undo=True, font=("TkFixedFont", 10))
        self.text.grid(row=0, column=0, sticky="nsew")
        yscroll = ttk.Scrollbar(frame, orient="vertical", command=self.text.yview)
        yscroll.grid(row=0, column=1, sticky="ns")
        xscroll = ttk.Scrollbar(frame, orient="horizontal", command=self.text.xview)
        xscroll.grid(row=1, column=0, sticky="ew")
        self.text.configure(yscrollcommand=yscroll.set, xscrollcommand=xscroll.set)
        self._set_text(content)
        self.text.bind("<<Modified>>", self._on_modified)

        self.status_var = tk.StringVar(value="")
        self.status_label = ttk.Label(frame, textvariable=self.status_var)
        self.status_label.grid(row=2, column=0, columnspan=2, sticky="w", pady=(6, 0))

        buttons = ttk.Frame(frame)
        buttons.grid(row=3, column=0, columnspan=2, sticky="ew", pady=(8, 0))
        if self.on_normalize is not None:
            ttk.Button(buttons, text="Normalize models", command=self._normalize).pack(side="left")
        ttk.Button(buttons, text="Save", style="Accent.TButton", command=self._save).pack(side="right")
        ttk.Button(buttons, text="Cancel", command=self.close).pack(side="right", padx=(0, 6))

        self.top.bind("<Control-s>", lambda _e: self._save())
        self.top.bind("<Escape>", lambda _e: self.close())

    def _set_text(self, content: str) -> None:
        self.text.delete("1.0", tk.END)
        self.text.insert("1.0", content)
        self.text.edit_modified(False)
        self.text.edit_reset()

    def get_text(self) -> str:
        # Text always appends a trailing newline of its own
        return self.text.get("1.0", "end-1c")

    def _on_modified(self, _event=None) -> None:
        if self.text.edit_modified():
            self._check_json()
            self.text.edit_modified(False)

    def _check_json(self) -> None:
        problem = validate_json(self.get_text())
        if problem:
            self.status_var.set(f"Not valid JSON: {problem}")
            self.status_label.configure(foreground="#CC6600")
        else:
            self.status_var.set("Valid JSON")
            self.status_label.configure(foreground="#00AA00")

    def _save(self) -> None:
        result = self.on_save(self.get_text())
        if result.success:
            self.saved = True
            self.close()
        else:
            self.status_var.set(result.message)
            self.status_label.configure(foreground="#CC0000")

    def _normalize(self) -> None:
        # Normalising works on the stored file, so unsaved edits go first
        saved = self.on_save(self.get_text())
        if not saved.success:
            self.status_var.set(saved.message)
            return
        result = self.on_normalize()  # type: ignore[misc]
        if result.success and result.details:
            self._set_text(result.details.get("content", self.get_text()))
            self.saved = True
        self.status_var.set(result.message)

    def show(self) -> bool:
        """Block until closed; True when something was saved."""
        try:
            self.top.grab_set()
        except tk.TclError:
            pass
        self.text.focus_set()
        self.top.wait_window(self.top)
        return self.saved

    def close(self) -> None:
        self.top.destroy()
