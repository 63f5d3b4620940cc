# -*- coding: utf-8 -*-
"""Tk-based GUI front-end for DD Switch.

Main application widget: toolbar, configuration list, per-entry actions and
a status bar. Exposes the :class:`DDSwitchApp` widget, which is instantiated
by ``run.py``. All state changes go through :class:`SwitchController`; the
view re-reads the list and the active marker after every action.
"""

from __future__ import annotations

import logging
import tkinter as tk
from pathlib import Path
from tkinter import messagebox, ttk
from typing import Optional

from dd_switch.config import ConfigManager
from dd_switch.core.context import AppContext, create_app_context
from dd_switch.core.models import SyncStatus
from dd_switch.ui.controllers import OperationResult, SwitchController
from dd_switch.ui.dialogs import EditorDialog, RenameDialog, SettingsDialog
from dd_switch.ui.widgets import ConfigListWidget
from dd_switch.version import get_app_version

logger = logging.getLogger(__name__)

__all__ = ["DDSwitchApp"]


class DDSwitchApp:
    """Main application widget wrapping all Tkinter UI components."""

    SYNC_HINTS = {
        SyncStatus.DRIFTED: "Live settings differ from the active configuration. Apply again to sync.",
        SyncStatus.LIVE_MISSING: "Live settings file is missing. Apply a configuration to recreate it.",
    }

    def __init__(self, root: tk.Tk, context: Optional[AppContext] = None):
        self.root = root
        self.controller = SwitchController(context or create_app_context())
        ui_config = ConfigManager().get_ui_config()
        self._status_timeout_ms = int(ui_config.get("status_timeout_ms", 2000))
        self._status_job: Optional[str] = None

        self._build_ui()

        startup = self.controller.ensure_root()
        if not startup.success:
            self._set_warning(f"{startup.message}. Check Settings.")
        self.refresh()
        self._offer_adopt_live()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(2, weight=1)

        header = ttk.Frame(self.root, padding=(10, 8))
        header.grid(row=0, column=0, sticky="ew")
        header.columnconfigure(1, weight=1)
        ttk.Label(header, text="DD Switch", font=("TkDefaultFont", 14, "bold")).grid(row=0, column=0, sticky="w")
        ttk.Label(header, text=get_app_version(), foreground="#888888").grid(row=0, column=1, sticky="w", padx=(6, 0))
        ttk.Button(header, text="⚙", width=3, command=self.open_settings).grid(row=0, column=2, padx=(0, 4))
        ttk.Button(header, text="↓ Import", command=self.import_current).grid(row=0, column=3, padx=(0, 4))
        ttk.Button(header, text="+", width=3, style="Accent.TButton", command=self.create_config).grid(row=0, column=4)

        self.warning_var = tk.StringVar(value="")
        self.warning_label = ttk.Label(self.root, textvariable=self.warning_var, foreground="#CC6600",
                                       padding=(10, 0), wraplength=520)
        self.warning_label.grid(row=1, column=0, sticky="ew")

        self.list_widget = ConfigListWidget(
            self.root,
            on_selection_changed=self._on_selection_changed,
            on_double_click=self.edit_config,
            on_reorder=self.reorder,
            on_context_menu=self._show_context_menu,
        )
        self.list_widget.grid(row=2, column=0, sticky="nsew", padx=10)

        actions = ttk.Frame(self.root, padding=(10, 8))
        actions.grid(row=3, column=0, sticky="ew")
        self.apply_btn = ttk.Button(actions, text="▶ Apply", style="Accent.TButton",
                                    command=lambda: self._with_selected(self.apply_config))
        self.apply_btn.pack(side="left")
        for label, handler in (
            ("✎ Edit", self.edit_config),
            ("Rename", self.rename_config),
            ("⧉ Duplicate", self.duplicate_config),
            ("🗑 Delete", self.delete_config),
        ):
            ttk.Button(actions, text=label, command=lambda h=handler: self._with_selected(h)).pack(side="left", padx=(6, 0))

        self.status_var = tk.StringVar(value="")
        ttk.Label(self.root, textvariable=self.status_var, padding=(10, 4), relief="sunken").grid(
            row=4, column=0, sticky="ew"
        )

        self.menu = tk.Menu(self.root, tearoff=0)
        self.menu.add_command(label="Apply", command=lambda: self._with_selected(self.apply_config))
        self.menu.add_command(label="Edit", command=lambda: self._with_selected(self.edit_config))
        self.menu.add_command(label="Rename", command=lambda: self._with_selected(self.rename_config))
        self.menu.add_command(label="Duplicate", command=lambda: self._with_selected(self.duplicate_config))
        self.menu.add_separator()
        self.menu.add_command(label="Delete", command=lambda: self._with_selected(self.delete_config))

    # ------------------------------------------------------------------
    # View refresh
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        entries = self.controller.list_configs()
        active = self.controller.get_active()
        self.list_widget.populate(entries, active)
        self._update_apply_button()

        if not self.controller.check_root_exists():
            self._set_warning(f"Configuration folder not found: {self.controller.effective_root()}")
        else:
            self._set_warning(self.SYNC_HINTS.get(self.controller.sync_status(), ""))

    def _set_warning(self, text: str) -> None:
        self.warning_var.set(text)

    def show_status(self, message: str) -> None:
        self.status_var.set(message)
        if self._status_job is not None:
            self.root.after_cancel(self._status_job)
        self._status_job = self.root.after(self._status_timeout_ms, lambda: self.status_var.set(""))

    def _report(self, result: OperationResult, refresh: bool = True) -> OperationResult:
        if result.success:
            self.show_status(result.message)
        else:
            messagebox.showerror("DD Switch", result.message, parent=self.root)
        if refresh:
            self.refresh()
        return result

    def _update_apply_button(self) -> None:
        selected = self.list_widget.get_selected()
        is_active = selected is not None and selected == self.controller.get_active()
        self.apply_btn.configure(text="✓ Applied" if is_active else "▶ Apply",
                                 state="disabled" if is_active or selected is None else "normal")

    def _on_selection_changed(self, path: Optional[str]) -> None:
        self._update_apply_button()

    def _with_selected(self, handler) -> None:
        path = self.list_widget.get_selected()
        if path is None:
            self.show_status("Select a configuration first")
            return
        handler(path)

    def _show_context_menu(self, _path: str, x: int, y: int) -> None:
        try:
            self.menu.tk_popup(x, y)
        finally:
            self.menu.grab_release()

    def _offer_adopt_live(self) -> None:
        """On start, if nothing is active but an entry equals the live file, mark it active."""
        if self.controller.get_active() is not None:
            return
        result = self.controller.adopt_live()
        if result.success:
            logger.info("Adopted live settings as active: %s", result.details)
            self.show_status(result.message)
            self.refresh()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def create_config(self) -> None:
        name = RenameDialog.ask_string(self.root, "New configuration", "Configuration name:")
        if name is None:
            return
        self._report(self.controller.create(name))

    def apply_config(self, path: str) -> None:
        self._report(self.controller.apply(path))

    def edit_config(self, path: str) -> None:
        opened = self.controller.read(path)
        if not opened.success:
            self._report(opened)
            return
        entry_name = Path(path).stem
        dialog = EditorDialog(
            self.root,
            entry_name,
            opened.details["content"],
            on_save=lambda text: self.controller.save(path, text),
            on_normalize=lambda: self.controller.normalize(path),
        )
        if dialog.show():
            self.show_status(f"Saved: {entry_name}")
        self.refresh()

    def rename_config(self, path: str) -> None:
        current = next((e.name for e in self.controller.list_configs() if e.path == path), "")
        new_name = RenameDialog.ask_string(self.root, "Rename configuration", "New name:", current)
        if new_name is None or new_name.strip() == current:
            return
        self._report(self.controller.rename(path, new_name))

    def duplicate_config(self, path: str) -> None:
        self._report(self.controller.duplicate(path))

    def delete_config(self, path: str) -> None:
        name = next((e.name for e in self.controller.list_configs() if e.path == path), path)
        if not messagebox.askyesno("Delete configuration", f"Delete '{name}'?", parent=self.root):
            return
        self._report(self.controller.delete(path))

    def reorder(self, names) -> None:
        result = self.controller.reorder(list(names))
        if result.success:
            self._update_apply_button()
        else:
            self._report(result)

    def import_current(self) -> None:
        self._report(self.controller.import_current())

    def open_settings(self) -> None:
        current = self.controller.get_settings().get("root")
        default_root = str(self.controller.context.resolver.default_root)
        value = SettingsDialog.ask_root(self.root, current, default_root)
        if value is None:
            return
        self._report(self.controller.set_root(value))
