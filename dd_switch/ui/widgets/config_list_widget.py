"""Configuration list widget.

Shows the managed entries in display order with an indicator on the active
one, and supports drag-and-drop reordering. Dragging only moves rows
locally; on release the full name sequence is handed to ``on_reorder`` in a
single call.
"""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, List, Optional

from dd_switch.core.models import ConfigEntry

logger = logging.getLogger(__name__)


class ConfigListWidget(ttk.Frame):
    """Treeview of configuration entries.

    Provides:
    - Active entry marker and bold styling
    - Drag-and-drop reorder (submitted once, on drop)
    - Selection, double-click and context-menu callbacks
    """

    ICONS = {
        "claude": "🅒",
        "anthropic": "🅒",
        "gpt": "⬡",
        "openai": "⬡",
        "gemini": "◆",
        "google": "◆",
        "aws": "▣",
        "amazon": "▣",
    }
    DEFAULT_ICON = "◎"
    ACTIVE_LABEL = "✓ active"

    def __init__(
        self,
        parent: tk.Widget,
        on_selection_changed: Optional[Callable[[Optional[str]], None]] = None,
        on_double_click: Optional[Callable[[str], None]] = None,
        on_reorder: Optional[Callable[[List[str]], None]] = None,
        on_context_menu: Optional[Callable[[str, int, int], None]] = None,
    ):
        """Initialize the list widget.

        Args:
            parent: Parent widget
            on_selection_changed: Called with the selected entry path (or None)
            on_double_click: Called with the entry path on double click
            on_reorder: Called with the complete name order after a drop
            on_context_menu: Called with (path, x_root, y_root) on right click
        """
        super().__init__(parent)
        self.on_selection_changed = on_selection_changed
        self.on_double_click = on_double_click
        self.on_reorder = on_reorder
        self.on_context_menu = on_context_menu

        self._entries: Dict[str, ConfigEntry] = {}  # iid (path) -> entry
        self._active: Optional[str] = None
        self._drag_item: Optional[str] = None
        self._drag_moved = False

        self._setup_ui()

    def _setup_ui(self) -> None:
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.tree = ttk.Treeview(self, columns=("status",), show="tree headings", selectmode="browse")
        self.tree.grid(row=0, column=0, sticky="nsew")
        self.tree.heading("#0", text="Configuration", anchor="w")
        self.tree.heading("status", text="", anchor="center")
        self.tree.column("#0", width=320, minwidth=160)
        self.tree.column("status", width=90, minwidth=70, anchor="center", stretch=False)

        scrollbar = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        scrollbar.grid(row=0, column=1, sticky="ns")
        self.tree.configure(yscrollcommand=scrollbar.set)

        self.empty_label = ttk.Label(
            self,
            text="No configurations yet.\nClick + to create one, or Import to snapshot the current settings.",
            justify="center",
            foreground="#888888",
        )

        self.tree.tag_configure("active", font=("TkDefaultFont", 10, "bold"))
        self.tree.bind("<<TreeviewSelect>>", self._on_select)
        self.tree.bind("<Double-1>", self._on_double)
        self.tree.bind("<ButtonPress-1>", self._on_drag_start)
        self.tree.bind("<B1-Motion>", self._on_drag_motion)
        self.tree.bind("<ButtonRelease-1>", self._on_drag_release)
        self.tree.bind("<Button-3>", self._on_right_click)

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------
    def populate(self, entries: List[ConfigEntry], active: Optional[str]) -> None:
        """Rebuild rows from *entries*, keeping the selection when possible."""
        selected = self.get_selected()
        self.tree.delete(*self.tree.get_children())
        self._entries = {e.path: e for e in entries}
        self._active = active

        for entry in entries:
            is_active = entry.path == active
            self.tree.insert(
                "",
                "end",
                iid=entry.path,
                text=f"{self.icon_for(entry.name)}  {entry.name}",
                values=(self.ACTIVE_LABEL if is_active else "",),
                tags=("active",) if is_active else (),
            )

        if entries:
            self.empty_label.place_forget()
        else:
            self.empty_label.place(relx=0.5, rely=0.4, anchor="center")

        if selected and selected in self._entries:
            self.tree.selection_set(selected)
            self.tree.see(selected)

    @classmethod
    def icon_for(cls, name: str) -> str:
        lowered = name.lower()
        for key, icon in cls.ICONS.items():
            if key in lowered:
                return icon
        return cls.DEFAULT_ICON

    def get_selected(self) -> Optional[str]:
        selection = self.tree.selection()
        return selection[0] if selection else None

    def current_order(self) -> List[str]:
        return [self._entries[iid].name for iid in self.tree.get_children() if iid in self._entries]

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _on_select(self, _event=None) -> None:
        if self.on_selection_changed:
            self.on_selection_changed(self.get_selected())

    def _on_double(self, event) -> None:
        iid = self.tree.identify_row(event.y)
        if iid and self.on_double_click:
            self.on_double_click(iid)

    def _on_right_click(self, event) -> None:
        iid = self.tree.identify_row(event.y)
        if not iid:
            return
        self.tree.selection_set(iid)
        if self.on_context_menu:
            self.on_context_menu(iid, event.x_root, event.y_root)

    def _on_drag_start(self, event) -> None:
        self._drag_item = self.tree.identify_row(event.y) or None
        self._drag_moved = False

    def _on_drag_motion(self, event) -> None:
        if not self._drag_item:
            return
        target = self.tree.identify_row(event.y)
        if target and target != self._drag_item:
            self.tree.move(self._drag_item, "", self.tree.index(target))
            self._drag_moved = True

    def _on_drag_release(self, _event) -> None:
        moved, self._drag_moved = self._drag_moved, False
        self._drag_item = None
        if moved and self.on_reorder:
            order = self.current_order()
            logger.debug("Drop: submitting order %s", order)
            self.on_reorder(order)
