import tkinter as tk

import pytest

from dd_switch.core.models import ConfigEntry
from dd_switch.ui.widgets.config_list_widget import ConfigListWidget


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


pytestmark = pytest.mark.skipif(
    not _can_create_tk_root(),
    reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
)


@pytest.fixture
def tk_root():
    root = tk.Tk()
    root.withdraw()
    yield root
    try:
        root.update_idletasks()
    except tk.TclError:
        pass
    root.destroy()


ENTRIES = [
    ConfigEntry("claude", "/c/claude.json"),
    ConfigEntry("gpt-4", "/c/gpt-4.json"),
    ConfigEntry("misc", "/c/misc.json"),
]


def test_populate_marks_active(tk_root):
    widget = ConfigListWidget(tk_root)
    widget.populate(ENTRIES, "/c/gpt-4.json")

    assert list(widget.tree.get_children()) == [e.path for e in ENTRIES]
    assert widget.tree.set("/c/gpt-4.json", "status") == ConfigListWidget.ACTIVE_LABEL
    assert widget.tree.set("/c/claude.json", "status") == ""
    assert "active" in widget.tree.item("/c/gpt-4.json", "tags")


def test_populate_keeps_selection(tk_root):
    widget = ConfigListWidget(tk_root)
    widget.populate(ENTRIES, None)
    widget.tree.selection_set("/c/misc.json")

    widget.populate(ENTRIES, None)

    assert widget.get_selected() == "/c/misc.json"


def test_drop_submits_full_order(tk_root):
    received = []
    widget = ConfigListWidget(tk_root, on_reorder=received.append)
    widget.populate(ENTRIES, None)

    # Simulate the drag: rows move locally, one submit on release
    widget._drag_item = "/c/misc.json"
    widget.tree.move("/c/misc.json", "", 0)
    widget._drag_moved = True
    widget._on_drag_release(None)

    assert received == [["misc", "claude", "gpt-4"]]


def test_click_without_move_does_not_submit(tk_root):
    received = []
    widget = ConfigListWidget(tk_root, on_reorder=received.append)
    widget.populate(ENTRIES, None)
    widget._drag_item = "/c/claude.json"
    widget._on_drag_release(None)
    assert received == []


def test_icons():
    assert ConfigListWidget.icon_for("Claude-Prod") == "🅒"
    assert ConfigListWidget.icon_for("openai") == "⬡"
    assert ConfigListWidget.icon_for("local") == ConfigListWidget.DEFAULT_ICON
