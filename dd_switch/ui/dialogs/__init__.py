from .rename_dialog import RenameDialog
from .editor_dialog import EditorDialog
from .settings_dialog import SettingsDialog

__all__ = ["RenameDialog", "EditorDialog", "SettingsDialog"]
