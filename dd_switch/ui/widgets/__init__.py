from .config_list_widget import ConfigListWidget

__all__ = ["ConfigListWidget"]
