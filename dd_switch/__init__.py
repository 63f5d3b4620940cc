"""Top-level package for DD Switch.

DD Switch keeps several named configuration files for one tool and switches
between them by copying the chosen one into the tool's live settings file.
Front-ends should depend on the public API exposed here rather than on
internal modules.
"""

from .core.context import AppContext, create_app_context
from .core.models import ConfigEntry

__all__: list[str] = [
    "AppContext",
    "ConfigEntry",
    "create_app_context",
]
