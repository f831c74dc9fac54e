from .exec_core import ExecPlatformCore, export_constants
from .asgi_core import AsgiPlatformCore, load_core_app

__all__ = [
    "AsgiPlatformCore",
    "ExecPlatformCore",
    "export_constants",
    "load_core_app",
]
