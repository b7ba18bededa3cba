"""
Domain models — Pydantic types for the explorer.

All models are re-exported here for convenient access:

    from bndx.core.models import ModuleDescriptor, CookState, ExplorerConfig
"""

from bndx.core.models.config import ExplorerConfig
from bndx.core.models.module import CookState, ModuleDescriptor

__all__ = [
    # config.py
    "ExplorerConfig",
    # module.py
    "CookState",
    "ModuleDescriptor",
]
