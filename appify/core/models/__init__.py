"""
Domain models — types shared by the generator, loaders and UIs.

    from appify.core.models import AppConfig, Permission, GeneratedFile, Target
"""

from appify.core.models.artifact import GeneratedFile, Target
from appify.core.models.config import AppConfig, Permission

__all__ = [
    # config.py
    "AppConfig",
    # artifact.py
    "GeneratedFile",
    "Permission",
    "Target",
]
