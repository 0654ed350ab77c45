"""Configuration system for kbengine."""

from .factory import ComponentFactory
from .models import ComponentConfig, EngineConfig
from .settings import Settings, load_settings, settings

__all__ = [
    "ComponentConfig",
    "EngineConfig",
    "ComponentFactory",
    "Settings",
    "load_settings",
    "settings",
]
