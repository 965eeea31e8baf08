from .config import SDK_CONFIG, AppConfig
from .registry import REGISTRY, Registry
from .runtime import ValidationSession, check_events, create_source

__all__ = [
    "SDK_CONFIG",
    "AppConfig",
    "REGISTRY",
    "Registry",
    "ValidationSession",
    "check_events",
    "create_source",
]
