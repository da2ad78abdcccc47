"""
Dependency injection services.

Provides provider functions for application-scoped singletons.
"""

from infrastructure.services.providers import (
    build_argument_collector,
    get_awaiting_registry,
    get_settings,
    get_type_registry,
)

__all__ = [
    "build_argument_collector",
    "get_awaiting_registry",
    "get_settings",
    "get_type_registry",
]
