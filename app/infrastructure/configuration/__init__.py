"""Infrastructure configuration module - public API.

This module provides centralized configuration management using Pydantic
BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    CommandArgumentSettings: Argument resolution settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    # Access settings
    wait = settings.arguments.default_wait
    limit = settings.arguments.effective_prompt_limit
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features.commands import CommandArgumentSettings

__all__ = ["Settings", "CommandArgumentSettings"]
