"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.commands import CommandArgumentSettings

__all__ = [
    "CommandArgumentSettings",
]
