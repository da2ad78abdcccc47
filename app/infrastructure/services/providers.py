"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for argument resolution.
"""

from functools import lru_cache
from typing import Optional, Sequence

from infrastructure.commands.awaiting import AwaitingRegistry
from infrastructure.commands.collector import ArgumentCollector, ArgumentDefinition
from infrastructure.commands.registry import TypeRegistry
from infrastructure.configuration import Settings
from infrastructure.platforms.transport import MessageTransport


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_type_registry() -> TypeRegistry:
    """
    Get application-scoped argument type registry singleton.

    The built-in types are registered. Platform-backed types such as ``user``
    need a directory and are added by the platform provider:

        get_type_registry().register_factory(lambda reg: UserArgumentType(directory))

    Returns:
        TypeRegistry: Cached registry with the default types.
    """
    return TypeRegistry().register_defaults()


@lru_cache
def get_awaiting_registry() -> AwaitingRegistry:
    """
    Get the process-wide registry of users currently answering prompts.

    The dispatcher and every collector must share this instance.
    """
    return AwaitingRegistry()


def build_argument_collector(
    transport: MessageTransport,
    args: Sequence[ArgumentDefinition],
    registry: Optional[TypeRegistry] = None,
    awaiting: Optional[AwaitingRegistry] = None,
    settings: Optional[Settings] = None,
) -> ArgumentCollector:
    """Build a collector wired to the application's settings and registries.

    Args:
        transport: Transport used to send prompts and await replies.
        args: Argument definitions in positional order.
        registry: Type registry (defaults to the application registry).
        awaiting: Awaiting registry (defaults to the application registry).
        settings: Settings supplying the prompt limit, default wait and
            quote handling.

    Returns:
        ArgumentCollector: Collector ready for ``obtain``.
    """
    settings = settings or get_settings()
    return ArgumentCollector(
        registry or get_type_registry(),
        transport,
        args,
        prompt_limit=settings.arguments.effective_prompt_limit,
        awaiting=awaiting or get_awaiting_registry(),
        default_wait=settings.arguments.default_wait,
        allow_single_quotes=settings.arguments.allow_single_quotes,
    )
